"""
Binds the current store and request id to the request context.
"""
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from freeproduct.logging.utils import get_app_logger
from freeproduct.middlewares.request_context import RequestContext, set_request_context, create_request_id, request_context

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()

STORE_HEADER = "x-store-id"


class StoreContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.logger = get_app_logger('freeproduct.requests')
        self.exclude_paths = exclude_paths or ['/health', '/docs', '/redoc', '/openapi.json']

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        set_request_context(RequestContext())
        create_request_id()
        request_context.request_method = request.method
        request_context.request_path = request.url.path
        request_context.store_id = self._resolve_store_id(request)

        if any(request.url.path.startswith(p) for p in self.exclude_paths):
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration = (time.time() - start_time) * 1000
        self.logger.info(f"request_completed | method={request.method} path={request.url.path} status={response.status_code} duration_ms={duration:.0f}")
        return response

    def _resolve_store_id(self, request: Request) -> int:
        raw = request.headers.get(STORE_HEADER, "")
        try:
            return int(raw)
        except ValueError:
            if raw:
                self.logger.warning(f"invalid_store_header | value={raw} fallback={configs.DEFAULT_STORE_ID}")
            return configs.DEFAULT_STORE_ID
