import logging
import uuid
from freeproduct.middlewares.request_context import request_context


class RequestContextFilter(logging.Filter):
    def filter(self, record):
        record.request_id = request_context.request_id or str(uuid.uuid4())
        record.request_method = request_context.request_method or ''
        record.request_path = request_context.request_path or ''
        return True


class CartContextFilter(logging.Filter):
    """Stamps store, quote and rule being processed onto every record"""

    def filter(self, record):
        record.store_id = request_context.store_id if request_context.store_id is not None else ''
        record.quote_id = request_context.quote_id or ''
        record.rule_id = request_context.rule_id if request_context.rule_id is not None else ''
        return True
