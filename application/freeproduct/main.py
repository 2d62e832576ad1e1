from contextlib import asynccontextmanager
import os

from fastapi import FastAPI
from dotenv import load_dotenv

from freeproduct.logging.utils import initialize_logging, get_app_logger
from freeproduct.connections.database import create_tables, close_db_pool

load_dotenv()

# Initialize Sentry before the app is built
from freeproduct.config.sentry import init_sentry
init_sentry()

initialize_logging()
logger = get_app_logger('freeproduct.main')

# DEBUG=false means production
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

logger.info(f"Running in {'debug' if DEBUG else 'production'} mode")


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Starting Freeproduct service")
    create_tables()
    yield
    logger.info("Shutting down Freeproduct service")
    close_db_pool()

docs_url = "/docs" if DEBUG else None
redoc_url = "/redoc" if DEBUG else None

app = FastAPI(
    title="Freeproduct",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url
)

# Store and request context for every request
from freeproduct.middlewares.store_context import StoreContextMiddleware
app.add_middleware(StoreContextMiddleware)

# Register custom exception handlers
from freeproduct.middlewares.handlers import register_exception_handlers
register_exception_handlers(app)

# Routes
from freeproduct.routes.app import app_router
from freeproduct.routes.admin import admin_router
from freeproduct.routes.health import router as health_router

app.include_router(app_router, prefix="/app/v1")
app.include_router(admin_router, prefix="/admin/v1")
app.include_router(health_router, tags=["health"])
