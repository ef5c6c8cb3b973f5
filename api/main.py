from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common.core.config import settings
from common.core.constants import Environment
from common.db.session import dispose_engine
from api.errors import register_exception_handlers
from api.v1.routes.router import api_router
from internal.routes.router import internal_router

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from common.core.otel_exporter import _initialize_telemetry, get_logger

_initialize_telemetry()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting application...")
    yield
    # Shutdown
    logger.info("Shutting down application...")
    await dispose_engine()


# Only expose OpenAPI docs in local development
is_local = settings.environment == Environment.LOCAL

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    description="Subscription spend aggregator",
    lifespan=lifespan,
    docs_url="/docs" if is_local else None,
    redoc_url="/redoc" if is_local else None,
    openapi_url="/openapi.json" if is_local else None,
)

register_exception_handlers(app)

# Instrument FastAPI with OpenTelemetry
FastAPIInstrumentor.instrument_app(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")

# Probes live at root level, outside /api/v1
app.include_router(internal_router)
