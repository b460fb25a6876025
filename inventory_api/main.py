# inventory_api/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from inventory_api.api.error_handlers import register_exception_handlers
from inventory_api.api.routers import products
from inventory_api.core.config import Settings, get_settings
from inventory_api.core.logging import get_logger, setup_logging
from inventory_api.core.metrics import Metrics
from inventory_api.db.session_async import Database
from inventory_api.middleware import ObservabilityMiddleware, PayloadLimitMiddleware

logger = get_logger(__name__)

# --- Metadatos de la API para la documentación ---
TAGS_METADATA = [
    {"name": "products", "description": "Inventario de productos, historial de stock e import/export CSV."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.db
    await database.create_all()
    logger.info("Database ready", extra={"database_url": database.engine.url.render_as_string(hide_password=True)})
    yield
    await database.dispose()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        description=(
            "API de inventario.\n\n"
            "- **Products**: CRUD, filtros, orden y paginación.\n"
            "- **History**: auditoría de cambios de stock.\n"
            "- **Import/Export**: carga y descarga masiva en CSV."
        ),
        openapi_tags=TAGS_METADATA,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = database or Database.from_settings(settings)
    app.state.metrics = Metrics(settings)

    # --- Middlewares ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PayloadLimitMiddleware, max_bytes=settings.MAX_REQUEST_SIZE_BYTES)
    app.add_middleware(ObservabilityMiddleware, metrics=app.state.metrics)

    register_exception_handlers(app)

    # --- Routers ---
    app.include_router(products.router, prefix=settings.API_PREFIX)

    @app.get("/", include_in_schema=False)
    def root():
        return {"status": "ok", "docs_url": "/docs", "redoc_url": "/redoc"}

    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "ok"}

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        payload, content_type = app.state.metrics.export()
        return Response(content=payload, media_type=content_type)

    return app


app = create_app()
