from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure import database
from app.infrastructure.logging_config import configure_logging
from app.infrastructure.notifications import ConnectionRegistry, HeartbeatScheduler
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos y el latido de los flujos; libera todo al cerrar."""

    database.initialize_database()
    heartbeat: HeartbeatScheduler = app.state.heartbeat_scheduler
    heartbeat.start()
    try:
        yield
    finally:
        await heartbeat.stop()
        database.engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Complaint Desk API", lifespan=lifespan)

    # Una única instancia por proceso, compartida por todos los flujos.
    registry = ConnectionRegistry(
        max_connections_per_user=settings.max_connections_per_user
    )
    app.state.connection_registry = registry
    app.state.heartbeat_scheduler = HeartbeatScheduler(
        registry, interval=settings.heartbeat_interval_seconds
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
