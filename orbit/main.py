from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import BaseModel

from orbit.api import block, chat, meetup, user
from orbit.config import Settings
from orbit.logging_config import setup_logging
from orbit.services.directory import OrbitDirectory


class HealthCheckResponseSchema(BaseModel):
    success: bool


def create_app(
    settings: Settings | None = None, directory: OrbitDirectory | None = None
) -> FastAPI:
    """Create the Orbit HTTP application.

    Args:
        settings: Application settings; read from the environment if omitted
        directory: Directory to serve; built from ``settings`` if omitted

    Returns:
        The configured FastAPI application
    """
    settings = settings or Settings.from_environ()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_file)
        if getattr(app.state, "directory", None) is None:
            app.state.directory = OrbitDirectory.from_settings(settings)
        yield

    app = FastAPI(title="Orbit", lifespan=lifespan)
    app.state.directory = directory

    @app.get("/api/health", response_model=HealthCheckResponseSchema)
    async def health_check() -> HealthCheckResponseSchema:
        return HealthCheckResponseSchema(success=True)

    for router in (user.router, meetup.router, chat.router, block.router):
        app.include_router(router, prefix="/api")
    return app


app = create_app()
