from fastapi import FastAPI

from uptime_router import __version__
from uptime_router.api.routers import router as notify_router
from uptime_router.router import AlertRouter
from uptime_router.settings import RouterSettings, get_settings


def create_app(
    settings: RouterSettings | None = None,
    alert_router: AlertRouter | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Settings are resolved once here and shared read-only by every request.
    """
    settings = settings or get_settings()
    app = FastAPI(title="Uptime Router", version=__version__)
    app.state.settings = settings
    app.state.alert_router = alert_router or AlertRouter(settings)

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(notify_router)

    return app
