import uvicorn

from uptime_router.app import create_app
from uptime_router.settings import get_settings


def run() -> None:
    """Console entry point: serve the router with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "uptime_router.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


app = create_app()
