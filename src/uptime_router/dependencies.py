from fastapi import Request

from uptime_router.router import AlertRouter


def get_alert_router(request: Request) -> AlertRouter:
    return request.app.state.alert_router
