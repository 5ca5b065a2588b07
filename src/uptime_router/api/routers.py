from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from uptime_router.dependencies import get_alert_router
from uptime_router.router import AlertRouter

router = APIRouter(tags=["notify"])


@router.post("/", include_in_schema=False)
@router.post(
    "/api/notifyRouter",
    responses={
        204: {"description": "No route configured for the alert"},
        401: {"description": "Invalid or missing key"},
        500: {"description": "Configuration, extraction or delivery failure"},
    },
)
async def notify_router(
    request: Request,
    key: str | None = Query(default=None),
    alert_router: AlertRouter = Depends(get_alert_router),
) -> Response:
    body = await request.body()
    outcome = await alert_router.handle(key, body)
    if outcome.status_code == 204:
        return Response(status_code=204)
    return PlainTextResponse(outcome.body, status_code=outcome.status_code)
