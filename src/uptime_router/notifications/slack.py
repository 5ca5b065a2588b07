"""Error reports via a Slack incoming webhook."""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx

from uptime_router.errors import describe_error
from uptime_router.logging import SimpleLogger, get_logger

STACK_TRACE_LIMIT = 2000


def _error_stack(error: BaseException | str | None) -> str:
    if isinstance(error, BaseException) and error.__traceback__ is not None:
        try:
            return "".join(traceback.format_exception(type(error), error, error.__traceback__))
        except Exception:  # noqa: BLE001
            return "".join(traceback.format_tb(error.__traceback__))
    return "No stack trace available"


@dataclass(frozen=True)
class SlackErrorNotifier:
    """Posts router failures to Slack.

    Notes:
    - The webhook URL is a secret; inject it through ``SLACK_ERROR_WEBHOOK_URL``.
    - ``notify`` never raises; delivery problems are only logged.
    """

    webhook_url: str
    project_name: str = "uptime-periphery"
    project_url: str = ""
    timeout: float = 5.0
    logger: SimpleLogger = field(default_factory=lambda: get_logger(__name__), compare=False, repr=False)

    def build_payload(self, error: BaseException | str | None, now: datetime | None = None) -> dict[str, Any]:
        timestamp = (now or datetime.now(timezone.utc)).isoformat()
        context = "Check logs in the hosting platform."
        if self.project_url:
            context += f"\n\nProject: {self.project_url}"
        return {
            "text": f"🚨 Error executing the webhook for {self.project_name}",
            "blocks": [
                {
                    "type": "header",
                    "text": {
                        "type": "plain_text",
                        "text": f"🚨 Webhook Error - {self.project_name}",
                        "emoji": True,
                    },
                },
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": f"*Error executing the webhook for {self.project_name}*\n\n{context}",
                    },
                },
                {
                    "type": "section",
                    "fields": [
                        {"type": "mrkdwn", "text": f"*Error Message:*\n```{describe_error(error)}```"},
                        {"type": "mrkdwn", "text": f"*Timestamp:*\n{timestamp}"},
                    ],
                },
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": f"*Stack Trace:*\n```{_error_stack(error)[:STACK_TRACE_LIMIT]}```",
                    },
                },
            ],
        }

    async def notify(self, error: BaseException | str | None) -> None:
        if not self.webhook_url:
            self.logger.warning("Missing environment variable: SLACK_ERROR_WEBHOOK_URL")
            return

        try:
            payload = self.build_payload(error)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                r = await client.post(self.webhook_url, json=payload)
            if not r.is_success:
                self.logger.error("SLACK_NOTIFY_FAILED", status_code=r.status_code, response=r.text[:300])
        except Exception as exc:  # noqa: BLE001
            self.logger.error("SLACK_NOTIFY_ERROR", error_type=type(exc).__name__, error_message=str(exc))
