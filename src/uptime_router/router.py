"""Request pipeline: authenticate, extract, route, render, fan out."""

from __future__ import annotations

import hmac
from collections.abc import Callable
from dataclasses import dataclass

from uptime_router.dispatch import MessageSender, dispatch
from uptime_router.errors import describe_error
from uptime_router.extraction import extract_message, extract_site_name, extract_url, parse_body
from uptime_router.formatting import render_message
from uptime_router.logging import SimpleLogger, get_logger
from uptime_router.notifications.slack import SlackErrorNotifier
from uptime_router.routing import RoutingTable
from uptime_router.settings import RouterSettings
from uptime_router.telegram.client import TelegramBotClient


@dataclass(frozen=True)
class RouteOutcome:
    status_code: int
    body: str = ""


OK = RouteOutcome(200, "ok")
NO_ROUTE = RouteOutcome(204)
NOT_AUTHORIZED = RouteOutcome(401, "Not Authorized")


class AlertRouter:
    """Handles one Upptime webhook call.

    The router holds no per-request state; a single instance serves every
    request for the lifetime of the app.
    """

    def __init__(
        self,
        settings: RouterSettings,
        *,
        routing_table: RoutingTable | None = None,
        notifier: SlackErrorNotifier | None = None,
        sender_factory: Callable[[str], MessageSender] | None = None,
        logger: SimpleLogger | None = None,
    ) -> None:
        self.settings = settings
        self.routing_table = routing_table or RoutingTable.for_strategy(settings.routing_strategy)
        self.logger = logger or get_logger("uptime_router", settings.log_level)
        self.notifier = notifier or SlackErrorNotifier(
            webhook_url=settings.slack.error_webhook_url,
            project_name=settings.project_name,
            project_url=settings.project_url,
            timeout=settings.slack.timeout_seconds,
            logger=self.logger,
        )
        self._sender_factory = sender_factory or self._telegram_client

    def _telegram_client(self, token: str) -> TelegramBotClient:
        return TelegramBotClient(
            token=token,
            base_url=self.settings.telegram.api_base_url,
            timeout=self.settings.telegram.timeout_seconds,
        )

    def _routing_key(self, site_url: str | None, site_name: str) -> str | None:
        if self.routing_table.mode == "name":
            return site_name
        return site_url

    async def handle(self, key: str | None, body: bytes | str) -> RouteOutcome:
        try:
            return await self._handle(key, body)
        except Exception as exc:  # noqa: BLE001
            self.logger.log_request_failed(exc)
            await self.notifier.notify(exc)
            return RouteOutcome(500, f"Error handling request: {describe_error(exc)}")

    async def _handle(self, key: str | None, body: bytes | str) -> RouteOutcome:
        env = self.settings.require()

        if not hmac.compare_digest((key or "").encode(), env["ROUTER_SECRET"].encode()):
            return NOT_AUTHORIZED

        payload = parse_body(body)
        self.logger.debug("PAYLOAD_RECEIVED", payload_type=type(payload).__name__)

        message = extract_message(payload)
        site_url = extract_url(message)
        site_name = extract_site_name(message)
        self.logger.info("MESSAGE_EXTRACTED", site_name=site_name, site_url=site_url or "N/A")

        routing_key = self._routing_key(site_url, site_name)
        chat_ids = self.routing_table.resolve(routing_key, env)
        if not chat_ids:
            self.logger.log_route_miss(routing_key, self.routing_table.patterns)
            return NO_ROUTE

        parse_mode = self.settings.telegram.parse_mode
        text = render_message(site_name, site_url, message, self.settings.message_max_length, parse_mode)
        self.logger.log_dispatch(site_name, site_url, chat_ids)

        sender = self._sender_factory(env["TELEGRAM_BOT_TOKEN"])
        try:
            await dispatch(sender, chat_ids, text, parse_mode=parse_mode or None, logger=self.logger)
        finally:
            aclose = getattr(sender, "aclose", None)
            if aclose is not None:
                await aclose()
        return OK
