import json
from datetime import datetime, timezone

import httpx
import pytest
import respx
from httpx import Response

from conftest import SLACK_WEBHOOK
from uptime_router.notifications.slack import STACK_TRACE_LIMIT, SlackErrorNotifier


def _raised(message: str) -> RuntimeError:
    try:
        raise RuntimeError(message)
    except RuntimeError as exc:
        return exc


def test_build_payload_structure() -> None:
    notifier = SlackErrorNotifier(
        webhook_url=SLACK_WEBHOOK,
        project_name="uptime-periphery",
        project_url="https://github.com/cowprotocol/uptime-periphery",
    )
    now = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    payload = notifier.build_payload(_raised("boom"), now=now)

    assert payload["text"] == "🚨 Error executing the webhook for uptime-periphery"
    header, context, fields, stack = payload["blocks"]
    assert header["text"]["text"] == "🚨 Webhook Error - uptime-periphery"
    assert "https://github.com/cowprotocol/uptime-periphery" in context["text"]["text"]
    assert fields["fields"][0]["text"] == "*Error Message:*\n```boom```"
    assert fields["fields"][1]["text"] == "*Timestamp:*\n2026-01-02T03:04:05+00:00"
    assert "RuntimeError: boom" in stack["text"]["text"]


def test_stack_trace_is_truncated() -> None:
    payload = SlackErrorNotifier(webhook_url=SLACK_WEBHOOK).build_payload(_raised("x" * 5000))

    stack_text = payload["blocks"][3]["text"]["text"]
    assert len(stack_text) <= len("*Stack Trace:*\n``````") + STACK_TRACE_LIMIT


def test_error_without_traceback() -> None:
    payload = SlackErrorNotifier(webhook_url=SLACK_WEBHOOK).build_payload("plain failure")

    assert payload["blocks"][2]["fields"][0]["text"] == "*Error Message:*\n```plain failure```"
    assert "No stack trace available" in payload["blocks"][3]["text"]["text"]


@pytest.mark.asyncio
@respx.mock
async def test_notify_posts_to_webhook() -> None:
    route = respx.post(SLACK_WEBHOOK).mock(return_value=Response(200, text="ok"))

    await SlackErrorNotifier(webhook_url=SLACK_WEBHOOK).notify(_raised("boom"))

    assert route.call_count == 1
    body = json.loads(route.calls.last.request.content)
    assert body["blocks"][0]["type"] == "header"


@pytest.mark.asyncio
@respx.mock
async def test_notify_without_webhook_url_is_skipped() -> None:
    await SlackErrorNotifier(webhook_url="").notify(_raised("boom"))

    assert not respx.calls


@pytest.mark.asyncio
@respx.mock
async def test_notify_swallows_non_success_status() -> None:
    respx.post(SLACK_WEBHOOK).mock(return_value=Response(500, text="invalid_payload"))

    await SlackErrorNotifier(webhook_url=SLACK_WEBHOOK).notify(_raised("boom"))


@pytest.mark.asyncio
@respx.mock
async def test_notify_swallows_transport_errors() -> None:
    respx.post(SLACK_WEBHOOK).mock(side_effect=httpx.ConnectError("connection refused"))

    await SlackErrorNotifier(webhook_url=SLACK_WEBHOOK).notify(_raised("boom"))


class _UnprintableError(Exception):
    def __str__(self) -> str:
        raise RuntimeError("cannot render")


@pytest.mark.asyncio
@respx.mock
async def test_notify_survives_error_with_broken_str() -> None:
    route = respx.post(SLACK_WEBHOOK).mock(return_value=Response(200, text="ok"))
    try:
        raise _UnprintableError()
    except _UnprintableError as exc:
        error = exc

    await SlackErrorNotifier(webhook_url=SLACK_WEBHOOK).notify(error)

    body = json.loads(route.calls.last.request.content)
    assert body["blocks"][2]["fields"][0]["text"] == "*Error Message:*\n```_UnprintableError```"
