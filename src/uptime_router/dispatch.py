"""Concurrent fan-out of one rendered message to several chats."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Protocol

from uptime_router.errors import DispatchError
from uptime_router.logging import SimpleLogger, get_logger


class MessageSender(Protocol):
    async def send_message(
        self,
        chat_id: str,
        text: str,
        *,
        parse_mode: str | None = None,
    ) -> Any: ...


@dataclass(slots=True)
class DispatchResult:
    delivered: list[str] = field(default_factory=list)
    failures: dict[str, BaseException] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


async def dispatch(
    sender: MessageSender,
    chat_ids: list[str],
    text: str,
    *,
    parse_mode: str | None = None,
    logger: SimpleLogger | None = None,
) -> DispatchResult:
    """Send ``text`` to every chat concurrently and wait for all of them.

    Every send runs to completion. If any destination failed a
    ``DispatchError`` listing all failures is raised, so partial delivery
    is reported as a failed request.
    """
    logger = logger or get_logger(__name__)
    results = await asyncio.gather(
        *(sender.send_message(chat_id, text, parse_mode=parse_mode) for chat_id in chat_ids),
        return_exceptions=True,
    )

    outcome = DispatchResult()
    for chat_id, result in zip(chat_ids, results):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            outcome.failures[chat_id] = result
            logger.warning(
                "DISPATCH_FAILED",
                chat_id=chat_id,
                error_type=type(result).__name__,
                error_message=str(result),
            )
        else:
            outcome.delivered.append(chat_id)

    if not outcome.ok:
        raise DispatchError(outcome.failures, total=len(chat_ids))
    return outcome
