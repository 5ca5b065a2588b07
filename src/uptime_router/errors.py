"""Exception types raised by the router pipeline."""

from __future__ import annotations


class RouterError(Exception):
    """Base class for failures that end in a 500 response."""


class ConfigurationError(RouterError):
    """One or more required environment variables are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing environment variables: {', '.join(self.missing)}")


class TelegramAPIError(RouterError):
    """Telegram answered ``sendMessage`` with a non-success status."""

    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text
        super().__init__(text or f"Telegram API returned HTTP {status_code}")


class DispatchError(RouterError):
    """At least one destination of a fan-out failed."""

    def __init__(self, failures: dict[str, BaseException], total: int) -> None:
        self.failures = dict(failures)
        self.total = total
        details = "; ".join(f"{chat_id}: {exc}" for chat_id, exc in self.failures.items())
        super().__init__(f"{len(self.failures)}/{total} Telegram deliveries failed ({details})")


def describe_error(error: BaseException | str | None) -> str:
    """Message text for ``error``; never raises, even for a broken ``__str__``."""
    try:
        text = str(error) if error is not None else ""
    except Exception:  # noqa: BLE001
        text = ""
    if text:
        return text
    return type(error).__name__ if isinstance(error, BaseException) else "Unknown error"
