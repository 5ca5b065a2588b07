"""Simple console logger with ``key=value`` structured fields."""

import logging
import sys
from typing import Any

from uptime_router.errors import describe_error


class SimpleLogger:
    """Simple console logger."""

    def __init__(
        self,
        name: str = "uptime_router",
        console_output: bool = True,
        log_level: int = logging.INFO,
    ) -> None:
        """Initialize the logger.

        Args:
            name: logger name
            console_output: whether to attach a stdout handler
            log_level: log level
        """
        self.name = name
        self.console_output = console_output
        self.log_level = log_level

        self.logger = logging.getLogger(name)
        self.logger.setLevel(log_level)
        self.logger.handlers.clear()

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_level)
            console_format = logging.Formatter(
                "[%(asctime)s] %(levelname)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
            console_handler.setFormatter(console_format)
            self.logger.addHandler(console_handler)

    def info(self, message: str, **extra: Any) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, **extra: Any) -> None:
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, exc_info: bool = False, **extra: Any) -> None:
        self._log(logging.ERROR, message, extra, exc_info=exc_info)

    def debug(self, message: str, **extra: Any) -> None:
        self._log(logging.DEBUG, message, extra)

    def _log(
        self,
        level: int,
        message: str,
        extra: dict[str, Any],
        exc_info: bool = False,
    ) -> None:
        # structured fields are appended to the message and attached to the record
        if extra:
            extra_str = " | ".join(f"{k}={v}" for k, v in extra.items())
            full_message = f"{message} | {extra_str}"
        else:
            full_message = message

        self.logger.log(level, full_message, exc_info=exc_info, extra=extra)

    # ─────────────────────────────────────────────────────────────────
    # Router events
    # ─────────────────────────────────────────────────────────────────

    def log_route_miss(self, key: str | None, patterns: list[str], **extra: Any) -> None:
        """No routing entry matched; the alert is skipped."""
        self.info(
            "ROUTE_MISS",
            routing_key=key or "N/A",
            available_patterns=", ".join(patterns),
            **extra,
        )

    def log_dispatch(self, site_name: str, site_url: str | None, targets: list[str], **extra: Any) -> None:
        self.info(
            "DISPATCH",
            site_name=site_name,
            site_url=site_url or "N/A",
            targets=",".join(targets),
            **extra,
        )

    def log_request_failed(self, error: BaseException, **extra: Any) -> None:
        self.error(
            "REQUEST_FAILED",
            error_type=type(error).__name__,
            error_message=describe_error(error),
            exc_info=True,
            **extra,
        )


def get_logger(name: str = "uptime_router", level: str | int = logging.INFO) -> SimpleLogger:
    """Return a logger instance.

    Args:
        name: logger name
        level: level name (``"INFO"``) or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    return SimpleLogger(name=name, log_level=level)
