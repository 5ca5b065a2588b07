"""Console structured logging."""

from uptime_router.logging.logger import SimpleLogger, get_logger

__all__ = ["SimpleLogger", "get_logger"]
