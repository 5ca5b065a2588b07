from uptime_router.telegram.client import TelegramBotClient

__all__ = ["TelegramBotClient"]
