from uptime_router.notifications.slack import SlackErrorNotifier

__all__ = ["SlackErrorNotifier"]
