import pytest

from uptime_router.settings import RouterSettings, SlackSettings, TelegramSettings

TELEGRAM_API = "https://api.telegram.org"
BOT_TOKEN = "123:abc"
SEND_MESSAGE_URL = f"{TELEGRAM_API}/bot{BOT_TOKEN}/sendMessage"
SLACK_WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXX"


def make_settings(
    *,
    secret: str = "s3cret",
    slack_url: str = "",
    strategy: str = "url",
    parse_mode: str = "",
    max_length: int = 4000,
    **chats: str,
) -> RouterSettings:
    telegram = TelegramSettings(
        TELEGRAM_BOT_TOKEN=BOT_TOKEN,
        TELEGRAM_CHAT_NEAR=chats.get("near", "D1"),
        TELEGRAM_CHAT_BUNGEE=chats.get("bungee", "D2"),
        TELEGRAM_CHAT_ACROSS=chats.get("across", "D3"),
        TELEGRAM_CHAT_LIFI=chats.get("lifi", "D4"),
        TELEGRAM_API_BASE_URL=TELEGRAM_API,
        TELEGRAM_PARSE_MODE=parse_mode,
    )
    return RouterSettings(
        ROUTER_SECRET=secret,
        ROUTING_STRATEGY=strategy,
        MESSAGE_MAX_LENGTH=max_length,
        telegram=telegram,
        slack=SlackSettings(SLACK_ERROR_WEBHOOK_URL=slack_url),
    )


@pytest.fixture
def settings() -> RouterSettings:
    return make_settings()
