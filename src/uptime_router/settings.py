from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from uptime_router.errors import ConfigurationError


class TelegramSettings(BaseSettings):
    """Telegram bot credentials and per-route chat ids."""

    bot_token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN", repr=False)
    chat_near: str = Field(default="", alias="TELEGRAM_CHAT_NEAR")
    chat_bungee: str = Field(default="", alias="TELEGRAM_CHAT_BUNGEE")
    chat_across: str = Field(default="", alias="TELEGRAM_CHAT_ACROSS")
    chat_lifi: str = Field(default="", alias="TELEGRAM_CHAT_LIFI")
    api_base_url: str = Field(
        default="https://api.telegram.org",
        alias="TELEGRAM_API_BASE_URL",
    )
    parse_mode: Literal["", "MarkdownV2"] = Field(
        default="",
        alias="TELEGRAM_PARSE_MODE",
        description="Empty sends the alert text as-is; MarkdownV2 renders an escaped template.",
    )
    timeout_seconds: float = Field(default=10.0, alias="TELEGRAM_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class SlackSettings(BaseSettings):
    """Slack incoming webhook used for error reports."""

    error_webhook_url: str = Field(default="", alias="SLACK_ERROR_WEBHOOK_URL", repr=False)
    timeout_seconds: float = Field(default=5.0, alias="SLACK_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class RouterSettings(BaseSettings):
    """Top-level router configuration."""

    router_secret: str = Field(default="", alias="ROUTER_SECRET", repr=False)
    routing_strategy: Literal["url", "name"] = Field(default="url", alias="ROUTING_STRATEGY")
    message_max_length: int = Field(
        default=4000,
        alias="MESSAGE_MAX_LENGTH",
        gt=0,
        le=4096,
        description="Telegram rejects messages longer than 4096 characters.",
    )
    project_name: str = Field(default="uptime-periphery", alias="ERROR_PROJECT_NAME")
    project_url: str = Field(
        default="https://github.com/cowprotocol/uptime-periphery",
        alias="ERROR_PROJECT_URL",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    slack: SlackSettings = Field(default_factory=SlackSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def required_values(self) -> dict[str, str]:
        """Required values keyed by their environment variable name."""
        return {
            "ROUTER_SECRET": self.router_secret,
            "TELEGRAM_BOT_TOKEN": self.telegram.bot_token,
            "TELEGRAM_CHAT_NEAR": self.telegram.chat_near,
            "TELEGRAM_CHAT_BUNGEE": self.telegram.chat_bungee,
            "TELEGRAM_CHAT_ACROSS": self.telegram.chat_across,
            "TELEGRAM_CHAT_LIFI": self.telegram.chat_lifi,
        }

    def missing_required(self) -> list[str]:
        return [name for name, value in self.required_values().items() if not value]

    def require(self) -> dict[str, str]:
        """Return the required values, raising if any of them is empty."""
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(missing)
        return self.required_values()


@lru_cache(maxsize=1)
def get_settings() -> RouterSettings:
    """Load settings once per process."""
    return RouterSettings()
