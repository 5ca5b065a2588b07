"""Static routing tables from alert keys to Telegram chats."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

RouteTarget = Union[str, tuple[str, ...]]

# Endpoint URL substring -> required environment key(s) holding the chat id.
URL_PATTERN_TO_ENV_KEY: dict[str, RouteTarget] = {
    "1click.chaindefuser.com": "TELEGRAM_CHAT_NEAR",
    "backend.bungee.exchange": "TELEGRAM_CHAT_BUNGEE",
}

# Site-name prefix -> required environment key(s). Used by the legacy name strategy.
NAME_PREFIX_TO_ENV_KEY: dict[str, RouteTarget] = {
    "NEAR": "TELEGRAM_CHAT_NEAR",
    "Bungee": "TELEGRAM_CHAT_BUNGEE",
    "Across": "TELEGRAM_CHAT_ACROSS",
    "LI.FI": "TELEGRAM_CHAT_LIFI",
}


def unique_destinations(chat_ids: Iterable[str | None]) -> list[str]:
    """Drop empty ids and duplicates, keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for chat_id in chat_ids:
        value = (chat_id or "").strip()
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


@dataclass(frozen=True)
class RoutingTable:
    """Ordered pattern table; the first matching entry wins.

    ``mode="url"`` matches by substring containment, ``mode="name"`` by
    case-insensitive prefix.
    """

    entries: Mapping[str, RouteTarget]
    mode: str = "url"
    _entries: tuple[tuple[str, tuple[str, ...]], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.mode not in ("url", "name"):
            raise ValueError(f"Unsupported routing mode: {self.mode!r}")
        normalized = tuple(
            (pattern, (target,) if isinstance(target, str) else tuple(target))
            for pattern, target in self.entries.items()
        )
        object.__setattr__(self, "_entries", normalized)
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @classmethod
    def for_strategy(cls, strategy: str) -> "RoutingTable":
        if strategy == "name":
            return cls(NAME_PREFIX_TO_ENV_KEY, mode="name")
        return cls(URL_PATTERN_TO_ENV_KEY, mode="url")

    @property
    def patterns(self) -> list[str]:
        return [pattern for pattern, _ in self._entries]

    def _matches(self, pattern: str, key: str) -> bool:
        if self.mode == "url":
            return pattern in key
        return key.lower().startswith(pattern.lower())

    def match(self, key: str | None) -> tuple[str, ...] | None:
        """Environment keys of the first entry matching ``key``."""
        if not key:
            return None
        for pattern, env_keys in self._entries:
            if self._matches(pattern, key):
                return env_keys
        return None

    def resolve(self, key: str | None, env: Mapping[str, str]) -> list[str] | None:
        """Chat ids for ``key``, or ``None`` when no route is configured."""
        env_keys = self.match(key)
        if env_keys is None:
            return None
        return unique_destinations(env.get(env_key) for env_key in env_keys)
