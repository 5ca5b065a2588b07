"""Telegram message rendering."""

from __future__ import annotations

import re

MARKDOWN_V2 = "MarkdownV2"

# Characters Telegram's MarkdownV2 parser reserves outside entities.
MARKDOWN_V2_RESERVED = "_*[]()~`>#+-=|{}.!"

# an even run of backslashes (possibly empty) escapes nothing, so the char after it is bare
_ESCAPE_RE = re.compile(r"(?<!\\)((?:\\\\)*)([" + re.escape(MARKDOWN_V2_RESERVED) + r"])")
_TRAILING_BACKSLASHES_RE = re.compile(r"\\+$")


def truncate(text: str, max_length: int) -> str:
    return text[:max_length]


def escape_markdown_v2(text: str) -> str:
    """Backslash-prefix every reserved character.

    A character preceded by an odd run of backslashes is already escaped and is
    left alone, so escaping escaped text returns it unchanged. After an even
    run (``\\\\_``) the backslashes escape each other and the character is
    escaped.
    """
    return _ESCAPE_RE.sub(r"\1\\\2", text)


def _clip_escaped(text: str, max_length: int) -> str:
    clipped = text[:max_length]
    # an odd run of trailing backslashes would escape whatever follows
    trailing = _TRAILING_BACKSLASHES_RE.search(clipped)
    if trailing and len(trailing.group(0)) % 2 == 1:
        clipped = clipped[:-1]
    return clipped


def render_markdown_v2(site_name: str, site_url: str | None, message: str, max_length: int) -> str:
    header = "🚨 *Uptime alert*"
    fields = [f"*Site:* {escape_markdown_v2(site_name)}"]
    if site_url:
        fields.append(f"*URL:* {escape_markdown_v2(site_url)}")
    prefix = "\n".join([header, *fields]) + "\n\n"

    body = escape_markdown_v2(truncate(message, max_length))
    budget = max(max_length - len(prefix), 0)
    return _clip_escaped(prefix + _clip_escaped(body, budget), max_length)


def render_message(
    site_name: str,
    site_url: str | None,
    message: str,
    max_length: int,
    parse_mode: str = "",
) -> str:
    """Text sent to Telegram; never longer than ``max_length``."""
    if parse_mode == MARKDOWN_V2:
        return render_markdown_v2(site_name, site_url, message, max_length)
    return truncate(message, max_length)
