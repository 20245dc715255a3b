"""Escaping and truncation of untrusted text embedded in the badge."""

from __future__ import annotations

import html

ORG_NAME_LIMIT = 32
USERNAME_LIMIT = 22
ELLIPSIS = "…"


def escape_markup(text: str) -> str:
    """Replace the five reserved markup characters with entities."""
    return html.escape(text, quote=True)


def _safe_cut(escaped: str, length: int) -> str:
    """Cut ``escaped`` to ``length`` characters without splitting an entity."""
    head = escaped[:length]
    amp = head.rfind("&")
    if amp != -1 and ";" not in head[amp:]:
        head = head[:amp]
    return head


def sanitize(text: str, max_length: int) -> str:
    """Escape ``text`` and truncate it to at most ``max_length`` characters.

    Truncated values end with a single ellipsis character.
    """
    if max_length < 1:
        raise ValueError("max_length must be at least 1")
    escaped = escape_markup(text)
    if len(escaped) <= max_length:
        return escaped
    return _safe_cut(escaped, max_length - 1) + ELLIPSIS
