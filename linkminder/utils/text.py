"""Text processing helpers."""

from __future__ import annotations

import re
from typing import Iterable

WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Collapse whitespace and strip; ``None`` becomes an empty string."""
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def split_list(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma separated field into trimmed non-empty items."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [item.strip() for item in items if item and item.strip()]
