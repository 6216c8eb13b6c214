"""ID helpers."""

from __future__ import annotations

import secrets
import uuid


def new_id() -> str:
    """Random identifier for links and user rules."""
    return str(uuid.uuid4())


def new_nonce() -> str:
    """Install-time nonce used to salt stored PIN digests."""
    return secrets.token_urlsafe(24)
