"""Hashing utilities."""

from __future__ import annotations

import hashlib
import hmac


def salted_sha256(value: str, salt: str) -> str:
    """Return hex digest of ``salt:value``."""
    return hashlib.sha256(f"{salt}:{value}".encode("utf-8")).hexdigest()


def digest_matches(value: str, salt: str, expected: str) -> bool:
    return hmac.compare_digest(salted_sha256(value, salt), expected)
