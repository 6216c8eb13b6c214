"""PIN gate for the private part of the collection."""

from __future__ import annotations

import re

from linkminder.core.errors import PinError
from linkminder.core.logging import get_logger
from linkminder.db.kv import KeyValueStore
from linkminder.utils.hashing import digest_matches, salted_sha256

logger = get_logger(__name__)

PIN_KEY = "linkminder.privatePin"
_PIN_RE = re.compile(r"[0-9]{4}")


class PinStore:
    """Stores a salted digest of the 4-digit PIN, never the PIN itself."""

    def __init__(self, kv: KeyValueStore, salt: str) -> None:
        self.kv = kv
        self.salt = salt

    def has_pin(self) -> bool:
        return bool(self.kv.get(PIN_KEY))

    def verify_pin(self, pin: str | None) -> bool:
        stored = self.kv.get(PIN_KEY)
        if not stored or not pin:
            return False
        return digest_matches(pin, self.salt, stored)

    def require(self, pin: str | None) -> None:
        """Raise ``PinError`` unless ``pin`` unlocks the private area."""
        if not self.has_pin():
            raise PinError("No private PIN has been set.")
        if not self.verify_pin(pin):
            logger.info("Rejected private PIN")
            raise PinError("PIN does not match.")

    def set_pin(self, pin: str, current: str | None = None) -> None:
        if not _PIN_RE.fullmatch(pin or ""):
            raise PinError("PIN must be exactly 4 digits.")
        if self.has_pin() and not self.verify_pin(current):
            raise PinError("Current PIN does not match.")
        self.kv.set(PIN_KEY, salted_sha256(pin, self.salt))
        logger.info("Private PIN updated")


__all__ = ["PIN_KEY", "PinStore"]
