"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from linkminder.capture.pipeline import SavePipeline
from linkminder.core.config import Settings, get_settings
from linkminder.core.logging import get_logger
from linkminder.db.kv import KeyValueStore
from linkminder.db.sqlite import SQLiteDatabase
from linkminder.storage import LinkStore, PinStore, RuleStore
from linkminder.utils.ids import new_nonce

logger = get_logger(__name__)

NONCE_KEY = "linkminder.nonce"

_DB: SQLiteDatabase | None = None
_PIN_STORE: PinStore | None = None
_PIPELINE: SavePipeline | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_database() -> SQLiteDatabase:
    global _DB
    if _DB is None:
        settings = get_app_settings()
        db = SQLiteDatabase(settings.db_path)
        db.ensure_schema()
        _DB = db
    return _DB


def get_kv_store() -> KeyValueStore:
    return KeyValueStore(get_database())


def get_link_store() -> LinkStore:
    return LinkStore(get_kv_store())


def get_rule_store() -> RuleStore:
    return RuleStore(get_kv_store())


def resolve_install_nonce(settings: Settings, kv: KeyValueStore) -> str:
    """Configured nonce wins; otherwise one is generated once and persisted."""
    if settings.install_nonce:
        return settings.install_nonce
    nonce = kv.get(NONCE_KEY)
    if not nonce:
        nonce = new_nonce()
        kv.set(NONCE_KEY, nonce)
        logger.info("Generated install nonce")
    return nonce


def get_pin_store() -> PinStore:
    global _PIN_STORE
    if _PIN_STORE is None:
        kv = get_kv_store()
        _PIN_STORE = PinStore(kv, salt=resolve_install_nonce(get_app_settings(), kv))
    return _PIN_STORE


def get_save_pipeline() -> SavePipeline:
    global _PIPELINE
    if _PIPELINE is None:
        _PIPELINE = SavePipeline(
            link_store=get_link_store(),
            rule_store=get_rule_store(),
            settings=get_app_settings(),
        )
    return _PIPELINE


__all__ = [
    "get_app_settings",
    "get_database",
    "get_kv_store",
    "get_link_store",
    "get_rule_store",
    "get_pin_store",
    "get_save_pipeline",
    "resolve_install_nonce",
]
