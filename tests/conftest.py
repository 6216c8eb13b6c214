"""Test fixtures for LinkMinder."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


def _reset_singletons() -> None:
    from linkminder.api import dependencies as deps
    from linkminder.core.config import get_settings

    if deps._DB is not None:
        deps._DB.close()
    deps.get_app_settings.cache_clear()
    get_settings.cache_clear()
    deps._DB = None
    deps._PIN_STORE = None
    deps._PIPELINE = None


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("LNKM_DB_PATH", str(tmp_path / "linkminder.db"))
    monkeypatch.delenv("LNKM_CONFIG", raising=False)
    monkeypatch.delenv("LNKM_INSTALL_NONCE", raising=False)
    _reset_singletons()
    yield
    _reset_singletons()


@pytest.fixture
def kv(tmp_path: Path):
    from linkminder.db.kv import KeyValueStore
    from linkminder.db.sqlite import SQLiteDatabase

    db = SQLiteDatabase(tmp_path / "store.db")
    db.ensure_schema()
    yield KeyValueStore(db)
    db.close()


@pytest.fixture
def link_store(kv):
    from linkminder.storage.links import LinkStore

    return LinkStore(kv)


@pytest.fixture
def rule_store(kv):
    from linkminder.storage.rules import RuleStore

    return RuleStore(kv)


@pytest.fixture
def pin_store(kv):
    from linkminder.storage.pins import PinStore

    return PinStore(kv, salt="test-nonce")


@pytest.fixture
def make_record():
    from linkminder.models.entities import Cluster, LinkRecord

    counter = {"n": 0}

    def _make(url: str, **overrides):
        counter["n"] += 1
        fields = {
            "id": f"link-{counter['n']}",
            "url": url,
            "title": overrides.pop("title", url),
            "created_at": "2024-05-01T10:00:00.000Z",
            "updated_at": "2024-05-01T10:00:00.000Z",
        }
        keywords = overrides.pop("cluster_keywords", None)
        if keywords is not None:
            fields["cluster"] = Cluster(
                id=overrides.pop("cluster_id", f"cluster-{counter['n']}"),
                label=" · ".join(keywords[:2]),
                keywords=list(keywords),
                size=overrides.pop("cluster_size", 1),
            )
        fields.update(overrides)
        return LinkRecord(**fields)

    return _make
