"""API integration tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from linkminder.app import app

PIN = {"X-LinkMinder-Pin": "2468"}


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


def _save(client: TestClient, url: str, title: str = "", **trigger) -> dict:
    resp = client.post("/links/save", json={"tab": {"url": url, "title": title, "id": 3, "windowId": 1}, "trigger": trigger})
    assert resp.status_code == 200, resp.text
    return resp.json()["record"]


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_save_and_list_flow(client: TestClient) -> None:
    record = _save(client, "https://github.com/foo/bar", "bar: a tool", reason="popup")
    assert record["category"] == "개발"
    assert record["ruleId"] == "dev-github"
    assert record["confidence"] == pytest.approx(0.65)

    _save(client, "https://github.com/foo/bar#install", "bar: a tool")
    links = client.get("/links").json()
    assert len(links) == 1
    assert links[0]["id"] == record["id"]

    tree = client.get("/links/tree", params={"grouping": "cluster"}).json()
    assert tree[0]["label"] == "개발"


def test_save_rejections(client: TestClient) -> None:
    resp = client.post("/links/save", json={"tab": {"url": "chrome://extensions"}})
    assert resp.status_code == 400
    assert "Internal" in resp.json()["detail"]

    assert client.post("/links/save", json={}).status_code == 400
    assert client.get("/links").json() == []


def test_link_mutations(client: TestClient) -> None:
    record = _save(client, "https://example.com/a", "A page")
    link_id = record["id"]

    assert client.post(f"/links/{link_id}/archive").json()["archived"] is True
    assert client.get("/links").json() == []
    assert len(client.get("/links", params={"archived": True}).json()) == 1

    resp = client.put(f"/links/{link_id}/note", json={"note": "later"})
    assert resp.json()["note"] == "later"

    assert client.delete(f"/links/{link_id}").json() == {"status": "ok", "total": 0}
    assert client.delete(f"/links/{link_id}").status_code == 404


def test_rules_crud(client: TestClient) -> None:
    listing = client.get("/rules").json()
    assert listing["custom"] == []
    assert [rule["id"] for rule in listing["defaults"]][0] == "dev-github"

    assert client.post("/rules", json={"category": "문서"}).status_code == 422
    assert client.post("/rules", json={"category": "없음", "keywords": ["x"]}).status_code == 422

    resp = client.post(
        "/rules",
        json={"id": "notion", "category": "문서", "tags": "notes, wiki", "hostIncludes": "notion.so"},
    )
    assert resp.status_code == 200
    custom = resp.json()["custom"]
    assert custom == [
        {"id": "notion", "label": None, "category": "문서", "tags": ["notes", "wiki"], "hostIncludes": ["notion.so"]}
    ]

    record = _save(client, "https://www.notion.so/page", "Team wiki")
    assert record["ruleId"] == "notion"

    assert client.delete("/rules/notion").json()["custom"] == []
    assert client.delete("/rules/notion").status_code == 404


def test_private_area_requires_pin(client: TestClient) -> None:
    assert client.get("/pin").json() == {"hasPin": False}
    assert client.get("/links", params={"scope": "private"}).status_code == 403

    assert client.post("/pin", json={"pin": "12"}).status_code == 403
    assert client.post("/pin", json={"pin": "2468"}).json() == {"hasPin": True}
    assert client.post("/pin/verify", json={"pin": "2468"}).json() == {"match": True}
    assert client.post("/pin/verify", json={"pin": "0000"}).json() == {"match": False}

    record = _save(client, "https://example.com/secret", "Secret", makePrivate=True)
    assert record["private"] is True

    assert client.get("/links", params={"scope": "private"}, headers={"X-LinkMinder-Pin": "0000"}).status_code == 403
    private = client.get("/links", params={"scope": "private"}, headers=PIN).json()
    assert [link["url"] for link in private] == ["https://example.com/secret"]
    assert client.get("/links").json() == []

    assert client.post(f"/links/{record['id']}/private").status_code == 403
    assert client.post(f"/links/{record['id']}/private", headers=PIN).json()["private"] is False


def test_export_import_round_trip(client: TestClient) -> None:
    _save(client, "https://github.com/foo/bar", "bar")
    _save(client, "https://example.com/blog/post", "A post")
    exported = client.post("/links/export", json={"scope": "public"}).json()
    assert exported["version"] == 1
    assert exported["scope"] == "public"
    assert len(exported["links"]) == 2

    for link in exported["links"]:
        client.delete(f"/links/{link['id']}")

    resp = client.post("/links/import", json={"document": exported})
    assert resp.json() == {"imported": 2, "total": 2}
    restored = {(link["url"], link["category"], tuple(link["tags"])) for link in client.get("/links").json()}
    assert restored == {(link["url"], link["category"], tuple(link["tags"])) for link in exported["links"]}


def test_import_errors(client: TestClient) -> None:
    assert client.post("/links/import", json={"document": {"nope": True}}).status_code == 400
    resp = client.post("/links/import", json={"document": [{"url": "https://example.com"}], "targetPrivate": True})
    assert resp.status_code == 403
    assert client.get("/links").json() == []
    assert client.post("/links/export", json={"scope": "private"}).status_code == 403


def test_metrics(client: TestClient) -> None:
    _save(client, "https://github.com/foo/bar", "bar")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "lnkm_links_saved_total" in resp.text
    assert "lnkm_cluster_decisions_total" in resp.text



def test_resave_cannot_make_private_link_public(client: TestClient) -> None:
    client.post("/pin", json={"pin": "2468"})
    _save(client, "https://example.com/secret", "Secret", makePrivate=True)

    record = _save(client, "https://example.com/secret#again", "Secret", reason="popup", makePrivate=False)

    assert record["private"] is True
    assert client.get("/links").json() == []
    assert len(client.get("/links", params={"scope": "private"}, headers=PIN).json()) == 1


def test_private_link_mutations_require_pin(client: TestClient) -> None:
    client.post("/pin", json={"pin": "2468"})
    link_id = _save(client, "https://example.com/secret", "Secret", makePrivate=True)["id"]

    assert client.post(f"/links/{link_id}/archive").status_code == 403
    assert client.put(f"/links/{link_id}/note", json={"note": "x"}).status_code == 403
    assert client.delete(f"/links/{link_id}").status_code == 403

    assert client.post(f"/links/{link_id}/archive", headers=PIN).json()["archived"] is True
    assert client.put(f"/links/{link_id}/note", json={"note": "x"}, headers=PIN).json()["note"] == "x"
    assert client.delete(f"/links/{link_id}", headers=PIN).json() == {"status": "ok", "total": 0}


def test_import_with_malformed_meta_is_accepted(client: TestClient) -> None:
    resp = client.post("/links/import", json={"document": [{"url": "https://example.com/a", "meta": "oops"}]})
    assert resp.status_code == 200
    assert client.get("/links").json()[0]["meta"] == {}
