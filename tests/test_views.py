"""Tests for list filters and tree groupings."""

from datetime import datetime, timezone

from linkminder.views import build_tree, filter_links


def test_filter_links(make_record) -> None:
    links = [
        make_record("https://example.com/a", title="FastAPI tips", tags=["dev"]),
        make_record("https://example.com/b", title="Archived", archived=True),
        make_record("https://example.com/c", title="Secret", private=True),
        make_record("https://example.com/d", title="Other", meta={"description": "About FastAPI"}),
    ]
    assert [link.title for link in filter_links(links)] == ["FastAPI tips", "Other"]
    assert [link.title for link in filter_links(links, show_archived=True, tag="dev")] == ["FastAPI tips"]
    assert [link.title for link in filter_links(links, private_view=True)] == ["Secret"]
    assert [link.title for link in filter_links(links, search="fastapi")] == ["FastAPI tips", "Other"]


def test_tree_by_cluster(make_record) -> None:
    links = [
        make_record("https://a.dev/1", category="개발", cluster_keywords=["python", "typing"], cluster_id="c1"),
        make_record("https://a.dev/2", category="개발", cluster_keywords=["python", "typing"], cluster_id="c1"),
        make_record("https://b.dev/3", category="개발"),
        make_record("https://news.com/4", category="뉴스", cluster_keywords=["election"], cluster_id="c2"),
    ]
    tree = build_tree(links, "cluster")

    assert [node["label"] for node in tree] == ["개발", "뉴스"]
    dev = tree[0]
    assert dev["count"] == 3
    assert [group["id"] for group in dev["children"]] == ["c1", "cluster:개발:unassigned"]
    assert dev["children"][0]["keywords"] == ["python", "typing"]
    assert dev["children"][1]["label"] == "토픽 미지정"


def test_tree_by_time_orders_buckets(make_record) -> None:
    now = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
    links = [
        make_record("https://example.com/old", created_at="2024-01-01T00:00:00.000Z"),
        make_record("https://example.com/today", created_at="2024-05-10T08:00:00.000Z"),
        make_record("https://example.com/week", created_at="2024-05-07T08:00:00.000Z"),
        make_record("https://example.com/broken", created_at="not a date"),
    ]
    tree = build_tree(links, "time", now=now)
    groups = tree[0]["children"]
    assert [group["label"] for group in groups] == ["오늘 저장", "이번 주", "오래된 링크"]
    assert groups[2]["count"] == 2


def test_tree_by_tag_and_domain(make_record) -> None:
    links = [
        make_record("https://www.github.com/a", title="b", tags=["git"]),
        make_record("https://github.com/b", title="a"),
    ]
    by_tag = build_tree(links, "tag")[0]["children"]
    assert sorted(group["label"] for group in by_tag) == ["git", "태그 없음"]

    by_domain = build_tree(links, "domain")[0]["children"]
    assert len(by_domain) == 1
    assert [child["link"]["title"] for child in by_domain[0]["children"]] == ["a", "b"]
