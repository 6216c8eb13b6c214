"""List filtering and tree groupings for the popup views."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Literal, Sequence

from linkminder.models.entities import DEFAULT_CATEGORY, LinkRecord
from linkminder.utils.time import parse_iso, utc_now
from linkminder.utils.urls import get_domain

Grouping = Literal["tag", "time", "domain", "cluster"]

NO_TAG_LABEL = "태그 없음"
NO_DOMAIN_LABEL = "도메인 없음"
NO_TOPIC_LABEL = "토픽 미지정"

# (key, label, upper bound in hours)
TIME_BUCKETS: tuple[tuple[str, str, float], ...] = (
    ("today", "오늘 저장", 24),
    ("week", "이번 주", 24 * 7),
    ("month", "이번 달", 24 * 30),
    ("older", "오래된 링크", float("inf")),
)


@dataclass(slots=True)
class TreeGroup:
    id: str
    label: str
    badge: str
    order: int | None = None
    keywords: list[str] = field(default_factory=list)
    links: list[LinkRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "group",
            "id": self.id,
            "label": self.label,
            "badge": self.badge,
            "count": len(self.links),
            "children": [{"type": "link", "id": f"link:{link.id}", "link": link.to_dict()} for link in self.links],
        }
        if self.keywords:
            payload["keywords"] = list(self.keywords)
        return payload


@dataclass(slots=True)
class CategoryNode:
    label: str
    count: int = 0
    groups: dict[str, TreeGroup] = field(default_factory=dict)

    def to_dict(self, groups: Sequence[TreeGroup]) -> dict[str, Any]:
        return {
            "type": "category",
            "id": f"category:{self.label}",
            "label": self.label,
            "count": self.count,
            "children": [group.to_dict() for group in groups],
        }


def filter_links(
    links: Sequence[LinkRecord],
    private_view: bool = False,
    show_archived: bool = False,
    tag: str | None = None,
    search: str | None = None,
) -> list[LinkRecord]:
    needle = (search or "").strip().lower()
    selected: list[LinkRecord] = []
    for link in links:
        if link.private != private_view:
            continue
        if link.archived and not show_archived:
            continue
        if tag and tag not in link.tags:
            continue
        if needle:
            haystack = " ".join(
                [link.title, link.url, link.category, " ".join(link.tags), str(link.meta.get("description") or "")]
            ).lower()
            if needle not in haystack:
                continue
        selected.append(link)
    return selected


def _created(link: LinkRecord) -> float:
    parsed = parse_iso(link.created_at)
    return parsed.timestamp() if parsed else 0.0


def _time_bucket(link: LinkRecord, now: datetime) -> tuple[int, str, str]:
    parsed = parse_iso(link.created_at)
    hours = (now - parsed).total_seconds() / 3600 if parsed else float("inf")
    for order, (key, label, bound) in enumerate(TIME_BUCKETS):
        if hours < bound:
            return order, key, label
    last = len(TIME_BUCKETS) - 1
    return last, TIME_BUCKETS[last][0], TIME_BUCKETS[last][1]


def _group_for(link: LinkRecord, category: str, grouping: Grouping, now: datetime) -> TreeGroup:
    if grouping == "domain":
        domain = get_domain(link.url) or NO_DOMAIN_LABEL
        return TreeGroup(id=f"domain:{category}:{domain}", label=domain, badge="DOMAIN")
    if grouping == "time":
        order, key, label = _time_bucket(link, now)
        return TreeGroup(id=f"time:{category}:{key}", label=label, badge="TIME", order=order)
    if grouping == "cluster":
        cluster = link.cluster
        if cluster is None:
            return TreeGroup(id=f"cluster:{category}:unassigned", label=NO_TOPIC_LABEL, badge="TOPIC")
        return TreeGroup(
            id=cluster.id or f"cluster:{category}:{cluster.label}",
            label=cluster.label or NO_TOPIC_LABEL,
            badge="TOPIC",
            keywords=list(cluster.keywords),
        )
    primary = link.tags[0] if link.tags else NO_TAG_LABEL
    return TreeGroup(id=f"group:{category}:{primary}", label=primary, badge="TAG")


def _by_count_then_label(group: TreeGroup) -> tuple[int, str]:
    return (-len(group.links), group.label)


def _by_bucket_order(group: TreeGroup) -> tuple[int, int]:
    return (group.order if group.order is not None else len(TIME_BUCKETS), -len(group.links))


def build_tree(links: Sequence[LinkRecord], grouping: Grouping = "tag", now: datetime | None = None) -> list[dict[str, Any]]:
    """Group links by category, then by the requested grouping."""
    now = now or utc_now()
    categories: dict[str, CategoryNode] = {}
    for link in links:
        label = link.category or DEFAULT_CATEGORY
        node = categories.setdefault(label, CategoryNode(label=label))
        node.count += 1
        group = _group_for(link, label, grouping, now)
        node.groups.setdefault(group.id, group).links.append(link)

    group_key: Callable[[TreeGroup], Any] = _by_bucket_order if grouping == "time" else _by_count_then_label
    tree: list[dict[str, Any]] = []
    for node in sorted(categories.values(), key=lambda item: (-item.count, item.label)):
        groups = sorted(node.groups.values(), key=group_key)
        for group in groups:
            if grouping == "domain":
                group.links.sort(key=lambda link: link.title)
            else:
                group.links.sort(key=_created, reverse=True)
        tree.append(node.to_dict(groups))
    return tree


__all__ = ["Grouping", "TIME_BUCKETS", "filter_links", "build_tree"]
