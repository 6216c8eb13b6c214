"""Greedy online topic clustering over keyword sets.

Each saved link carries its own snapshot of the cluster it joined. A new
link either joins the most similar cluster already present in its category
(Jaccard similarity of keyword sets) or starts a new one. Past links are
never re-clustered.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from linkminder.core.logging import get_logger
from linkminder.core.metrics import CLUSTER_DECISIONS
from linkminder.engine.keywords import extract_keywords
from linkminder.models.entities import DEFAULT_CATEGORY, Cluster, LinkCandidate, LinkRecord

logger = get_logger(__name__)

CLUSTER_KEYWORD_LIMIT = 4
LABEL_SEPARATOR = " · "
GENERAL_PLACEHOLDER = "general"

_SLUG_RE = re.compile(r"[^a-z0-9-]+")


def jaccard(left: Iterable[str], right: Iterable[str]) -> float:
    """|A ∩ B| / |A ∪ B|; 0.0 when both sets are empty."""
    set_left = set(left)
    set_right = set(right)
    union = set_left | set_right
    if not union:
        return 0.0
    return len(set_left & set_right) / len(union)


def build_cluster_id(category: str | None, keywords: Sequence[str]) -> str:
    # non-ascii category names collapse to "-"; collisions are accepted
    base = "-".join([category or "misc", *keywords]).lower()
    return _SLUG_RE.sub("-", f"cluster-{base}")


def general_cluster(category: str | None) -> Cluster:
    return Cluster(
        id=build_cluster_id(category, [GENERAL_PLACEHOLDER]),
        label=category or DEFAULT_CATEGORY,
        keywords=[],
        size=0,
    )


def merge_keywords(existing: Sequence[str], incoming: Sequence[str], limit: int = CLUSTER_KEYWORD_LIMIT) -> list[str]:
    return list(dict.fromkeys([*existing, *incoming]))[:limit]


def assign_cluster(
    candidate: LinkCandidate,
    existing_links: Sequence[LinkRecord],
    keyword_limit: int = CLUSTER_KEYWORD_LIMIT,
) -> Cluster:
    """Pick the cluster for ``candidate`` given the links already saved.

    ``candidate.category`` must already be set by the classifier and
    ``existing_links`` is expected newest-first, so among equally similar
    clusters the most recent wins.
    """
    keywords = extract_keywords(
        candidate.title, candidate.description, candidate.selection_text, max_count=keyword_limit
    )
    category = candidate.category or DEFAULT_CATEGORY

    if not keywords:
        CLUSTER_DECISIONS.labels(decision="general").inc()
        return general_cluster(candidate.category)

    best: Cluster | None = None
    best_score = 0.0
    for link in existing_links:
        if link.category != category:
            continue
        cluster = link.cluster
        if cluster is None or not cluster.keywords:
            continue
        score = jaccard(cluster.keywords, keywords)
        if score > best_score:
            best_score = score
            best = cluster

    if best is not None and best.id:
        CLUSTER_DECISIONS.labels(decision="join").inc()
        logger.debug("Joining cluster %s (jaccard=%.3f)", best.id, best_score)
        return Cluster(
            id=best.id,
            label=best.label,
            keywords=merge_keywords(best.keywords, keywords, keyword_limit),
            size=best.size + 1,
        )

    CLUSTER_DECISIONS.labels(decision="create").inc()
    label = LABEL_SEPARATOR.join(keywords[:2]) if len(keywords) >= 2 else category
    return Cluster(
        id=build_cluster_id(category, keywords),
        label=label,
        keywords=keywords,
        size=1,
    )


__all__ = [
    "CLUSTER_KEYWORD_LIMIT",
    "jaccard",
    "build_cluster_id",
    "general_cluster",
    "merge_keywords",
    "assign_cluster",
]
