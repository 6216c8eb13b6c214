"""Internal dataclasses for links, rules and classifier output.

Persisted shapes are exchanged as camelCase dictionaries (the key-value
store and the export file share the same layout), so each persisted entity
carries its own ``to_dict`` / ``from_dict`` pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

CATEGORIES: tuple[str, ...] = (
    "개발",
    "디자인",
    "문서",
    "학습",
    "뉴스",
    "커뮤니티",
    "영상",
    "쇼핑",
    "기타",
)
DEFAULT_CATEGORY = "기타"

CLASSIFIER_VERSION = 1


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _str_dict(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): item for key, item in value.items()}


@dataclass(slots=True)
class LinkCandidate:
    """Per-save input to the classifier and clusterer; never persisted."""

    url: str
    title: str = ""
    description: str = ""
    selection_text: str = ""
    keywords: list[str] = field(default_factory=list)
    category: str | None = None


@dataclass(slots=True)
class ClassificationRule:
    id: str
    category: str
    tags: list[str] = field(default_factory=list)
    label: str | None = None
    host_includes: list[str] = field(default_factory=list)
    path_includes: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    regex: str | None = None

    @property
    def has_matcher(self) -> bool:
        return bool(self.host_includes or self.path_includes or self.keywords or self.regex)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "category": self.category,
            "tags": list(self.tags),
        }
        if self.host_includes:
            payload["hostIncludes"] = list(self.host_includes)
        if self.path_includes:
            payload["pathIncludes"] = list(self.path_includes)
        if self.keywords:
            payload["keywords"] = list(self.keywords)
        if self.regex:
            payload["regex"] = self.regex
        return payload

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ClassificationRule":
        return cls(
            id=str(raw.get("id") or ""),
            category=str(raw.get("category") or DEFAULT_CATEGORY),
            tags=_str_list(raw.get("tags")),
            label=raw.get("label"),
            host_includes=_str_list(raw.get("hostIncludes")),
            path_includes=_str_list(raw.get("pathIncludes")),
            keywords=_str_list(raw.get("keywords")),
            regex=raw.get("regex") or None,
        )


@dataclass(slots=True)
class ClassificationResult:
    category: str
    tags: list[str]
    confidence: float
    rule_id: str | None
    evidence: list[str]
    version: int = CLASSIFIER_VERSION


@dataclass(slots=True)
class Cluster:
    id: str
    label: str
    keywords: list[str] = field(default_factory=list)
    size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "keywords": list(self.keywords), "size": self.size}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "Cluster | None":
        if not isinstance(raw, Mapping):
            return None
        size = raw.get("size")
        return cls(
            id=str(raw.get("id") or ""),
            label=str(raw.get("label") or ""),
            keywords=_str_list(raw.get("keywords")),
            size=size if isinstance(size, int) else 0,
        )


@dataclass(slots=True)
class LinkRecord:
    """A saved link; the normalized ``url`` is its natural key."""

    id: str
    url: str
    title: str
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    archived: bool = False
    private: bool = False
    note: str = ""
    confidence: float = 0.0
    rule_id: str | None = None
    evidence: list[str] = field(default_factory=list)
    classifier_version: int = CLASSIFIER_VERSION
    cluster: Cluster | None = None
    created_at: str = ""
    updated_at: str = ""
    meta: dict[str, Any] = field(default_factory=dict)
    source: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "category": self.category,
            "tags": list(self.tags),
            "archived": self.archived,
            "private": self.private,
            "note": self.note,
            "confidence": self.confidence,
            "ruleId": self.rule_id,
            "evidence": list(self.evidence),
            "classifierVersion": self.classifier_version,
            "cluster": self.cluster.to_dict() if self.cluster else None,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "meta": dict(self.meta),
            "source": dict(self.source),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "LinkRecord":
        confidence = raw.get("confidence")
        version = raw.get("classifierVersion")
        return cls(
            id=str(raw.get("id") or ""),
            url=str(raw.get("url") or ""),
            title=str(raw.get("title") or raw.get("url") or ""),
            category=str(raw.get("category") or DEFAULT_CATEGORY),
            tags=_str_list(raw.get("tags")),
            archived=bool(raw.get("archived")),
            private=bool(raw.get("private")),
            note=str(raw.get("note") or ""),
            confidence=float(confidence) if isinstance(confidence, (int, float)) and not isinstance(confidence, bool) else 0.0,
            rule_id=str(raw["ruleId"]) if raw.get("ruleId") else None,
            evidence=_str_list(raw.get("evidence")),
            classifier_version=version if isinstance(version, int) else CLASSIFIER_VERSION,
            cluster=Cluster.from_dict(raw.get("cluster")),
            created_at=str(raw.get("createdAt") or ""),
            updated_at=str(raw.get("updatedAt") or ""),
            meta=_str_dict(raw.get("meta")),
            source=_str_dict(raw.get("source")),
        )


@dataclass(slots=True)
class PageContext:
    """Best-effort page metadata; every field may be empty."""

    description: str = ""
    selection_text: str = ""
    keywords: list[str] = field(default_factory=list)


@dataclass(slots=True)
class TabInfo:
    url: str | None
    title: str | None = None
    id: int | None = None
    window_id: int | None = None
    fav_icon_url: str | None = None
    page: PageContext | None = None
    html: str | None = None


@dataclass(slots=True)
class SaveTrigger:
    """Why a save happened: popup button, context menu, shortcut or CLI."""

    reason: str = "manual"
    selection_text: str | None = None
    make_private: bool | None = None


__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "CLASSIFIER_VERSION",
    "LinkCandidate",
    "ClassificationRule",
    "ClassificationResult",
    "Cluster",
    "LinkRecord",
    "PageContext",
    "TabInfo",
    "SaveTrigger",
]
