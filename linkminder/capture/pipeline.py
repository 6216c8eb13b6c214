"""Save pipeline: tab in, classified and clustered link record out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from linkminder.capture.inspector import PageInspector, SnapshotInspector
from linkminder.core.config import Settings
from linkminder.core.errors import SaveError
from linkminder.core.logging import get_logger
from linkminder.core.metrics import LINKS_SAVED
from linkminder.engine import assign_cluster, classify
from linkminder.models.entities import LinkCandidate, LinkRecord, SaveTrigger, TabInfo
from linkminder.storage.links import LinkStore
from linkminder.storage.rules import RuleStore
from linkminder.utils.ids import new_id
from linkminder.utils.text import normalize
from linkminder.utils.time import to_iso
from linkminder.utils.urls import get_domain, is_internal_url, normalize_url

logger = get_logger(__name__)


@dataclass(slots=True)
class SaveOutcome:
    record: LinkRecord
    links: list[LinkRecord]


class SavePipeline:
    """Coordinate page inspection, classification, clustering and persistence."""

    def __init__(
        self,
        link_store: LinkStore,
        rule_store: RuleStore,
        settings: Settings,
        inspector: PageInspector | None = None,
    ) -> None:
        self.link_store = link_store
        self.rule_store = rule_store
        self.settings = settings
        self.inspector = inspector or SnapshotInspector()

    def save(self, tab: TabInfo | None, trigger: SaveTrigger | None = None) -> SaveOutcome:
        trigger = trigger or SaveTrigger()
        self._check_savable(tab)
        existing_links = self.link_store.list_links()
        record = self.build_record(tab, trigger, existing_links)
        links = self.link_store.upsert_link(record, private_override=trigger.make_private)
        stored = next(link for link in links if link.url == record.url)
        LINKS_SAVED.labels(trigger=trigger.reason).inc()
        logger.info(
            "Saved %s as %s",
            stored.url,
            stored.category,
            extra={"ctx_rule_id": stored.rule_id, "ctx_cluster": stored.cluster.id if stored.cluster else None},
        )
        return SaveOutcome(record=stored, links=links)

    def build_record(self, tab: TabInfo, trigger: SaveTrigger, existing_links: Sequence[LinkRecord]) -> LinkRecord:
        now = to_iso()
        url = normalize_url(tab.url or "")
        page = self.inspector.collect(tab)
        title = normalize(tab.title)

        selection = trigger.selection_text if trigger.selection_text is not None else page.selection_text
        candidate = LinkCandidate(
            url=url,
            title=title,
            description=page.description,
            selection_text=selection or "",
            keywords=list(page.keywords),
        )

        classification = classify(candidate, self.rule_store.list_custom_rules())
        candidate.category = classification.category
        cluster = assign_cluster(candidate, existing_links, keyword_limit=self.settings.cluster_keyword_limit)

        domain = get_domain(url)
        return LinkRecord(
            id=new_id(),
            url=url,
            title=title or domain or url,
            category=classification.category,
            tags=list(classification.tags),
            archived=False,
            private=bool(trigger.make_private),
            note="",
            confidence=classification.confidence,
            rule_id=classification.rule_id,
            evidence=list(classification.evidence),
            classifier_version=classification.version,
            cluster=cluster,
            created_at=now,
            updated_at=now,
            meta={
                "description": candidate.description,
                "selectionText": candidate.selection_text,
                "keywords": candidate.keywords,
                "domain": domain,
                "favicon": tab.fav_icon_url or "",
                "title": tab.title or "",
            },
            source={
                "trigger": trigger.reason,
                "tabId": tab.id,
                "windowId": tab.window_id,
                "savedAt": now,
            },
        )

    def _check_savable(self, tab: TabInfo | None) -> None:
        if tab is None or not tab.url:
            raise SaveError("Could not find a tab that can be saved.")
        if is_internal_url(tab.url, self.settings.internal_url_prefixes):
            raise SaveError(f"Internal browser pages cannot be saved: {tab.url}")


__all__ = ["SaveOutcome", "SavePipeline"]
