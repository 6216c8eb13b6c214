"""Link collection persisted as a single newest-first list."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Literal, Mapping, Sequence

from linkminder.core.errors import ImportFormatError, NotFoundError
from linkminder.core.logging import get_logger
from linkminder.core.metrics import LINK_COUNT
from linkminder.db.kv import KeyValueStore
from linkminder.models.entities import LinkRecord
from linkminder.utils.ids import new_id
from linkminder.utils.time import to_iso
from linkminder.utils.urls import normalize_url

logger = get_logger(__name__)

LINKS_KEY = "linkminder.links"
EXPORT_VERSION = 1

Scope = Literal["public", "private"]


def parse_import_document(raw: Any) -> list[Any]:
    """Accept an export wrapper, a bare list, or ``{"items": [...]}``."""
    items = raw
    if isinstance(raw, Mapping):
        items = raw.get("links")
        if items is None:
            items = raw.get("items")
    if not isinstance(items, list):
        raise ImportFormatError("Import file is not a LinkMinder export or a list of links.")
    return items


class LinkStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def list_links(self) -> list[LinkRecord]:
        raw = self.kv.get(LINKS_KEY, []) or []
        return [LinkRecord.from_dict(item) for item in raw if isinstance(item, Mapping)]

    def save_links(self, links: Sequence[LinkRecord]) -> list[LinkRecord]:
        self.kv.set(LINKS_KEY, [link.to_dict() for link in links])
        LINK_COUNT.set(len(links))
        return list(links)

    def get_link(self, link_id: str) -> LinkRecord:
        for link in self.list_links():
            if link.id == link_id:
                return link
        raise NotFoundError(f"Link {link_id} not found")

    def upsert_link(self, record: LinkRecord, private_override: bool | None = None) -> list[LinkRecord]:
        """Insert ``record`` or merge it into the link with the same normalized URL.

        A merge keeps the stored id, creation time and archived flag. A merge
        can move a link into the private area but never out of it; that
        takes the PIN-gated toggle.
        """
        links = self.list_links()
        normalized = normalize_url(record.url)
        for index, existing in enumerate(links):
            if normalize_url(existing.url) != normalized:
                continue
            links[index] = replace(
                record,
                id=existing.id,
                url=normalized,
                created_at=existing.created_at or record.created_at,
                archived=existing.archived,
                private=existing.private or private_override is True,
                note=record.note or existing.note,
            )
            logger.info("Updated existing link %s", normalized, extra={"ctx_link_id": existing.id})
            break
        else:
            private = record.private if private_override is None else private_override
            links.insert(0, replace(record, url=normalized, private=private))
            logger.info("Stored new link %s", normalized, extra={"ctx_link_id": record.id})
        return self.save_links(links)

    def delete_link(self, link_id: str) -> list[LinkRecord]:
        links = self.list_links()
        remaining = [link for link in links if link.id != link_id]
        if len(remaining) == len(links):
            raise NotFoundError(f"Link {link_id} not found")
        return self.save_links(remaining)

    def toggle_archive(self, link_id: str) -> LinkRecord:
        return self._update(link_id, lambda link: replace(link, archived=not link.archived))

    def toggle_private(self, link_id: str) -> LinkRecord:
        return self._update(link_id, lambda link: replace(link, private=not link.private))

    def update_note(self, link_id: str, note: str) -> LinkRecord:
        return self._update(link_id, lambda link: replace(link, note=note))

    def _update(self, link_id: str, change) -> LinkRecord:
        links = self.list_links()
        for index, link in enumerate(links):
            if link.id == link_id:
                updated = change(link)
                updated.updated_at = to_iso()
                links[index] = updated
                self.save_links(links)
                return updated
        raise NotFoundError(f"Link {link_id} not found")

    # Interchange --------------------------------------------------------

    def export_links(self, scope: Scope = "public") -> dict[str, Any]:
        want_private = scope == "private"
        links = [link.to_dict() for link in self.list_links() if link.private == want_private]
        return {
            "version": EXPORT_VERSION,
            "exportedAt": to_iso(),
            "scope": scope,
            "links": links,
        }

    def import_links(self, items: Iterable[Any], target_private: bool = False) -> tuple[list[LinkRecord], int]:
        """Merge exported items into the collection by normalized URL."""
        links = self.list_links()
        now = to_iso()
        by_url = {normalize_url(link.url): index for index, link in enumerate(links)}
        imported = 0

        for raw in items:
            if not isinstance(raw, Mapping) or not raw.get("url"):
                continue
            incoming = _record_from_import(raw, target_private, now)
            normalized = normalize_url(incoming.url)
            index = by_url.get(normalized)
            if index is not None:
                existing = links[index]
                links[index] = replace(incoming, id=existing.id, url=normalized, updated_at=now)
            else:
                links.insert(0, replace(incoming, url=normalized))
                by_url = {key: value + 1 for key, value in by_url.items()}
                by_url[normalized] = 0
            imported += 1

        logger.info("Imported %s links", imported, extra={"ctx_private": target_private})
        return self.save_links(links), imported


def _record_from_import(raw: Mapping[str, Any], target_private: bool, now: str) -> LinkRecord:
    record = LinkRecord.from_dict(raw)
    record.id = str(raw.get("id") or new_id())
    record.private = target_private
    record.created_at = record.created_at or now
    record.updated_at = record.updated_at or now
    if not isinstance(raw.get("source"), Mapping):
        record.source = {"trigger": "import", "savedAt": now}
    return record


__all__ = ["LINKS_KEY", "EXPORT_VERSION", "LinkStore", "parse_import_document"]
