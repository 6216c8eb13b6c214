"""Link collection routes."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends, Header

from linkminder.api.dependencies import get_link_store, get_pin_store, get_save_pipeline
from linkminder.capture.pipeline import SavePipeline
from linkminder.core.errors import SaveError
from linkminder.models.dto import (
    ExportRequest,
    ImportRequest,
    ImportResponse,
    NoteRequest,
    SaveRequest,
    SaveResponse,
)
from linkminder.storage.links import LinkStore, parse_import_document
from linkminder.storage.pins import PinStore
from linkminder.views import Grouping, build_tree, filter_links

router = APIRouter()

PIN_HEADER = "X-LinkMinder-Pin"


def _unlock(scope: str, pin: str | None, pins: PinStore) -> None:
    if scope == "private":
        pins.require(pin)


def _guard_link(link_id: str, pin: str | None, store: LinkStore, pins: PinStore) -> None:
    """Changes to a private link need the PIN, like reading it does."""
    if store.get_link(link_id).private:
        pins.require(pin)


@router.get("", summary="List saved links")
async def list_links(
    scope: Literal["public", "private"] = "public",
    archived: bool = False,
    tag: str | None = None,
    q: str | None = None,
    pin: str | None = Header(default=None, alias=PIN_HEADER),
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> list[dict[str, Any]]:
    _unlock(scope, pin, pins)
    links = filter_links(store.list_links(), private_view=scope == "private", show_archived=archived, tag=tag, search=q)
    return [link.to_dict() for link in links]


@router.get("/tree", summary="Links grouped by category and tag, time, domain or topic")
async def links_tree(
    grouping: Grouping = "tag",
    scope: Literal["public", "private"] = "public",
    archived: bool = False,
    pin: str | None = Header(default=None, alias=PIN_HEADER),
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> list[dict[str, Any]]:
    _unlock(scope, pin, pins)
    links = filter_links(store.list_links(), private_view=scope == "private", show_archived=archived)
    return build_tree(links, grouping)


@router.post("/save", response_model=SaveResponse, summary="Classify, cluster and store a browser tab")
async def save_tab(request: SaveRequest, pipeline: SavePipeline = Depends(get_save_pipeline)) -> SaveResponse:
    if request.tab is None:
        raise SaveError("Could not find a tab that can be saved.")
    outcome = pipeline.save(request.tab.to_tab(), request.trigger.to_trigger())
    return SaveResponse(record=outcome.record.to_dict(), total=len(outcome.links))


@router.delete("/{link_id}", summary="Delete a link")
async def delete_link(
    link_id: str,
    pin: str | None = Header(default=None, alias=PIN_HEADER),
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> dict[str, Any]:
    _guard_link(link_id, pin, store, pins)
    remaining = store.delete_link(link_id)
    return {"status": "ok", "total": len(remaining)}


@router.post("/{link_id}/archive", summary="Toggle the archived flag")
async def toggle_archive(
    link_id: str,
    pin: str | None = Header(default=None, alias=PIN_HEADER),
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> dict[str, Any]:
    _guard_link(link_id, pin, store, pins)
    return store.toggle_archive(link_id).to_dict()


@router.post("/{link_id}/private", summary="Move a link between the public and private areas")
async def toggle_private(
    link_id: str,
    pin: str | None = Header(default=None, alias=PIN_HEADER),
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> dict[str, Any]:
    pins.require(pin)
    return store.toggle_private(link_id).to_dict()


@router.put("/{link_id}/note", summary="Replace a link's note")
async def update_note(
    link_id: str,
    request: NoteRequest,
    pin: str | None = Header(default=None, alias=PIN_HEADER),
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> dict[str, Any]:
    _guard_link(link_id, pin, store, pins)
    return store.update_note(link_id, request.note).to_dict()


@router.post("/export", summary="Export public or private links")
async def export_links(
    request: ExportRequest,
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> dict[str, Any]:
    _unlock(request.scope, request.pin, pins)
    return store.export_links(request.scope)


@router.post("/import", response_model=ImportResponse, summary="Merge an export file into the collection")
async def import_links(
    request: ImportRequest,
    store: LinkStore = Depends(get_link_store),
    pins: PinStore = Depends(get_pin_store),
) -> ImportResponse:
    items = parse_import_document(request.document)
    if request.target_private:
        pins.require(request.pin)
    links, imported = store.import_links(items, target_private=request.target_private)
    return ImportResponse(imported=imported, total=len(links))


__all__ = ["router", "PIN_HEADER"]
