"""Best-effort page metadata collection.

The browser extension either forwards what its content script read from the
DOM or posts a raw HTML snapshot of the page. Nothing here fetches over the
network, and any failure yields an empty ``PageContext``.
"""

from __future__ import annotations

from typing import Protocol

from bs4 import BeautifulSoup

from linkminder.core.logging import get_logger
from linkminder.models.entities import PageContext, TabInfo
from linkminder.utils.text import normalize, split_list

logger = get_logger(__name__)


class PageInspector(Protocol):
    def collect(self, tab: TabInfo) -> PageContext:
        ...


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    element = soup.find("meta", attrs={"name": name}) or soup.find("meta", attrs={"property": f"og:{name}"})
    if element is None:
        return ""
    return normalize(element.get("content"))


def parse_page_html(html: str) -> PageContext:
    soup = BeautifulSoup(html, "html.parser")
    return PageContext(
        description=_meta_content(soup, "description"),
        selection_text="",
        keywords=split_list(_meta_content(soup, "keywords")),
    )


class SnapshotInspector:
    """Reads the content-script payload, or parses the posted HTML snapshot."""

    def collect(self, tab: TabInfo) -> PageContext:
        if tab.page is not None:
            return tab.page
        if not tab.html:
            return PageContext()
        try:
            return parse_page_html(tab.html)
        except Exception as exc:
            logger.debug("Page snapshot unreadable for %s: %s", tab.url, exc)
            return PageContext()


__all__ = ["PageInspector", "SnapshotInspector", "parse_page_html"]
