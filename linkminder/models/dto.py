"""Pydantic DTOs exposed via API.

The browser extension speaks camelCase, so every request model accepts
camelCase aliases as well as field names.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from linkminder.models.entities import CATEGORIES, PageContext, SaveTrigger, TabInfo
from linkminder.utils.text import split_list


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PagePayload(CamelModel):
    description: str = ""
    selection_text: str = ""
    keywords: list[str] = Field(default_factory=list)

    def to_context(self) -> PageContext:
        return PageContext(
            description=self.description,
            selection_text=self.selection_text,
            keywords=list(self.keywords),
        )


class TabPayload(CamelModel):
    id: int | None = None
    window_id: int | None = None
    url: str | None = None
    title: str | None = None
    fav_icon_url: str | None = None
    page: PagePayload | None = Field(default=None, description="Content-script metadata")
    html: str | None = Field(default=None, description="Raw DOM snapshot, parsed when page is absent")

    def to_tab(self) -> TabInfo:
        return TabInfo(
            url=self.url,
            title=self.title,
            id=self.id,
            window_id=self.window_id,
            fav_icon_url=self.fav_icon_url,
            page=self.page.to_context() if self.page else None,
            html=self.html,
        )


class TriggerPayload(CamelModel):
    reason: str = "popup"
    selection_text: str | None = None
    make_private: bool | None = None

    def to_trigger(self) -> SaveTrigger:
        return SaveTrigger(reason=self.reason, selection_text=self.selection_text, make_private=self.make_private)


class SaveRequest(CamelModel):
    tab: TabPayload | None = None
    trigger: TriggerPayload = Field(default_factory=TriggerPayload)


class SaveResponse(BaseModel):
    record: dict[str, Any]
    total: int


class NoteRequest(BaseModel):
    note: str = ""


class RuleRequest(CamelModel):
    id: str | None = None
    label: str | None = None
    category: str
    tags: list[str] = Field(default_factory=list)
    host_includes: list[str] = Field(default_factory=list)
    path_includes: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    regex: str | None = None

    @field_validator("tags", "host_includes", "path_includes", "keywords", mode="before")
    @classmethod
    def _split(cls, value: Any) -> list[str]:
        return split_list(value)

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(CATEGORIES)}")
        return value

    @model_validator(mode="after")
    def _has_matcher(self) -> "RuleRequest":
        if not (self.host_includes or self.path_includes or self.keywords or self.regex):
            raise ValueError("at least one of hostIncludes, pathIncludes, keywords or regex is required")
        return self

    def to_payload(self) -> dict[str, Any]:
        """camelCase mapping for the rule store, omitting unset matchers."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RulesResponse(BaseModel):
    custom: list[dict[str, Any]]
    defaults: list[dict[str, Any]]


class PinStatusResponse(CamelModel):
    has_pin: bool


class PinSetRequest(BaseModel):
    pin: str
    current: str | None = None


class PinVerifyRequest(BaseModel):
    pin: str


class PinVerifyResponse(BaseModel):
    match: bool


class ExportRequest(BaseModel):
    scope: Literal["public", "private"] = "public"
    pin: str | None = None


class ImportRequest(CamelModel):
    document: Any
    target_private: bool = False
    pin: str | None = None


class ImportResponse(BaseModel):
    imported: int
    total: int


__all__ = [
    "PagePayload",
    "TabPayload",
    "TriggerPayload",
    "SaveRequest",
    "SaveResponse",
    "NoteRequest",
    "RuleRequest",
    "RulesResponse",
    "PinStatusResponse",
    "PinSetRequest",
    "PinVerifyRequest",
    "PinVerifyResponse",
    "ExportRequest",
    "ImportRequest",
    "ImportResponse",
]
