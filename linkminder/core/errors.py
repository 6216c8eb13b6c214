"""User-facing error types.

Input problems (bad URLs, broken regexes, unreadable pages) never raise; they
degrade to defaults inside the engine. The exceptions below are the ones the
API turns into a rejected request.
"""

from __future__ import annotations


class LinkMinderError(Exception):
    """Base class for errors surfaced to the user with a readable message."""

    status_code = 400


class SaveError(LinkMinderError):
    """The active tab cannot be saved (no URL, internal browser page)."""


class PinError(LinkMinderError):
    status_code = 403


class ImportFormatError(LinkMinderError):
    """The import file is not one of the accepted document shapes."""


class RuleValidationError(LinkMinderError):
    pass


class NotFoundError(LinkMinderError):
    status_code = 404


__all__ = [
    "LinkMinderError",
    "SaveError",
    "PinError",
    "ImportFormatError",
    "RuleValidationError",
    "NotFoundError",
]
