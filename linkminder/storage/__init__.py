"""Key-value backed stores for links, rules and the private PIN."""

from .links import LinkStore, parse_import_document
from .pins import PinStore
from .rules import RuleStore

__all__ = ["LinkStore", "PinStore", "RuleStore", "parse_import_document"]
