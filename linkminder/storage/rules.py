"""User-defined classification rules."""

from __future__ import annotations

from typing import Any, Mapping

from linkminder.core.errors import NotFoundError, RuleValidationError
from linkminder.core.logging import get_logger
from linkminder.db.kv import KeyValueStore
from linkminder.models.entities import CATEGORIES, ClassificationRule
from linkminder.utils.ids import new_id

logger = get_logger(__name__)

RULES_KEY = "linkminder.rules"


def validate_rule(rule: ClassificationRule) -> ClassificationRule:
    if rule.category not in CATEGORIES:
        raise RuleValidationError(f"Unknown category: {rule.category}")
    if not rule.has_matcher:
        raise RuleValidationError("A rule needs at least one host, path, keyword or regex matcher.")
    return rule


class RuleStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _raw_rules(self) -> list[dict[str, Any]]:
        return [dict(item) for item in self.kv.get(RULES_KEY, []) or [] if isinstance(item, Mapping)]

    def list_custom_rules(self) -> list[ClassificationRule]:
        return [ClassificationRule.from_dict(item) for item in self._raw_rules()]

    def upsert_rule(self, payload: Mapping[str, Any]) -> list[ClassificationRule]:
        """Create a rule, or shallow-merge ``payload`` into the rule with the same id."""
        raw_rules = self._raw_rules()
        incoming = {key: value for key, value in payload.items() if value is not None}
        incoming["id"] = incoming.get("id") or new_id()

        for index, existing in enumerate(raw_rules):
            if existing.get("id") == incoming["id"]:
                merged = {**existing, **incoming}
                raw_rules[index] = validate_rule(ClassificationRule.from_dict(merged)).to_dict()
                break
        else:
            raw_rules.append(validate_rule(ClassificationRule.from_dict(incoming)).to_dict())

        self.kv.set(RULES_KEY, raw_rules)
        logger.info("Saved custom rule %s", incoming["id"])
        return self.list_custom_rules()

    def delete_rule(self, rule_id: str) -> list[ClassificationRule]:
        raw_rules = self._raw_rules()
        remaining = [item for item in raw_rules if item.get("id") != rule_id]
        if len(remaining) == len(raw_rules):
            raise NotFoundError(f"Rule {rule_id} not found")
        self.kv.set(RULES_KEY, remaining)
        return self.list_custom_rules()


__all__ = ["RULES_KEY", "RuleStore", "validate_rule"]
