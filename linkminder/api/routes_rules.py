"""Custom rule routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from linkminder.api.dependencies import get_rule_store
from linkminder.engine import DEFAULT_RULES
from linkminder.models.dto import RuleRequest, RulesResponse
from linkminder.storage.rules import RuleStore

router = APIRouter()


def _rules_response(store: RuleStore) -> RulesResponse:
    return RulesResponse(
        custom=[rule.to_dict() for rule in store.list_custom_rules()],
        defaults=[rule.to_dict() for rule in DEFAULT_RULES],
    )


@router.get("", response_model=RulesResponse, summary="List custom and built-in rules")
async def list_rules(store: RuleStore = Depends(get_rule_store)) -> RulesResponse:
    return _rules_response(store)


@router.post("", response_model=RulesResponse, summary="Create or update a custom rule")
async def upsert_rule(request: RuleRequest, store: RuleStore = Depends(get_rule_store)) -> RulesResponse:
    store.upsert_rule(request.to_payload())
    return _rules_response(store)


@router.delete("/{rule_id}", response_model=RulesResponse, summary="Delete a custom rule")
async def delete_rule(rule_id: str, store: RuleStore = Depends(get_rule_store)) -> RulesResponse:
    store.delete_rule(rule_id)
    return _rules_response(store)


__all__ = ["router"]
