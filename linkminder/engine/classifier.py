"""Rule-scoring link classifier.

Custom rules are evaluated ahead of the built-in table and the single best
scoring rule across both wins; ties keep the earlier rule. When nothing
scores, a short chain of substring fallbacks picks a coarse category.
"""

from __future__ import annotations

from typing import Sequence

from linkminder.core.logging import get_logger
from linkminder.core.metrics import CLASSIFICATIONS
from linkminder.engine.rules import DEFAULT_RULES, MatchContext, RuleScore, score_rule
from linkminder.models.entities import (
    CATEGORIES,
    CLASSIFIER_VERSION,
    DEFAULT_CATEGORY,
    ClassificationResult,
    ClassificationRule,
    LinkCandidate,
)

logger = get_logger(__name__)

BASE_CONFIDENCE = 0.2
CONFIDENCE_PER_POINT = 0.15


def rule_confidence(score: int) -> float:
    return min(1.0, BASE_CONFIDENCE + score * CONFIDENCE_PER_POINT)


def _fallback(candidate: LinkCandidate) -> ClassificationResult:
    url = candidate.url.lower()
    text = " ".join((candidate.title, candidate.description, candidate.selection_text)).lower()

    if "blog" in url or "blog" in text:
        return ClassificationResult("문서", ["blog"], 0.3, None, ["fallback:blog"])
    if any(token in url or token in text for token in ("youtube", "vimeo", "video")):
        return ClassificationResult("영상", ["video"], 0.35, None, ["fallback:video"])
    if "news" in url or "news" in text or "breaking news" in text:
        return ClassificationResult("뉴스", ["news"], 0.3, None, ["fallback:news"])
    return ClassificationResult(DEFAULT_CATEGORY, [], 0.1, None, ["fallback:default"])


def classify(
    candidate: LinkCandidate,
    custom_rules: Sequence[ClassificationRule] = (),
) -> ClassificationResult:
    """Assign a category, tags and confidence to ``candidate``."""
    context = MatchContext.from_candidate(candidate)
    best: RuleScore | None = None
    for rule in (*custom_rules, *DEFAULT_RULES):
        scored = score_rule(rule, context)
        if scored.score <= 0:
            continue
        if best is None or scored.score > best.score:
            best = scored

    if best is not None:
        rule = best.rule
        CLASSIFICATIONS.labels(category=rule.category, origin="rule").inc()
        logger.debug("Rule %s matched %s with score %s", rule.id, candidate.url, best.score)
        return ClassificationResult(
            category=rule.category,
            tags=list(rule.tags),
            confidence=rule_confidence(best.score),
            rule_id=rule.id or None,
            evidence=best.evidence,
            version=CLASSIFIER_VERSION,
        )

    result = _fallback(candidate)
    if result.category not in CATEGORIES:
        result.category = DEFAULT_CATEGORY
    CLASSIFICATIONS.labels(category=result.category, origin="fallback").inc()
    return result


__all__ = ["classify", "rule_confidence"]
