"""Built-in classification rules and per-rule scoring."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from linkminder.core.logging import get_logger
from linkminder.models.entities import ClassificationRule, LinkCandidate
from linkminder.utils.urls import get_hostname, get_path

logger = get_logger(__name__)

HOST_WEIGHT = 3
PATH_WEIGHT = 2
KEYWORD_WEIGHT = 2
REGEX_WEIGHT = 4

DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        id="dev-github",
        label="Git hosting",
        category="개발",
        tags=["dev", "git"],
        host_includes=["github.com", "gitlab.com", "bitbucket.org"],
    ),
    ClassificationRule(
        id="dev-docs",
        label="API reference",
        category="개발",
        tags=["docs"],
        host_includes=["developer.mozilla.org", "docs.google", "api.", "dev."],
    ),
    ClassificationRule(
        id="learning",
        label="Learning",
        category="학습",
        tags=["learn"],
        keywords=["tutorial", "guide", "how to", "learn", "study"],
    ),
    ClassificationRule(
        id="video",
        label="Video platforms",
        category="영상",
        tags=["video"],
        host_includes=["youtube.com", "youtu.be", "vimeo.com", "shorts"],
    ),
    ClassificationRule(
        id="news",
        label="News sites",
        category="뉴스",
        tags=["news"],
        host_includes=["news", "nytimes.com", "cnn.com", "bbc.com", "khan.co.kr", "joongang"],
    ),
    ClassificationRule(
        id="community",
        label="Community / forum",
        category="커뮤니티",
        tags=["community"],
        keywords=["forum", "discussion", "community", "stackoverflow", "stack exchange"],
        host_includes=["reddit.com", "stackoverflow.com", "stackexchange.com", "discord.com"],
    ),
    ClassificationRule(
        id="shopping",
        label="Shopping",
        category="쇼핑",
        tags=["shopping"],
        host_includes=["amazon.", "smartstore.naver.com", "coupang", "gmarket"],
    ),
)


@dataclass(slots=True)
class MatchContext:
    """Candidate fields pre-computed once per classification."""

    url: str
    host: str
    path: str
    body: str

    @classmethod
    def from_candidate(cls, candidate: LinkCandidate) -> "MatchContext":
        body = " ".join(
            part.lower() for part in (candidate.title, candidate.description, candidate.selection_text)
        )
        return cls(
            url=candidate.url,
            host=get_hostname(candidate.url),
            path=get_path(candidate.url),
            body=body,
        )


@dataclass(slots=True)
class RuleScore:
    rule: ClassificationRule
    score: int = 0
    evidence: List[str] = field(default_factory=list)


def score_rule(rule: ClassificationRule, context: MatchContext) -> RuleScore:
    """Sum the weights of every matcher on ``rule`` that fires."""
    result = RuleScore(rule=rule)

    if rule.host_includes and any(fragment.lower() in context.host for fragment in rule.host_includes):
        result.score += HOST_WEIGHT
        result.evidence.append(f"domain:{','.join(rule.host_includes)}")

    if rule.path_includes and any(fragment in context.path for fragment in rule.path_includes):
        result.score += PATH_WEIGHT
        result.evidence.append(f"path:{','.join(rule.path_includes)}")

    if rule.keywords and any(keyword.lower() in context.body for keyword in rule.keywords):
        result.score += KEYWORD_WEIGHT
        result.evidence.append(f"keyword:{','.join(rule.keywords)}")

    if rule.regex:
        try:
            matcher = re.compile(rule.regex, re.IGNORECASE)
        except re.error as exc:
            logger.warning("Invalid rule regex %r on rule %s: %s", rule.regex, rule.id, exc)
        else:
            if matcher.search(context.url):
                result.score += REGEX_WEIGHT
                result.evidence.append(f"regex:{rule.regex}")

    return result


__all__ = ["DEFAULT_RULES", "MatchContext", "RuleScore", "score_rule"]
