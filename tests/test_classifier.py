"""Tests for the rule classifier."""

import pytest

from linkminder.engine.classifier import classify, rule_confidence
from linkminder.models.entities import CLASSIFIER_VERSION, ClassificationRule, LinkCandidate


def test_github_matches_builtin_rule() -> None:
    result = classify(LinkCandidate(url="https://github.com/foo/bar", title="bar: a tool"))
    assert result.category == "개발"
    assert result.rule_id == "dev-github"
    assert result.tags == ["dev", "git"]
    assert result.confidence == pytest.approx(0.65)
    assert result.evidence == ["domain:github.com,gitlab.com,bitbucket.org"]
    assert result.version == CLASSIFIER_VERSION


def test_custom_rule_wins_ties() -> None:
    custom = ClassificationRule(id="mine", category="학습", tags=["study"], host_includes=["github.com"])
    result = classify(LinkCandidate(url="https://github.com/foo/bar"), [custom])
    assert result.rule_id == "mine"
    assert result.category == "학습"


def test_earlier_custom_rule_wins_ties_with_later_one() -> None:
    first = ClassificationRule(id="first", category="학습", host_includes=["example.com"])
    second = ClassificationRule(id="second", category="문서", host_includes=["example.com"])
    candidate = LinkCandidate(url="https://example.com/a")
    assert classify(candidate, [first, second]).rule_id == "first"
    assert classify(candidate, [second, first]).rule_id == "second"


def test_higher_builtin_score_beats_custom_rule() -> None:
    custom = ClassificationRule(id="mine", category="문서", keywords=["tool"])
    result = classify(LinkCandidate(url="https://github.com/foo/bar", title="a tool"), [custom])
    assert result.rule_id == "dev-github"


def test_signals_add_up() -> None:
    custom = ClassificationRule(
        id="combo",
        category="문서",
        host_includes=["example.com"],
        path_includes=["/guides"],
        regex=r"example\.com/guides/",
    )
    result = classify(LinkCandidate(url="https://EXAMPLE.com/guides/intro"), [custom])
    assert result.rule_id == "combo"
    assert result.confidence == pytest.approx(min(1.0, 0.2 + 0.15 * 9))
    assert result.evidence == ["domain:example.com", "path:/guides", r"regex:example\.com/guides/"]


def test_path_match_is_case_sensitive() -> None:
    custom = ClassificationRule(id="docs", category="문서", path_includes=["/Docs"])
    assert classify(LinkCandidate(url="https://example.com/docs/x"), [custom]).rule_id is None
    assert classify(LinkCandidate(url="https://example.com/Docs/x"), [custom]).rule_id == "docs"


def test_invalid_regex_is_skipped() -> None:
    broken = ClassificationRule(id="broken", category="문서", host_includes=["github.com"], regex="([")
    result = classify(LinkCandidate(url="https://github.com/foo"), [broken])
    assert result.rule_id == "broken"
    assert result.evidence == ["domain:github.com"]


def test_rule_without_matchers_is_inert() -> None:
    empty = ClassificationRule(id="empty", category="쇼핑")
    result = classify(LinkCandidate(url="https://example.com/"), [empty])
    assert result.rule_id is None
    assert result.category == "기타"


@pytest.mark.parametrize(
    ("url", "title", "category", "tags", "confidence", "evidence"),
    [
        ("https://example.com/blog/post", "", "문서", ["blog"], 0.3, "fallback:blog"),
        ("https://example.com/video/1", "", "영상", ["video"], 0.35, "fallback:video"),
        ("https://example.com/news/today", "", "뉴스", ["news"], 0.3, "fallback:news"),
        ("https://example.com/", "Breaking news tonight", "뉴스", ["news"], 0.3, "fallback:news"),
        ("https://example.com/watch", "My favourite YouTube clip", "영상", ["video"], 0.35, "fallback:video"),
        ("https://example.com/p/1", "Vimeo showcase", "영상", ["video"], 0.35, "fallback:video"),
        ("https://example.com/blog/video-tour", "", "문서", ["blog"], 0.3, "fallback:blog"),
        ("https://example.com/videos/news", "", "영상", ["video"], 0.35, "fallback:video"),
        ("https://example.com/news/x", "a blog roundup", "문서", ["blog"], 0.3, "fallback:blog"),
        ("https://example.com/", "hello", "기타", [], 0.1, "fallback:default"),
    ],
)
def test_fallbacks(url, title, category, tags, confidence, evidence) -> None:
    result = classify(LinkCandidate(url=url, title=title))
    assert result.rule_id is None
    assert result.category == category
    assert result.tags == tags
    assert result.confidence == confidence
    assert result.evidence == [evidence]


def test_malformed_url_still_classifies_by_keywords() -> None:
    result = classify(LinkCandidate(url="not a url", title="A Python Tutorial"))
    assert result.rule_id == "learning"
    assert result.confidence == pytest.approx(0.5)


def test_confidence_is_capped() -> None:
    assert rule_confidence(10) == 1.0
    assert rule_confidence(2) == pytest.approx(0.5)
