"""Tokenization and frequency-ranked keyword extraction."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List

# Anything that is not a letter, digit or whitespace becomes a separator.
# ``\w`` covers Unicode letters and digits (Hangul included) plus ``_``.
_STRIP_RE = re.compile(r"[^\w\s]|_")
_SPLIT_RE = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 2

STOP_WORDS = frozenset(
    {
        # english function words
        "the", "and", "for", "with", "that", "this", "from", "you", "are",
        "was", "were", "will", "have", "has", "had", "your", "into", "about",
        "of", "in", "to", "a", "on", "at", "by", "is", "it", "be", "or", "as",
        "an", "we", "if", "so", "but", "can", "do", "did", "not", "no", "yes",
        "use", "using", "used", "see", "more", "less",
        # web boilerplate
        "https", "http", "www", "com", "org", "net", "co", "kr", "blog",
        "html", "amp", "rt", "nbsp",
        # korean particles, copula and filler
        "한", "이", "가", "은", "는", "을", "를", "에", "의", "으로", "에서",
        "하다", "있다", "없다", "이다", "하기", "하는", "했다", "보기", "소개",
        "정리",
    }
)


def tokenize(text: str | None) -> List[str]:
    """Return lower-cased significant tokens from ``text``."""
    if not text:
        return []
    cleaned = _STRIP_RE.sub(" ", text.lower())
    return [
        token
        for token in _SPLIT_RE.split(cleaned)
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def rank_keywords(texts: Iterable[str | None], max_count: int = 5) -> List[str]:
    """Count tokens across all ``texts`` and return the top ``max_count``.

    Ties are broken by ascending token order so the output is reproducible.
    """
    counts: Counter[str] = Counter()
    for text in texts:
        counts.update(tokenize(text))
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [token for token, _ in ranked[: max(max_count, 0)]]


def extract_keywords(title: str | None, description: str | None, selection_text: str | None, max_count: int = 5) -> List[str]:
    return rank_keywords((title, description, selection_text), max_count=max_count)


__all__ = ["STOP_WORDS", "tokenize", "rank_keywords", "extract_keywords"]
