"""Classification and clustering engine."""

from .classifier import classify, rule_confidence
from .keywords import STOP_WORDS, extract_keywords, tokenize
from .rules import DEFAULT_RULES
from .topics import assign_cluster, jaccard

__all__ = [
    "classify",
    "rule_confidence",
    "STOP_WORDS",
    "extract_keywords",
    "tokenize",
    "DEFAULT_RULES",
    "assign_cluster",
    "jaccard",
]
