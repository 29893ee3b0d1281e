"""
flashgrade

Free-text answer grading for flashcards: normalization, character n-gram
similarity, concept groups and a layered acceptance policy.
"""

__version__ = "1.0.0"

from .evaluation import (
    GradingRule,
    AnswerMatcher,
    MatchDetails,
    MatchType,
    normalize,
    ngram_similarity,
    matches_concept_groups,
    is_correct,
    get_match_details,
)

__all__ = [
    "GradingRule",
    "AnswerMatcher",
    "MatchDetails",
    "MatchType",
    "normalize",
    "ngram_similarity",
    "matches_concept_groups",
    "is_correct",
    "get_match_details",
]
