"""
Evaluation Module

Answer evaluation with text normalization, character n-gram similarity,
concept-group matching and a layered acceptance policy.
"""

from .normalizer import normalize
from .similarity import char_ngrams, cosine_similarity, ngram_similarity
from .rules import GradingRule, matches_concept_groups
from .matcher import AnswerMatcher, MatchDetails, MatchType, is_correct, get_match_details
from .grader import AnswerGrader, GradedAnswer
from .feedback import FeedbackMessage, feedback_message, is_near_miss

__all__ = [
    "normalize",
    "char_ngrams",
    "cosine_similarity",
    "ngram_similarity",
    "GradingRule",
    "matches_concept_groups",
    "AnswerMatcher",
    "MatchDetails",
    "MatchType",
    "is_correct",
    "get_match_details",
    "AnswerGrader",
    "GradedAnswer",
    "FeedbackMessage",
    "feedback_message",
    "is_near_miss",
]
