"""
Answer Matching System

Decides whether a free-text answer should be accepted. Layers are tried from
cheapest and most precise to most lenient, stopping at the first that accepts:
exact match, substring fallback (cards without a rule), concept groups and
finally n-gram fuzzy match against the accepted phrasings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from .normalizer import normalize, DEFAULT_NUMBER_WORD
from .rules import GradingRule, matches_concept_groups, DEFAULT_NGRAM_THRESHOLD
from .similarity import ngram_similarity, NGRAM_SIZE
from ..core.config import get_config
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MIN_SUBSTRING_LENGTH = 3


class MatchType(str, Enum):
    """Layer that accepted an answer."""
    EXACT = "exact"
    CONCEPT = "concept"
    FUZZY = "fuzzy"
    SUBSTRING = "substring"
    NONE = "none"


@dataclass
class MatchDetails:
    """Result of answer matching."""
    is_correct: bool
    match_type: MatchType
    similarity: Optional[float] = None
    matched_answer: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'is_correct': self.is_correct,
            'match_type': self.match_type.value,
        }
        if self.similarity is not None:
            data['similarity'] = self.similarity
        if self.matched_answer is not None:
            data['matched_answer'] = self.matched_answer
        return data


class AnswerMatcher:
    """Layered answer acceptance for flashcards."""

    def __init__(self,
                 ngram_threshold: float = DEFAULT_NGRAM_THRESHOLD,
                 ngram_size: int = NGRAM_SIZE,
                 min_substring_length: int = DEFAULT_MIN_SUBSTRING_LENGTH,
                 number_word: str = DEFAULT_NUMBER_WORD):
        """
        Initialize the matcher.

        Args:
            ngram_threshold: Threshold used when a rule does not set its own
            ngram_size: Character window length for fuzzy matching
            min_substring_length: Without a rule, a substring answer must be
                longer than this many characters
            number_word: Word that replaces a standalone "1" during normalization
        """
        self.ngram_threshold = ngram_threshold
        self.ngram_size = ngram_size
        self.min_substring_length = min_substring_length
        self.number_word = number_word

    @classmethod
    def from_config(cls, config=None) -> "AnswerMatcher":
        """Create a matcher from the application grading configuration."""
        if config is None:
            config = get_config()

        grading = config.grading
        return cls(
            ngram_threshold=grading.default_ngram_threshold,
            ngram_size=grading.ngram_size,
            min_substring_length=grading.min_substring_length,
            number_word=grading.number_word,
        )

    def normalize(self, text: str) -> str:
        return normalize(text, self.number_word)

    def similarity(self, user_input: str, target_answer: str) -> float:
        return ngram_similarity(user_input, target_answer, self.ngram_size, self.number_word)

    def is_correct(self, user_input: str, correct_answer: str,
                   rule: Optional[GradingRule] = None) -> bool:
        """
        Check whether the user's answer should be accepted.

        Args:
            user_input: The user's answer
            correct_answer: The canonical correct answer
            rule: Optional grading rules for more flexible matching

        Returns:
            True if the answer should be accepted
        """
        normalized_user = self.normalize(user_input)
        normalized_correct = self.normalize(correct_answer)

        # Empty input is always wrong
        if not normalized_user:
            return False

        if normalized_user == normalized_correct:
            return True

        if rule is None:
            return self._is_substring_match(normalized_user, normalized_correct)

        if rule.has_concept_groups() and matches_concept_groups(normalized_user, rule.concept_groups):
            return True

        threshold = self._threshold_for(rule)
        return any(similarity >= threshold
                   for _, similarity in self._candidate_similarities(normalized_user, correct_answer, rule))

    def get_match_details(self, user_input: str, correct_answer: str,
                          rule: Optional[GradingRule] = None) -> MatchDetails:
        """
        Run the same policy as is_correct and report which layer decided.

        Fuzzy results carry the best similarity found and the accepted
        phrasing that produced it, also when the answer is rejected.
        """
        normalized_user = self.normalize(user_input)
        normalized_correct = self.normalize(correct_answer)

        if not normalized_user:
            return MatchDetails(is_correct=False, match_type=MatchType.NONE)

        if normalized_user == normalized_correct:
            return MatchDetails(is_correct=True, match_type=MatchType.EXACT, similarity=1.0)

        if rule is None:
            if self._is_substring_match(normalized_user, normalized_correct):
                return MatchDetails(is_correct=True, match_type=MatchType.SUBSTRING)
            return MatchDetails(is_correct=False, match_type=MatchType.NONE)

        if rule.has_concept_groups() and matches_concept_groups(normalized_user, rule.concept_groups):
            return MatchDetails(is_correct=True, match_type=MatchType.CONCEPT)

        best_answer, best_similarity = self._best_candidate(normalized_user, correct_answer, rule)
        if best_similarity >= self._threshold_for(rule):
            return MatchDetails(is_correct=True, match_type=MatchType.FUZZY,
                                similarity=best_similarity, matched_answer=best_answer)

        logger.debug(f"No match for '{normalized_user}', best similarity {best_similarity:.3f}")
        return MatchDetails(is_correct=False, match_type=MatchType.NONE,
                            similarity=best_similarity, matched_answer=best_answer)

    def _is_substring_match(self, normalized_user: str, normalized_correct: str) -> bool:
        return (normalized_user in normalized_correct
                and len(normalized_user) > self.min_substring_length)

    def _threshold_for(self, rule: GradingRule) -> float:
        if rule.ngram_threshold is None:
            return self.ngram_threshold
        return rule.ngram_threshold

    def _candidate_similarities(self, normalized_user: str, correct_answer: str,
                                rule: GradingRule) -> Iterator[Tuple[str, float]]:
        for candidate in rule.candidate_answers(correct_answer):
            yield candidate, self.similarity(normalized_user, candidate)

    def _best_candidate(self, normalized_user: str, correct_answer: str,
                        rule: GradingRule) -> Tuple[Optional[str], float]:
        best_answer = None
        best_similarity = 0.0
        for candidate, similarity in self._candidate_similarities(normalized_user, correct_answer, rule):
            if best_answer is None or similarity > best_similarity:
                best_answer = candidate
                best_similarity = similarity
        return best_answer, best_similarity


_default_matcher = AnswerMatcher()


def is_correct(user_input: str, correct_answer: str, rule: Optional[GradingRule] = None) -> bool:
    """Check an answer with the default matcher settings."""
    return _default_matcher.is_correct(user_input, correct_answer, rule)


def get_match_details(user_input: str, correct_answer: str,
                      rule: Optional[GradingRule] = None) -> MatchDetails:
    """Explain an answer check with the default matcher settings."""
    return _default_matcher.get_match_details(user_input, correct_answer, rule)
