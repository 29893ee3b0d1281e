"""
Answer Grading Session

Grades learner answers with an AnswerMatcher, adds near-miss detection and
timing metadata, and keeps per-session statistics.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .feedback import is_near_miss
from .matcher import AnswerMatcher, MatchDetails
from .rules import GradingRule
from ..core.exceptions import GradingError
from ..utils.logging import get_logger, PerformanceTimer

logger = get_logger(__name__)


@dataclass
class GradedAnswer:
    """Result of grading one answer."""
    user_input: str
    correct_answer: str
    details: MatchDetails
    near_miss: bool = False
    card_id: Optional[str] = None
    grading_time_ms: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_correct(self) -> bool:
        return self.details.is_correct

    def to_dict(self) -> Dict[str, Any]:
        data = self.details.to_dict()
        data.update({
            'user_input': self.user_input,
            'correct_answer': self.correct_answer,
            'near_miss': self.near_miss,
            'card_id': self.card_id,
            'grading_time_ms': self.grading_time_ms,
            'timestamp': self.timestamp.isoformat(),
        })
        return data


def _empty_stats() -> Dict[str, Any]:
    return {
        'total_graded': 0,
        'correct_count': 0,
        'incorrect_count': 0,
        'near_miss_count': 0,
        'match_type_distribution': {},
    }


class AnswerGrader:
    """Grades learner answers and tracks session statistics."""

    def __init__(self, matcher: Optional[AnswerMatcher] = None):
        """
        Initialize the answer grader.

        Args:
            matcher: Matcher to use (built from the configuration if None)
        """
        self.matcher = matcher or AnswerMatcher.from_config()
        self.grading_stats = _empty_stats()

    def grade(self, user_input: str, correct_answer: str,
              rule: Optional[GradingRule] = None,
              card_id: Optional[str] = None) -> GradedAnswer:
        """
        Grade a single answer.

        Args:
            user_input: The learner's answer
            correct_answer: The canonical correct answer
            rule: Optional grading rule of the card
            card_id: Optional card identifier for logging and statistics

        Returns:
            GradedAnswer with match details
        """
        start_time = time.perf_counter()
        details = self.matcher.get_match_details(user_input, correct_answer, rule)

        near_miss = False
        if not details.is_correct:
            near_miss = (is_near_miss(user_input, correct_answer)
                         or is_near_miss(user_input, details.matched_answer))

        graded = GradedAnswer(
            user_input=user_input,
            correct_answer=correct_answer,
            details=details,
            near_miss=near_miss,
            card_id=card_id,
            grading_time_ms=(time.perf_counter() - start_time) * 1000,
        )

        self._update_stats(graded)
        logger.debug(
            f"Graded card {card_id or '-'}: {details.match_type.value} "
            f"({'correct' if details.is_correct else 'incorrect'})",
            extra={'card_id': card_id, 'match_type': details.match_type.value}
        )
        return graded

    def grade_card(self, card, user_input: str) -> GradedAnswer:
        """Grade an answer against a Card's own answer and rule."""
        return self.grade(user_input, card.answer, card.rule, card_id=card.id)

    def grade_batch(self, user_inputs: List[str], correct_answers: List[str],
                    rules: Optional[List[Optional[GradingRule]]] = None) -> List[GradedAnswer]:
        """
        Grade multiple answers.

        Raises:
            GradingError: If the input lists differ in length
        """
        if len(user_inputs) != len(correct_answers):
            raise GradingError("User inputs and correct answers must have the same length",
                               inputs=len(user_inputs), answers=len(correct_answers))
        if rules is not None and len(rules) != len(user_inputs):
            raise GradingError("Rules must match the number of answers",
                               inputs=len(user_inputs), rules=len(rules))

        with PerformanceTimer(f"grading batch of {len(user_inputs)} answers", logger):
            graded = [
                self.grade(user_input, correct, rules[i] if rules else None)
                for i, (user_input, correct) in enumerate(zip(user_inputs, correct_answers))
            ]

        logger.info(f"Batch grading complete: {sum(1 for g in graded if g.is_correct)}/{len(graded)} correct")
        return graded

    def _update_stats(self, graded: GradedAnswer) -> None:
        stats = self.grading_stats
        stats['total_graded'] += 1

        if graded.is_correct:
            stats['correct_count'] += 1
        else:
            stats['incorrect_count'] += 1

        if graded.near_miss:
            stats['near_miss_count'] += 1

        match_type = graded.details.match_type.value
        distribution = stats['match_type_distribution']
        distribution[match_type] = distribution.get(match_type, 0) + 1

    def get_grading_statistics(self) -> Dict[str, Any]:
        """Get grading statistics for this session."""
        total = self.grading_stats['total_graded']

        if total == 0:
            return {'message': 'No answers graded yet'}

        stats = dict(self.grading_stats)
        stats['match_type_distribution'] = dict(self.grading_stats['match_type_distribution'])
        stats['accuracy_rate'] = stats['correct_count'] / total
        stats['match_type_distribution_pct'] = {
            k: (v / total) * 100 for k, v in stats['match_type_distribution'].items()
        }
        return stats

    def reset_statistics(self) -> None:
        self.grading_stats = _empty_stats()

    def explain(self, graded: GradedAnswer) -> str:
        """Generate human-readable explanation of the grade."""
        details = graded.details
        lines = [
            f"Grade: {'CORRECT' if graded.is_correct else 'INCORRECT'}",
            f"Match Type: {details.match_type.value}",
        ]

        if details.similarity is not None:
            lines.append(f"Similarity: {details.similarity:.3f}")
        if details.matched_answer is not None:
            label = "Matched Answer" if graded.is_correct else "Closest Answer"
            lines.append(f"{label}: {details.matched_answer}")
        if graded.near_miss:
            lines.append("Near Miss: only one or two characters off")

        return "\n".join(lines)
