"""
Grading Rules

Per-card grading rules and the concept-group matcher. A concept group is a
list of interchangeable keyword patterns; an answer passes concept matching
when it hits at least one pattern from every group.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.exceptions import RuleValidationError

DEFAULT_NGRAM_THRESHOLD = 0.75

# Card field names, snake_case first, then the authoring format's camelCase
_CARD_KEYS = {
    'accepted': ('accepted_answers', 'acceptedAnswers', 'accepted'),
    'concept_groups': ('concept_groups', 'conceptGroups'),
    'ngram_threshold': ('ngram_threshold', 'ngramThreshold'),
}


@lru_cache(maxsize=1024)
def _compile_concept_pattern(pattern: str) -> Optional[re.Pattern]:
    """Compile a whole-word pattern, or None if it is not a valid regex."""
    try:
        return re.compile(rf"\b{pattern}\b", re.IGNORECASE)
    except re.error:
        return None


def _pattern_matches(pattern: str, normalized_text: str) -> bool:
    compiled = _compile_concept_pattern(pattern)
    if compiled is None:
        return pattern.lower() in normalized_text
    return compiled.search(normalized_text) is not None


def matches_concept_groups(normalized_text: str, groups: Sequence[Sequence[str]]) -> bool:
    """
    Check if normalized text matches all concept groups.

    Each group must have at least one matching pattern. Patterns that are
    not valid regular expressions fall back to plain substring containment.
    """
    return all(
        any(_pattern_matches(pattern, normalized_text) for pattern in group)
        for group in groups
    )


@dataclass
class GradingRule:
    """Optional grading rules attached to a card."""
    accepted: Optional[List[str]] = None
    concept_groups: Optional[List[List[str]]] = None
    ngram_threshold: Optional[float] = None

    def has_concept_groups(self) -> bool:
        return bool(self.concept_groups)

    def candidate_answers(self, correct_answer: str) -> List[str]:
        """Accepted phrasings with the canonical answer always included."""
        accepted = list(self.accepted) if self.accepted is not None else [correct_answer]
        if correct_answer in accepted:
            return accepted
        return [correct_answer] + accepted

    def validate(self) -> "GradingRule":
        """
        Check field types and ranges.

        Raises:
            RuleValidationError: If a field is malformed
        """
        if self.accepted is not None:
            if not isinstance(self.accepted, (list, tuple)) or not all(isinstance(a, str) for a in self.accepted):
                raise RuleValidationError("accepted must be a list of strings",
                                          field_name='accepted', invalid_value=self.accepted)

        if self.concept_groups is not None:
            if not isinstance(self.concept_groups, (list, tuple)):
                raise RuleValidationError("concept_groups must be a list of lists",
                                          field_name='concept_groups',
                                          invalid_value=self.concept_groups)
            for group in self.concept_groups:
                if not isinstance(group, (list, tuple)) or not all(isinstance(p, str) for p in group):
                    raise RuleValidationError("each concept group must be a list of strings",
                                              field_name='concept_groups', invalid_value=group)

        if self.ngram_threshold is not None:
            if isinstance(self.ngram_threshold, bool) or not isinstance(self.ngram_threshold, (int, float)):
                raise RuleValidationError("ngram_threshold must be a number",
                                          field_name='ngram_threshold',
                                          invalid_value=self.ngram_threshold)
            if not 0.0 <= self.ngram_threshold <= 1.0:
                raise RuleValidationError("ngram_threshold must be between 0 and 1",
                                          field_name='ngram_threshold',
                                          invalid_value=self.ngram_threshold)
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GradingRule":
        """Build and validate a rule from a mapping."""
        return cls(**card_grading_fields(data)).validate()

    @classmethod
    def from_card(cls, card: Mapping[str, Any]) -> Optional["GradingRule"]:
        """
        Build the rule for a card, or None if the card defines no grading fields.

        A card without a rule is graded with the conservative substring fallback.
        """
        fields = card_grading_fields(card)
        if all(value is None for value in fields.values()):
            return None
        return cls(**fields).validate()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.accepted is not None:
            data['accepted'] = list(self.accepted)
        if self.concept_groups is not None:
            data['concept_groups'] = [list(g) for g in self.concept_groups]
        if self.ngram_threshold is not None:
            data['ngram_threshold'] = self.ngram_threshold
        return data


def _first_present(data: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def card_grading_fields(card: Mapping[str, Any]) -> Dict[str, Any]:
    """Pick the raw grading fields of a card, accepting snake_case and camelCase keys."""
    return {name: _first_present(card, keys) for name, keys in _CARD_KEYS.items()}
