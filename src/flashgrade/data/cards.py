"""
Card Decks

Loads flashcard decks from YAML or JSON and audits their grading rules:
every authored accepted answer, in its original and lowercase form, has to
be accepted for its own card.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ..core.exceptions import CardDataError, RuleValidationError
from ..evaluation.matcher import AnswerMatcher
from ..evaluation.rules import GradingRule, card_grading_fields
from ..utils.logging import get_logger, PerformanceTimer

logger = get_logger(__name__)


@dataclass
class Card:
    """A flashcard with its grading fields."""
    id: str
    answer: str
    question: str = ""
    type: str = "basic"
    category: Optional[str] = None
    accepted_answers: Optional[List[str]] = None
    concept_groups: Optional[List[List[str]]] = None
    ngram_threshold: Optional[float] = None
    rule: Optional[GradingRule] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.rule = GradingRule.from_card({
            'accepted_answers': self.accepted_answers,
            'concept_groups': self.concept_groups,
            'ngram_threshold': self.ngram_threshold,
        })

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Card":
        """
        Build a card from a deck entry.

        Accepts both snake_case and camelCase grading fields.
        """
        fields = card_grading_fields(data)
        return cls(
            id=str(data['id']),
            answer=str(data['answer']),
            question=data.get('question', ""),
            type=data.get('type', "basic"),
            category=data.get('category'),
            accepted_answers=fields['accepted'],
            concept_groups=fields['concept_groups'],
            ngram_threshold=fields['ngram_threshold'],
        )


@dataclass
class AuditIssue:
    """An authored answer that its own card rejects."""
    card_id: str
    variant: str
    match_type: str
    similarity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'card_id': self.card_id,
            'variant': self.variant,
            'match_type': self.match_type,
            'similarity': self.similarity,
        }


def load_cards(path: Union[str, Path]) -> List[Card]:
    """
    Load a deck from a YAML or JSON file.

    The file holds either a list of cards or a mapping with a ``cards`` list.

    Raises:
        CardDataError: If the file is missing, unparsable or holds invalid cards
    """
    path = Path(path)
    if not path.exists():
        raise CardDataError(f"Card deck not found: {path}", file_path=str(path))

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise CardDataError(f"Could not parse card deck: {e}", file_path=str(path))
    except OSError as e:
        raise CardDataError(f"Could not read card deck: {e}", file_path=str(path))

    if isinstance(data, dict):
        data = data.get('cards')
    if not isinstance(data, list):
        raise CardDataError("Card deck must contain a list of cards", file_path=str(path))

    cards = []
    seen_ids = set()
    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or not _has_value(entry.get('id')) or not _has_value(entry.get('answer')):
            raise CardDataError(f"Card #{index} needs an 'id' and an 'answer'", file_path=str(path))

        card_id = str(entry['id'])
        if card_id in seen_ids:
            raise CardDataError(f"Duplicate card id: {card_id}", file_path=str(path), card_id=card_id)
        seen_ids.add(card_id)

        try:
            cards.append(Card.from_dict(entry))
        except RuleValidationError as e:
            raise CardDataError(f"Invalid grading rule: {e}", file_path=str(path), card_id=card_id)

    logger.info(f"Loaded {len(cards)} cards from {path}")
    return cards


def audit_card(card: Card, matcher: Optional[AnswerMatcher] = None) -> List[AuditIssue]:
    """Check that the card accepts every one of its accepted answers."""
    matcher = matcher or AnswerMatcher.from_config()
    issues = []

    for accepted in card.accepted_answers or []:
        # dict.fromkeys keeps order and drops the duplicate when already lowercase
        for variant in dict.fromkeys([accepted, accepted.lower()]):
            details = matcher.get_match_details(variant, card.answer, card.rule)
            if not details.is_correct:
                issues.append(AuditIssue(
                    card_id=card.id,
                    variant=variant,
                    match_type=details.match_type.value,
                    similarity=details.similarity,
                ))

    return issues


def audit_deck(cards: List[Card], matcher: Optional[AnswerMatcher] = None) -> List[AuditIssue]:
    """Audit every card of a deck."""
    matcher = matcher or AnswerMatcher.from_config()

    with PerformanceTimer(f"auditing {len(cards)} cards", logger):
        issues = [issue for card in cards for issue in audit_card(card, matcher)]

    if issues:
        logger.warning(f"Deck audit found {len(issues)} rejected accepted answers")
    return issues


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    return not isinstance(value, str) or bool(value.strip())
