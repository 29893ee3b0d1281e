"""
Answer Feedback

Short learner-facing messages built from a graded answer, including the
"almost right" case for answers that are one or two characters off.
"""

from dataclasses import dataclass
from typing import Optional

CORRECT_MESSAGE = "Rätt!"
NEAR_MISS_MESSAGE = "Nästan rätt!"
WRONG_MESSAGE = "Inte riktigt"

MAX_NEAR_MISS_DIFFERENCES = 2


@dataclass
class FeedbackMessage:
    title: str
    subtitle: Optional[str] = None


def is_near_miss(user_answer: Optional[str], correct_answer: Optional[str]) -> bool:
    """
    Check if an answer differs from the correct one by only one or two characters.

    Characters are compared position by position, so this catches typos and
    a missing trailing letter but not an insertion early in the word.
    """
    if not user_answer or not correct_answer:
        return False

    user = user_answer.lower().strip()
    correct = correct_answer.lower().strip()

    if abs(len(user) - len(correct)) > MAX_NEAR_MISS_DIFFERENCES:
        return False

    longer, shorter = (user, correct) if len(user) > len(correct) else (correct, user)
    differences = sum(
        1 for i, char in enumerate(longer)
        if i >= len(shorter) or shorter[i] != char
    )
    return 0 < differences <= MAX_NEAR_MISS_DIFFERENCES


def feedback_message(graded) -> FeedbackMessage:
    """
    Build the message shown after an answer was graded.

    Args:
        graded: A GradedAnswer

    Returns:
        FeedbackMessage with a title and an optional subtitle
    """
    if graded.is_correct:
        return FeedbackMessage(title=CORRECT_MESSAGE)

    if graded.near_miss:
        closest = graded.details.matched_answer or graded.correct_answer
        return FeedbackMessage(title=NEAR_MISS_MESSAGE, subtitle=f"Rätt svar: {closest}")

    return FeedbackMessage(title=WRONG_MESSAGE, subtitle=f"Rätt svar: {graded.correct_answer}")
