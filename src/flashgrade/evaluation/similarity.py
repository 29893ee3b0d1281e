"""
Character N-Gram Similarity

Bag-of-trigrams cosine similarity. Character windows tolerate swapped,
missing or extra letters and treat accented letters like any other.
"""

import math
from collections import Counter

from .normalizer import normalize, DEFAULT_NUMBER_WORD

NGRAM_SIZE = 3


def char_ngrams(text: str, n: int = NGRAM_SIZE) -> Counter:
    """Count the length-n windows of text padded with one space on each side."""
    padded = f" {text} "
    return Counter(padded[i:i + n] for i in range(len(padded) - n + 1))


def cosine_similarity(a: Counter, b: Counter) -> float:
    """
    Cosine similarity between two n-gram frequency vectors.

    Returns 0.0 when either vector has zero magnitude.
    """
    # One sqrt of the integer product, so identical bags score exactly 1.0
    denominator = math.sqrt(sum(v * v for v in a.values()) * sum(v * v for v in b.values()))
    if denominator == 0:
        return 0.0

    # Summing over sorted shared keys keeps sim(a, b) == sim(b, a) exactly
    dot = sum(a[k] * b[k] for k in sorted(a.keys() & b.keys()))
    return min(1.0, max(0.0, dot / denominator))


def ngram_similarity(user_input: str, target_answer: str, n: int = NGRAM_SIZE,
                     number_word: str = DEFAULT_NUMBER_WORD) -> float:
    """
    Similarity in [0, 1] between two answers after normalization.

    Args:
        user_input: The user's answer
        target_answer: The answer to compare against
        n: Window length
        number_word: Word that replaces a standalone "1"

    Returns:
        Cosine similarity of the n-gram bags, 0.0 if either side is empty
    """
    normalized_user = normalize(user_input, number_word)
    normalized_target = normalize(target_answer, number_word)

    if not normalized_user or not normalized_target:
        return 0.0

    return cosine_similarity(char_ngrams(normalized_user, n),
                             char_ngrams(normalized_target, n))
