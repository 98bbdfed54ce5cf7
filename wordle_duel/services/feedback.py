"""
Feedback Service

Letter evaluation shared by both room variants, plus the helpers that shape
grids for transport (hard-mode masking and the opponent progress panel).
"""

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from ..config.game_settings import WORD_LENGTH
from ..models.errors import InvalidLengthError, InvalidWordError
from ..models.game import Attempt, Feedback


def normalize_word(word) -> str:
    """
    Normalize a client-supplied word and validate its shape.

    Raises:
        InvalidLengthError: If the word is not exactly WORD_LENGTH letters
        InvalidWordError: If the word contains non-alphabetic characters
    """
    if not isinstance(word, str):
        raise InvalidWordError("Guess must be a valid string")

    normalized = word.strip().upper()

    if len(normalized) != WORD_LENGTH:
        raise InvalidLengthError(f"The word must be exactly {WORD_LENGTH} letters")

    if not normalized.isalpha():
        raise InvalidWordError()

    return normalized


def compute_feedback(secret: str, guess: str) -> Tuple[Feedback, ...]:
    """
    Implements the Wordle letter evaluation algorithm.

    Exact matches are credited first and consume their letter, so a
    duplicated guess letter is never credited more often than it appears in
    the secret.
    """
    secret = secret.upper()
    guess = guess.upper()
    if len(secret) != WORD_LENGTH or len(guess) != WORD_LENGTH:
        raise InvalidLengthError()

    result: List[Feedback] = [Feedback.ABSENT] * WORD_LENGTH
    remaining = Counter(secret)

    # First pass: exact position matches
    for i in range(WORD_LENGTH):
        if guess[i] == secret[i]:
            result[i] = Feedback.CORRECT
            remaining[guess[i]] -= 1

    # Second pass: present letters out of position
    for i in range(WORD_LENGTH):
        if result[i] == Feedback.CORRECT:
            continue
        if remaining[guess[i]] > 0:
            result[i] = Feedback.PRESENT
            remaining[guess[i]] -= 1

    return tuple(result)


def is_winning(feedback: Sequence[Feedback]) -> bool:
    return len(feedback) == WORD_LENGTH and all(f == Feedback.CORRECT for f in feedback)


def mask_feedback(feedback: Sequence[Feedback]) -> Tuple[Feedback, ...]:
    """Hard-mode mask: a win is shown in full, anything else is neutral."""
    if is_winning(feedback):
        return tuple(feedback)
    return (Feedback.NEUTRAL,) * len(feedback)


def serialize_grid(grid: Sequence[Attempt], masked: bool = False) -> List[Dict]:
    """
    Serialize a grid for the player who owns it.

    With masked=True every non-winning row loses its feedback; a winning row
    stays visible in every later snapshot.
    """
    if not masked:
        return [attempt.to_dict() for attempt in grid]
    return [
        {"word": attempt.word, "feedback": [f.value for f in mask_feedback(attempt.feedback)]}
        for attempt in grid
    ]


def progress_rows(grid: Sequence[Attempt]) -> List[Dict]:
    """Feedback-only rows for the opponent panel; letters are never sent."""
    return [{"feedback": [f.value for f in attempt.feedback]} for attempt in grid]
