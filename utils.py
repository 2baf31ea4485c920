import random
from typing import List, Optional

from models import Flashcard, FlashcardStatus


class OboeteError(Exception):
    """Raised by the database layer when a query or connection fails."""


# Weaker cards come up more often during a study session
STATUS_WEIGHTS = {
    FlashcardStatus.NEW: 3,
    FlashcardStatus.BAD: 3,
    FlashcardStatus.OK: 2,
    FlashcardStatus.GOOD: 1,
}


def placeholder_flashcard() -> Flashcard:
    """Card shown on the study page when there is nothing to study."""
    return Flashcard(id=None, front="Error", back="Error", status=FlashcardStatus.NEW)


def select_random_flashcard(flashcards: List[Flashcard], rng: Optional[random.Random] = None) -> Optional[Flashcard]:
    """Pick one flashcard, weighted by its study status.

    Returns None when ``flashcards`` is empty.
    """
    if not flashcards:
        return None
    rng = rng or random
    weights = [STATUS_WEIGHTS.get(card.status, STATUS_WEIGHTS[FlashcardStatus.NEW]) for card in flashcards]
    return rng.choices(flashcards, weights=weights, k=1)[0]
