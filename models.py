from dataclasses import dataclass, field
from typing import List, Optional


class FlashcardStatus:
    """Study status codes stored on each flashcard."""
    NEW = 0
    BAD = 1
    OK = 2
    GOOD = 3


STATUS_LABELS = {
    FlashcardStatus.NEW: "New",
    FlashcardStatus.BAD: "Bad",
    FlashcardStatus.OK: "Ok",
    FlashcardStatus.GOOD: "Good",
}


def status_label(status: int) -> str:
    return STATUS_LABELS.get(status, STATUS_LABELS[FlashcardStatus.NEW])


@dataclass
class Flashcard:
    id: Optional[int]
    front: str
    back: str
    status: int = FlashcardStatus.NEW


@dataclass
class Folder:
    id: Optional[int]
    name: str
    flashcards: List[Flashcard] = field(default_factory=list)


@dataclass
class StudySet:
    id: Optional[int]
    name: str
    folders: List[Folder] = field(default_factory=list)
