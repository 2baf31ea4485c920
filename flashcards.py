"""Flashcards page: list, create/edit form and study session state.

The page never talks to the database. ``Flashcards.update`` takes a message
and returns the commands the application has to carry out; results come
back later as new messages.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from models import Flashcard, FlashcardStatus
from utils import placeholder_flashcard, select_random_flashcard


class StudyAction(Enum):
    BAD = FlashcardStatus.BAD
    OK = FlashcardStatus.OK
    GOOD = FlashcardStatus.GOOD


class FlashcardSide(Enum):
    FRONT = "front"
    BACK = "back"


@dataclass
class CreateEditFlashcardState:
    id: Optional[int] = None
    front: str = ""
    back: str = ""
    status: int = FlashcardStatus.NEW


# --- Messages ---
class Message:
    pass


@dataclass
class Upsert(Message):
    pass


@dataclass
class Upserted(Message):
    pass


@dataclass
class Load(Message):
    pass


@dataclass
class LoadedSingle(Message):
    flashcard: Flashcard


@dataclass
class LoadSingleFailed(Message):
    flashcard_id: int


@dataclass
class SetFlashcards(Message):
    flashcards: List[Flashcard]


@dataclass
class ToggleCreatePage(Message):
    flashcard: Optional[Flashcard] = None


@dataclass
class StudyFlashcards(Message):
    pass


@dataclass
class ContextPageFrontInput(Message):
    value: str


@dataclass
class ContextPageBackInput(Message):
    value: str


@dataclass
class UpdateFlashcardStatus(Message):
    flashcard: Flashcard
    action: StudyAction


@dataclass
class UpdatedStatus(Message):
    flashcards: List[Flashcard]


@dataclass
class SwapFlashcardSide(Message):
    pass


@dataclass
class Delete(Message):
    flashcard_id: Optional[int]


@dataclass
class Speak(Message):
    pass


# --- Commands ---
class Command:
    pass


@dataclass
class LoadFlashcards(Command):
    # None loads every flashcard
    folder_id: Optional[int]


@dataclass
class ToggleCreateFlashcardPage(Command):
    flashcard: Optional[Flashcard]


@dataclass
class UpsertFlashcard(Command):
    flashcard: Flashcard


@dataclass
class OpenStudyFolderFlashcardsPage(Command):
    pass


@dataclass
class UpdateFlashcardStatusCommand(Command):
    flashcard: Flashcard


@dataclass
class DeleteFlashcard(Command):
    flashcard_id: Optional[int]


@dataclass
class SpeakText(Command):
    text: str


@dataclass
class Flashcards:
    current_folder_id: Optional[int] = None
    flashcards: List[Flashcard] = field(default_factory=list)
    new_edit_flashcard: CreateEditFlashcardState = field(default_factory=CreateEditFlashcardState)
    currently_studying_flashcard: Flashcard = field(default_factory=placeholder_flashcard)
    currently_studying_flashcard_side: FlashcardSide = FlashcardSide.FRONT

    @property
    def visible_text(self) -> str:
        """Text of the side currently shown on the study page."""
        if self.currently_studying_flashcard_side is FlashcardSide.FRONT:
            return self.currently_studying_flashcard.front
        return self.currently_studying_flashcard.back

    def update(self, message: Message) -> List[Command]:
        commands = []

        if isinstance(message, Upsert):
            form = self.new_edit_flashcard
            if form.front.strip() and form.back.strip():
                commands.append(UpsertFlashcard(Flashcard(
                    id=form.id,
                    front=form.front,
                    back=form.back,
                    status=form.status,
                )))
        elif isinstance(message, Upserted):
            self.new_edit_flashcard = CreateEditFlashcardState()
            commands.append(LoadFlashcards(self.current_folder_id))
        elif isinstance(message, LoadedSingle):
            card = message.flashcard
            # Stale loads for a card no longer in the form are ignored
            if card.id == self.new_edit_flashcard.id:
                self.new_edit_flashcard = CreateEditFlashcardState(
                    id=card.id, front=card.front, back=card.back, status=card.status,
                )
        elif isinstance(message, LoadSingleFailed):
            if message.flashcard_id == self.new_edit_flashcard.id:
                self.new_edit_flashcard = CreateEditFlashcardState()
        elif isinstance(message, SetFlashcards):
            self.flashcards = list(message.flashcards)
        elif isinstance(message, ToggleCreatePage):
            card = message.flashcard
            if card is None:
                self.new_edit_flashcard = CreateEditFlashcardState()
            else:
                self.new_edit_flashcard = CreateEditFlashcardState(
                    id=card.id, front=card.front, back=card.back, status=card.status,
                )
            commands.append(ToggleCreateFlashcardPage(message.flashcard))
        elif isinstance(message, StudyFlashcards):
            commands.append(OpenStudyFolderFlashcardsPage())
        elif isinstance(message, ContextPageFrontInput):
            self.new_edit_flashcard.front = message.value
        elif isinstance(message, ContextPageBackInput):
            self.new_edit_flashcard.back = message.value
        elif isinstance(message, UpdateFlashcardStatus):
            card = message.flashcard
            graded = Flashcard(id=card.id, front=card.front, back=card.back, status=message.action.value)
            commands.append(UpdateFlashcardStatusCommand(graded))
        elif isinstance(message, UpdatedStatus):
            self.flashcards = list(message.flashcards)
            self.currently_studying_flashcard = (
                select_random_flashcard(self.flashcards) or placeholder_flashcard()
            )
            self.currently_studying_flashcard_side = FlashcardSide.FRONT
        elif isinstance(message, SwapFlashcardSide):
            if self.currently_studying_flashcard_side is FlashcardSide.FRONT:
                self.currently_studying_flashcard_side = FlashcardSide.BACK
            else:
                self.currently_studying_flashcard_side = FlashcardSide.FRONT
        elif isinstance(message, Delete):
            commands.append(DeleteFlashcard(message.flashcard_id))
        elif isinstance(message, Load):
            commands.append(LoadFlashcards(self.current_folder_id))
        elif isinstance(message, Speak):
            commands.append(SpeakText(self.visible_text))

        return commands
