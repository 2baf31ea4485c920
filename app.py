"""Application state and update loop.

``OboeteApp`` holds everything the window shows. The view feeds it messages
through ``update``; page commands become background tasks on the runner and
their results come back as messages through ``process_pending``. Nothing in
here imports tkinter.
"""
import logging
import webbrowser
from dataclasses import dataclass
from enum import Enum
from typing import Any

import config
import flashcards
import studysets
from runtime import TaskRunner

logger = logging.getLogger(__name__)


class Page(Enum):
    STUDYSETS = "Study Sets"
    ALL_FLASHCARDS = "All Flashcards"
    FOLDER_FLASHCARDS = "Flashcards"
    STUDY_FLASHCARDS = "Study"


# Pages listed in the nav bar, in order
NAV_PAGES = [Page.STUDYSETS, Page.ALL_FLASHCARDS]


class ContextPage(Enum):
    ABOUT = "About"
    NEW_STUDYSET = "Study Set"
    NEW_FOLDER = "Folder"
    NEW_FLASHCARD = "Flashcard"

    @property
    def title(self) -> str:
        return self.value


# --- Messages ---
class Message:
    pass


@dataclass
class LaunchUrl(Message):
    url: str


@dataclass
class ToggleContextPage(Message):
    context_page: ContextPage


@dataclass
class DbConnected(Message):
    db: Any


@dataclass
class NavSelect(Message):
    page: Page


@dataclass
class BackFromStudy(Message):
    pass


@dataclass
class StudySetsMessage(Message):
    message: studysets.Message


@dataclass
class FlashcardsMessage(Message):
    message: flashcards.Message


class OboeteApp:
    def __init__(self, db_factory=None, runner=None, speaker=None, url_opener=None):
        self.db_factory = db_factory
        self.runner = runner or TaskRunner()
        self.speaker = speaker
        self.url_opener = url_opener or webbrowser.open

        self.db = None
        self.context_page = ContextPage.ABOUT
        self.show_context = False
        self.context_title = ""
        self.nav_page = Page.STUDYSETS
        self.current_page = Page.STUDYSETS
        self.study_return_page = Page.FOLDER_FLASHCARDS
        self.window_title = config.APP_TITLE
        self.header_title = ""

        self.studysets = studysets.StudySets()
        self.flashcards = flashcards.Flashcards()

    def init(self):
        """Set the titles and start connecting to the database."""
        self.update_titles()
        if self.db_factory is None:
            logger.warning("No database configured")
            return
        self.runner.perform(self.db_factory, DbConnected)

    def update_titles(self):
        page = self.nav_page.value
        self.window_title = f"{config.APP_TITLE} — {page}"
        self.header_title = page

    def process_pending(self) -> int:
        """Deliver finished background work to ``update``."""
        messages = self.runner.drain()
        for message in messages:
            self.update(message)
        return len(messages)

    # --- Update loop ---
    def update(self, message: Message):
        if isinstance(message, LaunchUrl):
            self.url_opener(message.url)
        elif isinstance(message, ToggleContextPage):
            self.toggle_context_page(message.context_page)
        elif isinstance(message, DbConnected):
            self.db = message.db
            self.reload_current_page()
        elif isinstance(message, NavSelect):
            self.on_nav_select(message.page)
        elif isinstance(message, BackFromStudy):
            if self.speaker is not None:
                self.speaker.stop()
            self.current_page = self.study_return_page
            self._route_flashcards(flashcards.Load())
        elif isinstance(message, StudySetsMessage):
            if isinstance(message.message, (studysets.StudySetUpserted, studysets.FolderUpserted)):
                self.show_context = False
            self._route_studysets(message.message)
        elif isinstance(message, FlashcardsMessage):
            if isinstance(message.message, flashcards.Upserted):
                self.show_context = False
            elif isinstance(message.message, flashcards.LoadSingleFailed):
                if message.message.flashcard_id == self.flashcards.new_edit_flashcard.id:
                    self.show_context = False
            self._route_flashcards(message.message)
        else:
            logger.warning(f"Unhandled message: {message!r}")

    def toggle_context_page(self, context_page: ContextPage):
        if self.context_page == context_page:
            # Same page closes the drawer
            self.show_context = not self.show_context
        else:
            self.context_page = context_page
            self.show_context = True
        self.context_title = context_page.title

    def open_context_page(self, context_page: ContextPage):
        self.context_page = context_page
        self.show_context = True
        self.context_title = context_page.title

    def reload_current_page(self):
        if self.current_page is Page.STUDYSETS:
            self._route_studysets(studysets.Load())
        else:
            self._route_flashcards(flashcards.Load())

    def on_nav_select(self, page: Page):
        self.nav_page = page
        self.current_page = page
        if page is Page.ALL_FLASHCARDS:
            self.flashcards.current_folder_id = None
            self.flashcards.flashcards = []
            self._route_flashcards(flashcards.Load())
        else:
            self._route_studysets(studysets.Load())
        self.update_titles()

    # --- Commands ---
    def _perform(self, task, on_done, on_error=None):
        if self.db is None:
            logger.warning("Database not connected, dropping request")
            return
        self.runner.perform(task, on_done, on_error)

    def _route_studysets(self, message):
        for command in self.studysets.update(message):
            self._run_studysets_command(command)

    def _route_flashcards(self, message):
        for command in self.flashcards.update(message):
            self._run_flashcards_command(command)

    def _run_studysets_command(self, command):
        db = self.db

        def reply(message):
            return lambda _result: StudySetsMessage(message)

        if isinstance(command, studysets.LoadStudySets):
            self._perform(
                lambda: db.get_all_studysets(),
                lambda result: StudySetsMessage(studysets.SetStudySets(result)),
                on_error=lambda _e: StudySetsMessage(studysets.SetStudySets([])),
            )
        elif isinstance(command, studysets.UpsertStudySetCommand):
            done = reply(studysets.StudySetUpserted())
            self._perform(lambda: db.upsert_studyset(command.studyset), done, on_error=done)
        elif isinstance(command, studysets.DeleteStudySetCommand):
            if command.studyset_id is None:
                self._route_studysets(studysets.Load())
                return
            done = reply(studysets.Load())
            self._perform(lambda: db.delete_studyset(command.studyset_id), done, on_error=done)
        elif isinstance(command, studysets.ToggleCreateStudySetPageCommand):
            if command.studyset is None:
                self.toggle_context_page(ContextPage.NEW_STUDYSET)
            else:
                self.open_context_page(ContextPage.NEW_STUDYSET)
        elif isinstance(command, studysets.LoadFolders):
            self._perform(
                lambda: db.get_studyset_folders(command.studyset_id),
                lambda result: StudySetsMessage(studysets.SetFolders(result)),
                on_error=lambda _e: StudySetsMessage(studysets.SetFolders([])),
            )
        elif isinstance(command, studysets.UpsertFolderCommand):
            done = reply(studysets.FolderUpserted())
            self._perform(lambda: db.upsert_folder(command.folder, command.studyset_id), done, on_error=done)
        elif isinstance(command, studysets.DeleteFolderCommand):
            if command.folder_id is None:
                self._route_studysets(studysets.Load())
                return
            done = reply(studysets.Load())
            self._perform(lambda: db.delete_folder(command.folder_id), done, on_error=done)
        elif isinstance(command, studysets.ToggleCreateFolderPageCommand):
            if command.folder is None:
                self.toggle_context_page(ContextPage.NEW_FOLDER)
            else:
                self.open_context_page(ContextPage.NEW_FOLDER)
        elif isinstance(command, studysets.OpenFolderCommand):
            self.flashcards.current_folder_id = command.folder_id
            self.flashcards.flashcards = []
            self.current_page = Page.FOLDER_FLASHCARDS
            self._route_flashcards(flashcards.Load())

    def _run_flashcards_command(self, command):
        db = self.db
        folder_id = self.flashcards.current_folder_id

        def reply(message):
            return lambda _result: FlashcardsMessage(message)

        if isinstance(command, flashcards.LoadFlashcards):
            if command.folder_id is None:
                task = lambda: db.get_all_flashcards()
            else:
                task = lambda: db.get_folder_flashcards(command.folder_id)
            self._perform(
                task,
                lambda result: FlashcardsMessage(flashcards.SetFlashcards(result)),
                on_error=lambda _e: FlashcardsMessage(flashcards.SetFlashcards([])),
            )
        elif isinstance(command, flashcards.ToggleCreateFlashcardPage):
            card = command.flashcard
            if card is None:
                self.toggle_context_page(ContextPage.NEW_FLASHCARD)
                return
            self.open_context_page(ContextPage.NEW_FLASHCARD)
            if card.id is not None:
                self._perform(
                    lambda: db.get_single_flashcard(card.id),
                    lambda result: FlashcardsMessage(flashcards.LoadedSingle(result)),
                    on_error=lambda _e: FlashcardsMessage(flashcards.LoadSingleFailed(card.id)),
                )
        elif isinstance(command, flashcards.UpsertFlashcard):
            done = reply(flashcards.Upserted())
            self._perform(lambda: db.upsert_flashcard(command.flashcard, folder_id), done, on_error=done)
        elif isinstance(command, flashcards.OpenStudyFolderFlashcardsPage):
            if self.current_page is not Page.STUDY_FLASHCARDS:
                self.study_return_page = self.current_page
            self.current_page = Page.STUDY_FLASHCARDS
            self._route_flashcards(flashcards.UpdatedStatus(self.flashcards.flashcards))
        elif isinstance(command, flashcards.UpdateFlashcardStatusCommand):
            pool = list(self.flashcards.flashcards)

            def grade_and_reload():
                db.update_flashcard_status(command.flashcard)
                if folder_id is None:
                    return db.get_all_flashcards()
                return db.get_folder_flashcards(folder_id)

            self._perform(
                grade_and_reload,
                lambda result: FlashcardsMessage(flashcards.UpdatedStatus(result)),
                on_error=lambda _e: FlashcardsMessage(flashcards.UpdatedStatus(pool)),
            )
        elif isinstance(command, flashcards.DeleteFlashcard):
            if command.flashcard_id is None:
                self._route_flashcards(flashcards.Load())
                return
            done = reply(flashcards.Load())
            self._perform(lambda: db.delete_flashcard(command.flashcard_id), done, on_error=done)
        elif isinstance(command, flashcards.SpeakText):
            if self.speaker is not None:
                self.speaker.speak(command.text)
