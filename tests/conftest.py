"""
Pytest configuration and shared fixtures for Oboete tests.
"""
import pytest
import os
import sys
from unittest.mock import MagicMock

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import Flashcard, FlashcardStatus, Folder, StudySet
from utils import OboeteError


class ImmediateRunner:
    """Runs tasks synchronously and keeps their messages until drained."""

    def __init__(self):
        self.messages = []
        self.tasks = []

    def perform(self, task, on_done, on_error=None):
        self.tasks.append(task)
        try:
            message = on_done(task())
        except OboeteError as e:
            message = on_error(e) if on_error is not None else None
        if message is not None:
            self.messages.append(message)

    def drain(self):
        messages, self.messages = self.messages, []
        return messages


@pytest.fixture
def runner():
    return ImmediateRunner()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    monkeypatch.setenv('OBOETE_DB_SERVER', '(localdb)\\MSSQLLocalDB')
    monkeypatch.setenv('OBOETE_DB_NAME', 'Oboete_Test')
    monkeypatch.setenv('OBOETE_DB_TRUSTED', 'yes')
    monkeypatch.setenv('OBOETE_TASK_POLL_MS', '25')
    monkeypatch.setenv('OBOETE_SPEECH_RATE', '180')


@pytest.fixture
def sample_flashcards():
    """Return flashcards covering every status."""
    return [
        Flashcard(id=1, front="犬", back="dog", status=FlashcardStatus.NEW),
        Flashcard(id=2, front="猫", back="cat", status=FlashcardStatus.BAD),
        Flashcard(id=3, front="鳥", back="bird", status=FlashcardStatus.OK),
        Flashcard(id=4, front="魚", back="fish", status=FlashcardStatus.GOOD),
    ]


@pytest.fixture
def sample_studyset():
    """Return a persisted study set with one folder."""
    return StudySet(id=1, name="Japanese", folders=[Folder(id=10, name="Animals")])


@pytest.fixture
def mock_db():
    """OboeteDb stand-in recording every call."""
    db = MagicMock()
    db.get_all_studysets.return_value = []
    db.get_studyset_folders.return_value = []
    db.get_folder_flashcards.return_value = []
    db.get_all_flashcards.return_value = []
    return db

