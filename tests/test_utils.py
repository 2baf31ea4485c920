"""
Unit tests for random flashcard selection and models helpers.
"""
import random
from collections import Counter

from models import Flashcard, FlashcardStatus, Folder, StudySet, status_label
from utils import placeholder_flashcard, select_random_flashcard


def test_select_random_flashcard_empty_returns_none():
    assert select_random_flashcard([]) is None


def test_select_random_flashcard_returns_member(sample_flashcards):
    rng = random.Random(42)
    for _ in range(50):
        assert select_random_flashcard(sample_flashcards, rng) in sample_flashcards


def test_select_random_flashcard_single_card():
    card = Flashcard(id=7, front="a", back="b", status=FlashcardStatus.GOOD)
    assert select_random_flashcard([card]) is card


def test_select_random_flashcard_prefers_weak_cards():
    bad = Flashcard(id=1, front="bad", back="x", status=FlashcardStatus.BAD)
    good = Flashcard(id=2, front="good", back="x", status=FlashcardStatus.GOOD)
    rng = random.Random(0)
    counts = Counter(select_random_flashcard([bad, good], rng).id for _ in range(2000))
    assert counts[1] > counts[2]


def test_select_random_flashcard_unknown_status_still_selectable():
    odd = Flashcard(id=9, front="?", back="?", status=42)
    assert select_random_flashcard([odd], random.Random(1)) is odd


def test_placeholder_flashcard_is_unsaved():
    card = placeholder_flashcard()
    assert card.id is None
    assert card.front == "Error"
    assert card.back == "Error"
    assert card.status == FlashcardStatus.NEW


def test_placeholder_flashcard_is_fresh_each_call():
    assert placeholder_flashcard() is not placeholder_flashcard()


def test_status_label_known_and_unknown():
    assert status_label(FlashcardStatus.BAD) == "Bad"
    assert status_label(FlashcardStatus.GOOD) == "Good"
    assert status_label(99) == "New"


def test_new_entities_have_no_id_and_empty_children():
    studyset = StudySet(id=None, name="Kanji")
    folder = Folder(id=None, name="N5")
    assert studyset.id is None and studyset.folders == []
    assert folder.id is None and folder.flashcards == []
    # Children lists are not shared between instances
    assert StudySet(id=None, name="other").folders is not studyset.folders
