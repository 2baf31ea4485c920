"""
Smoke tests for the tkinter window.
These tests are skipped if tkinter cannot initialize.
"""
from unittest.mock import MagicMock

import pytest

import flashcards
import studysets
from app import FlashcardsMessage, OboeteApp, Page, StudySetsMessage
from models import Flashcard, StudySet

oboete = pytest.importorskip("oboete")


@pytest.fixture
def tk_root():
    try:
        import tkinter as tk
        root = tk.Tk()
        root.withdraw()
    except Exception:
        pytest.skip("Tkinter not available")
    try:
        yield root
    finally:
        try:
            root.destroy()
        except Exception:
            pass


@pytest.fixture
def window(tk_root, runner, mock_db):
    app = OboeteApp(db_factory=lambda: mock_db, runner=runner, speaker=MagicMock())
    app.init()
    while app.process_pending():
        pass
    return oboete.OboeteWindow(app, root=tk_root)


def drawer_entries(window):
    entries = []
    pending = [window.drawer_frame]
    while pending:
        widget = pending.pop(0)
        for child in widget.winfo_children():
            if child.winfo_class() == "Entry":
                entries.append(child)
            pending.append(child)
    return entries


def all_texts(widget):
    texts = []
    for child in widget.winfo_children():
        try:
            texts.append(child.cget("text"))
        except Exception:
            pass
        texts.extend(all_texts(child))
    return texts


@pytest.mark.ui
def test_render_studysets_grid(window):
    window.app.studysets.studysets = [StudySet(id=i, name=f"Set {i}") for i in range(7)]
    window.render()
    texts = all_texts(window.content_frame)
    assert "Set 0" in texts
    assert "Set 6" in texts
    assert "New" in texts
    assert window.root.title() == "Oboete — Study Sets"


@pytest.mark.ui
def test_render_empty_flashcards_disables_study(window):
    window.app.current_page = Page.FOLDER_FLASHCARDS
    window.app.flashcards.current_folder_id = 3
    window.render()
    assert "Empty" in all_texts(window.content_frame)


@pytest.mark.ui
def test_render_study_page_and_drawer(window):
    app = window.app
    app.flashcards.flashcards = [Flashcard(id=1, front="犬", back="dog", status=0)]
    app.update(FlashcardsMessage(flashcards.StudyFlashcards()))
    app.update(StudySetsMessage(studysets.ToggleCreateStudySetPage(None)))
    window.render()

    assert "犬" in all_texts(window.content_frame)
    assert "Create" in all_texts(window.drawer_frame)



@pytest.mark.ui
def test_studyset_form_entry_feeds_name(window):
    window.studysets_message(studysets.ToggleCreateStudySetPage(None))
    (entry,) = drawer_entries(window)
    entry.var.set("Kanji")
    assert window.app.studysets.new_edit_studyset.name == "Kanji"


@pytest.mark.ui
def test_folder_form_entry_feeds_name(window):
    window.studysets_message(studysets.OpenStudySet(1))
    window.studysets_message(studysets.ToggleCreateFolderPage(None))
    (entry,) = drawer_entries(window)
    entry.var.set("Verbs")
    assert window.app.studysets.new_edit_folder.name == "Verbs"


@pytest.mark.ui
def test_flashcard_form_entries_feed_both_sides(window):
    card = Flashcard(id=3, front="鳥", back="bird", status=2)
    window.app.db.get_single_flashcard.return_value = card
    window.flashcards_message(flashcards.ToggleCreatePage(card))
    while window.app.process_pending():
        pass
    window.render()

    front, back = drawer_entries(window)
    assert front.var.get() == "鳥"
    front.var.set("小鳥")
    back.var.set("small bird")

    form = window.app.flashcards.new_edit_flashcard
    assert (form.id, form.front, form.back) == (3, "小鳥", "small bird")
    assert "Edit" in all_texts(window.drawer_frame)


@pytest.mark.ui
def test_background_reload_keeps_drawer_entries(window, sample_flashcards):
    window.flashcards_message(flashcards.ToggleCreatePage(None))
    front, back = drawer_entries(window)
    back.var.set("dog")

    window.app.flashcards.flashcards = sample_flashcards
    window.render()

    assert drawer_entries(window) == [front, back]
    assert window.app.flashcards.new_edit_flashcard.back == "dog"
