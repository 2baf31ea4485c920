#oboete.py - Flashcard study sets desktop application
import os
import logging
import tkinter as tk

import config
import flashcards
import studysets
from app import (
    NAV_PAGES,
    BackFromStudy,
    ContextPage,
    FlashcardsMessage,
    LaunchUrl,
    NavSelect,
    OboeteApp,
    Page,
    StudySetsMessage,
    ToggleContextPage,
)
from database import OboeteDb
from flashcards import FlashcardSide, StudyAction
from models import status_label
from speech import Speaker

logger = logging.getLogger(__name__)


class OboeteWindow:
    """Tk window rendering an ``OboeteApp``.

    Widgets are rebuilt from application state after every handled message.
    Text inputs update state without a rebuild so typing keeps focus.
    """

    def __init__(self, app, root=None):
        self.app = app
        self.root = root or tk.Tk()
        # (show_context, context_page, form) the drawer was last built from
        self._drawer_state = None

        self.WINDOW_WIDTH = config.UI_CONFIG['window_width']
        self.WINDOW_HEIGHT = config.UI_CONFIG['window_height']
        self.NAV_WIDTH = config.UI_CONFIG['nav_width']
        self.DRAWER_WIDTH = config.UI_CONFIG['drawer_width']

        # Colors
        self.BG_COLOR = config.UI_CONFIG['bg_color']
        self.NAV_BG_COLOR = config.UI_CONFIG['nav_bg_color']
        self.DRAWER_BG_COLOR = config.UI_CONFIG['drawer_bg_color']
        self.TEXT_COLOR = config.UI_CONFIG['text_color']
        self.ACCENT_COLOR = config.UI_CONFIG['accent_color']
        self.DESTRUCTIVE_COLOR = config.UI_CONFIG['destructive_color']
        self.STANDARD_COLOR = config.UI_CONFIG['standard_color']
        self.GRADE_COLORS = {
            StudyAction.BAD: config.UI_CONFIG['bad_color'],
            StudyAction.OK: config.UI_CONFIG['ok_color'],
            StudyAction.GOOD: config.UI_CONFIG['good_color'],
        }

        # Fonts
        self.TITLE_FONT = config.get_font('title')
        self.NORMAL_FONT = config.get_font('normal')
        self.SMALL_FONT = config.get_font('small')
        self.CARD_FONT = config.get_font('card')

        self.setup_ui()

    def setup_ui(self):
        """Set up the static window layout"""
        self.root.geometry(f"{self.WINDOW_WIDTH}x{self.WINDOW_HEIGHT}")
        self.root.configure(bg=self.BG_COLOR)

        menubar = tk.Menu(self.root)
        view_menu = tk.Menu(menubar, tearoff=0)
        view_menu.add_command(label="About", command=lambda: self.dispatch(ToggleContextPage(ContextPage.ABOUT)))
        menubar.add_cascade(label="View", menu=view_menu)
        self.root.config(menu=menubar)

        self.nav_frame = tk.Frame(self.root, bg=self.NAV_BG_COLOR, width=self.NAV_WIDTH)
        self.nav_frame.pack(side="left", fill="y")
        self.nav_frame.pack_propagate(False)

        self.drawer_frame = tk.Frame(self.root, bg=self.DRAWER_BG_COLOR, width=self.DRAWER_WIDTH)
        self.drawer_frame.pack_propagate(False)

        self.content_frame = tk.Frame(self.root, bg=self.BG_COLOR)
        self.content_frame.pack(side="left", fill="both", expand=True, padx=10, pady=10)

    # --- Message plumbing ---
    def dispatch(self, message, rerender=True):
        self.app.update(message)
        if rerender:
            self.render()

    def studysets_message(self, message, rerender=True):
        self.dispatch(StudySetsMessage(message), rerender)

    def flashcards_message(self, message, rerender=True):
        self.dispatch(FlashcardsMessage(message), rerender)

    def poll(self):
        """Pick up finished background tasks."""
        if self.app.process_pending():
            self.render()
        self.root.after(config.TASK_POLL_MS, self.poll)

    # --- Widget helpers ---
    def _clear(self, frame):
        for child in frame.winfo_children():
            child.destroy()

    def create_button(self, parent, text, command=None, bg=None, font=None, state="normal"):
        return tk.Button(parent, text=text, command=command, bg=bg or self.ACCENT_COLOR, fg=self.TEXT_COLOR,
                         font=font or self.NORMAL_FONT, cursor="hand2", borderwidth=0, highlightthickness=0,
                         padx=10, pady=4, state=state)

    def create_label(self, parent, text, font=None, bg=None, anchor="w"):
        return tk.Label(parent, text=text, fg=self.TEXT_COLOR, bg=bg or self.BG_COLOR,
                        font=font or self.NORMAL_FONT, anchor=anchor, justify="left")

    def create_input(self, parent, value, on_input):
        """Entry bound to ``on_input(text)`` on every edit."""
        var = tk.StringVar(self.root, value=value)
        entry = tk.Entry(parent, textvariable=var, font=self.NORMAL_FONT)
        var.trace_add("write", lambda *_args: on_input(var.get()))
        entry.var = var
        return entry

    def _scrollable(self, parent):
        canvas = tk.Canvas(parent, bg=self.BG_COLOR, highlightthickness=0, bd=0)
        scrollbar = tk.Scrollbar(parent, command=canvas.yview)
        inner = tk.Frame(canvas, bg=self.BG_COLOR)
        inner.bind("<Configure>", lambda _e: canvas.configure(scrollregion=canvas.bbox("all")))
        window_id = canvas.create_window((0, 0), window=inner, anchor="nw")
        canvas.bind("<Configure>", lambda e: canvas.itemconfigure(window_id, width=e.width))
        canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")
        canvas.pack(side="left", fill="both", expand=True)
        return inner

    # --- Rendering ---
    def render(self):
        self.root.title(self.app.window_title)
        self.render_nav()
        self.render_drawer()
        self.render_page()

    def render_nav(self):
        self._clear(self.nav_frame)
        for page in NAV_PAGES:
            active = page is self.app.nav_page
            button = self.create_button(
                self.nav_frame, page.value,
                command=lambda p=page: self.dispatch(NavSelect(p)),
                bg=self.ACCENT_COLOR if active else self.NAV_BG_COLOR,
            )
            button.pack(side="top", fill="x", padx=5, pady=(5, 0))

    def render_page(self):
        self._clear(self.content_frame)
        page = self.app.current_page
        if page is Page.STUDYSETS:
            if self.app.studysets.current_studyset_id is None:
                self.render_studysets()
            else:
                self.render_folders()
        elif page in (Page.FOLDER_FLASHCARDS, Page.ALL_FLASHCARDS):
            self.render_flashcards()
        elif page is Page.STUDY_FLASHCARDS:
            self.render_study_page()

    def render_studysets(self):
        """Grid of study sets"""
        header = tk.Frame(self.content_frame, bg=self.BG_COLOR)
        header.pack(side="top", fill="x", pady=(0, 10))
        self.create_label(header, "Study Sets", font=self.TITLE_FONT).pack(side="left", fill="x", expand=True)
        self.create_button(
            header, "New",
            command=lambda: self.studysets_message(studysets.ToggleCreateStudySetPage(None)),
        ).pack(side="right")

        grid = tk.Frame(self.content_frame, bg=self.BG_COLOR)
        grid.pack(side="top", fill="both", expand=True)
        for index, studyset in enumerate(self.app.studysets.studysets):
            row, column = divmod(index, config.STUDYSETS_PER_ROW)
            cell = tk.Frame(grid, bg=self.DRAWER_BG_COLOR, padx=6, pady=6)
            cell.grid(row=row, column=column, padx=4, pady=4, sticky="nsew")
            self.create_button(
                cell, studyset.name,
                command=lambda s=studyset: self.studysets_message(studysets.OpenStudySet(s.id)),
                bg=self.STANDARD_COLOR,
            ).pack(side="top", fill="x")
            actions = tk.Frame(cell, bg=self.DRAWER_BG_COLOR)
            actions.pack(side="top", fill="x", pady=(4, 0))
            self.create_button(
                actions, "Edit",
                command=lambda s=studyset: self.studysets_message(studysets.ToggleCreateStudySetPage(s)),
                font=self.SMALL_FONT,
            ).pack(side="left")
            self.create_button(
                actions, "Delete",
                command=lambda s=studyset: self.studysets_message(studysets.DeleteStudySet(s.id)),
                bg=self.DESTRUCTIVE_COLOR, font=self.SMALL_FONT,
            ).pack(side="right")
        for column in range(config.STUDYSETS_PER_ROW):
            grid.columnconfigure(column, weight=1)

    def render_folders(self):
        """Folders of the open study set"""
        state = self.app.studysets
        current = state.current_studyset
        header = tk.Frame(self.content_frame, bg=self.BG_COLOR)
        header.pack(side="top", fill="x", pady=(0, 10))
        self.create_button(
            header, "Back",
            command=lambda: self.studysets_message(studysets.Back()),
            bg=self.STANDARD_COLOR,
        ).pack(side="left")
        title = current.name if current is not None else "Folders"
        self.create_label(header, title, font=self.TITLE_FONT).pack(side="left", fill="x", expand=True, padx=10)
        self.create_button(
            header, "New",
            command=lambda: self.studysets_message(studysets.ToggleCreateFolderPage(None)),
        ).pack(side="right")

        if not state.folders:
            self.create_label(self.content_frame, "Empty", font=self.TITLE_FONT, anchor="center").pack(
                fill="both", expand=True)
            return

        body = self._scrollable(self.content_frame)
        for folder in state.folders:
            row = tk.Frame(body, bg=self.DRAWER_BG_COLOR, padx=6, pady=4)
            row.pack(side="top", fill="x", pady=2)
            self.create_label(row, folder.name, bg=self.DRAWER_BG_COLOR).pack(side="left", fill="x", expand=True)
            self.create_button(
                row, "Open",
                command=lambda f=folder: self.studysets_message(studysets.OpenFolder(f.id)),
            ).pack(side="right", padx=2)
            self.create_button(
                row, "Edit",
                command=lambda f=folder: self.studysets_message(studysets.ToggleCreateFolderPage(f)),
                bg=self.STANDARD_COLOR,
            ).pack(side="right", padx=2)
            self.create_button(
                row, "Delete",
                command=lambda f=folder: self.studysets_message(studysets.DeleteFolder(f.id)),
                bg=self.DESTRUCTIVE_COLOR,
            ).pack(side="right", padx=2)

    def render_flashcards(self):
        """Flashcards of a folder, or every flashcard"""
        state = self.app.flashcards
        header = tk.Frame(self.content_frame, bg=self.BG_COLOR)
        header.pack(side="top", fill="x", pady=(0, 10))
        if self.app.current_page is Page.FOLDER_FLASHCARDS:
            self.create_button(
                header, "Back",
                command=lambda: self.dispatch(NavSelect(Page.STUDYSETS)),
                bg=self.STANDARD_COLOR,
            ).pack(side="left")
        self.create_label(header, "Flashcards", font=self.TITLE_FONT).pack(side="left", fill="x", expand=True, padx=10)
        if state.current_folder_id is not None:
            self.create_button(
                header, "New",
                command=lambda: self.flashcards_message(flashcards.ToggleCreatePage(None)),
            ).pack(side="right", padx=2)
        self.create_button(
            header, "Study",
            command=lambda: self.flashcards_message(flashcards.StudyFlashcards()),
            state="normal" if state.flashcards else "disabled",
        ).pack(side="right", padx=2)

        if not state.flashcards:
            self.create_label(self.content_frame, "Empty", font=self.TITLE_FONT, anchor="center").pack(
                fill="both", expand=True)
            return

        body = self._scrollable(self.content_frame)
        for card in state.flashcards:
            row = tk.Frame(body, bg=self.DRAWER_BG_COLOR, padx=6, pady=4)
            row.pack(side="top", fill="x", pady=2)
            self.create_label(row, card.front, bg=self.DRAWER_BG_COLOR).pack(side="left", fill="x", expand=True)
            self.create_label(row, status_label(card.status), font=self.SMALL_FONT,
                              bg=self.DRAWER_BG_COLOR).pack(side="left", padx=6)
            self.create_button(
                row, "Edit",
                command=lambda c=card: self.flashcards_message(flashcards.ToggleCreatePage(c)),
                bg=self.STANDARD_COLOR,
            ).pack(side="right", padx=2)
            self.create_button(
                row, "Delete",
                command=lambda c=card: self.flashcards_message(flashcards.Delete(c.id)),
                bg=self.DESTRUCTIVE_COLOR,
            ).pack(side="right", padx=2)

    def render_study_page(self):
        state = self.app.flashcards
        header = tk.Frame(self.content_frame, bg=self.BG_COLOR)
        header.pack(side="top", fill="x", pady=(0, 10))
        self.create_button(
            header, "Back",
            command=lambda: self.dispatch(BackFromStudy()),
            bg=self.STANDARD_COLOR,
        ).pack(side="left")
        side = "Front" if state.currently_studying_flashcard_side is FlashcardSide.FRONT else "Back"
        self.create_label(header, side, font=self.SMALL_FONT).pack(side="left", padx=10)
        self.create_button(
            header, "Speak",
            command=lambda: self.flashcards_message(flashcards.Speak(), rerender=False),
        ).pack(side="right")

        card_button = tk.Button(
            self.content_frame, text=state.visible_text, font=self.CARD_FONT,
            bg=self.DRAWER_BG_COLOR, fg=self.TEXT_COLOR, activebackground=self.DRAWER_BG_COLOR,
            borderwidth=0, highlightthickness=0, wraplength=self.WINDOW_WIDTH - self.NAV_WIDTH - 80,
            command=lambda: self.flashcards_message(flashcards.SwapFlashcardSide()),
        )
        card_button.pack(side="top", fill="both", expand=True)

        options = tk.Frame(self.content_frame, bg=self.BG_COLOR)
        options.pack(side="top", fill="x", pady=(10, 0))
        current = state.currently_studying_flashcard
        for action in (StudyAction.BAD, StudyAction.OK, StudyAction.GOOD):
            self.create_button(
                options, action.name.capitalize(),
                command=lambda a=action: self.flashcards_message(flashcards.UpdateFlashcardStatus(current, a)),
                bg=self.GRADE_COLORS[action], font=self.TITLE_FONT,
                state="normal" if current.id is not None else "disabled",
            ).pack(side="left", fill="x", expand=True, padx=4, ipady=10)

    # --- Context drawer ---
    def _drawer_form(self):
        page = self.app.context_page
        if page is ContextPage.NEW_STUDYSET:
            return self.app.studysets.new_edit_studyset
        if page is ContextPage.NEW_FOLDER:
            return self.app.studysets.new_edit_folder
        if page is ContextPage.NEW_FLASHCARD:
            return self.app.flashcards.new_edit_flashcard
        return None

    def render_drawer(self):
        """Rebuild the drawer only when it is opened, switched or given a new form."""
        state = (self.app.show_context, self.app.context_page, self._drawer_form())
        previous = self._drawer_state
        if previous is not None and previous[:2] == state[:2] and previous[2] is state[2]:
            return
        self._drawer_state = state
        opened = previous is None or previous[:2] != state[:2]

        self._clear(self.drawer_frame)
        if not self.app.show_context:
            self.drawer_frame.pack_forget()
            return
        self.drawer_frame.pack(side="right", fill="y", before=self.content_frame)

        header = tk.Frame(self.drawer_frame, bg=self.DRAWER_BG_COLOR)
        header.pack(side="top", fill="x", padx=10, pady=10)
        self.create_label(header, self.app.context_title, font=self.TITLE_FONT,
                          bg=self.DRAWER_BG_COLOR).pack(side="left")
        self.create_button(
            header, "Close",
            command=lambda: self.dispatch(ToggleContextPage(self.app.context_page)),
            bg=self.STANDARD_COLOR, font=self.SMALL_FONT,
        ).pack(side="right")

        body = tk.Frame(self.drawer_frame, bg=self.DRAWER_BG_COLOR)
        body.pack(side="top", fill="both", expand=True, padx=15)
        page = self.app.context_page
        if page is ContextPage.ABOUT:
            self.render_about(body)
        elif page is ContextPage.NEW_STUDYSET:
            self.render_studyset_form(body, focus=opened)
        elif page is ContextPage.NEW_FOLDER:
            self.render_folder_form(body, focus=opened)
        elif page is ContextPage.NEW_FLASHCARD:
            self.render_flashcard_form(body, focus=opened)

    def render_about(self, parent):
        self.create_label(parent, config.APP_TITLE, font=self.TITLE_FONT, bg=self.DRAWER_BG_COLOR,
                          anchor="center").pack(side="top", fill="x", pady=(20, 5))
        link = tk.Label(parent, text=config.REPOSITORY, fg=self.ACCENT_COLOR, bg=self.DRAWER_BG_COLOR,
                        font=self.SMALL_FONT, cursor="hand2")
        link.pack(side="top", fill="x")
        link.bind("<Button-1>", lambda _e: self.dispatch(LaunchUrl(config.REPOSITORY), rerender=False))

    def _form_field(self, parent, title, value, on_input):
        self.create_label(parent, title, bg=self.DRAWER_BG_COLOR).pack(side="top", fill="x", pady=(10, 2))
        entry = self.create_input(parent, value, on_input)
        entry.pack(side="top", fill="x")
        return entry

    def render_studyset_form(self, parent, focus=True):
        form = self.app.studysets.new_edit_studyset
        entry = self._form_field(
            parent, "Name", form.name,
            lambda value: self.studysets_message(studysets.StudySetNameInput(value), rerender=False),
        )
        if focus:
            entry.focus_set()
        self.create_button(
            parent, "Edit" if form.id is not None else "Create",
            command=lambda: self.studysets_message(studysets.UpsertStudySet()),
        ).pack(side="top", fill="x", pady=15)

    def render_folder_form(self, parent, focus=True):
        form = self.app.studysets.new_edit_folder
        entry = self._form_field(
            parent, "Name", form.name,
            lambda value: self.studysets_message(studysets.FolderNameInput(value), rerender=False),
        )
        if focus:
            entry.focus_set()
        self.create_button(
            parent, "Edit" if form.id is not None else "Create",
            command=lambda: self.studysets_message(studysets.UpsertFolder()),
        ).pack(side="top", fill="x", pady=15)

    def render_flashcard_form(self, parent, focus=True):
        form = self.app.flashcards.new_edit_flashcard
        front = self._form_field(
            parent, "Front", form.front,
            lambda value: self.flashcards_message(flashcards.ContextPageFrontInput(value), rerender=False),
        )
        if focus:
            front.focus_set()
        self._form_field(
            parent, "Back", form.back,
            lambda value: self.flashcards_message(flashcards.ContextPageBackInput(value), rerender=False),
        )
        self.create_button(
            parent, "Edit" if form.id is not None else "Create",
            command=lambda: self.flashcards_message(flashcards.Upsert()),
        ).pack(side="top", fill="x", pady=15)

    def run(self):
        """Start the application mainloop"""
        self.app.init()
        self.render()
        self.root.after(config.TASK_POLL_MS, self.poll)
        self.root.mainloop()


def setup_logging():
    os.makedirs(config.LOG_DIR, exist_ok=True)
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        filename=config.LOG_FILE,
                        filemode='a')


def main():
    setup_logging()
    logger.info("Starting Oboete")
    app = OboeteApp(db_factory=OboeteDb.init, speaker=Speaker())
    OboeteWindow(app).run()


if __name__ == "__main__":
    main()
