"""
Interactive state of the note browser.

``NoteBrowser`` owns the mode, the focused field and the selected note, and
applies user actions to the title field, content field and note list it is
given. Nothing here touches the terminal: key bindings ask ``accepts`` whether
an action applies right now and call ``dispatch`` when it does. Filesystem
work is returned as a command (a callable producing a fresh note list) for
the caller to run off the event loop; its result comes back through
``notes_loaded``.
"""

import enum
import logging
from pathlib import Path
from typing import Callable, List, Optional

from .repository import Note, NoteRepository
from .widgets import NoteList

logger = logging.getLogger(__name__)

Command = Callable[[], List[Note]]


class Mode(enum.Enum):
    LIST = "list"
    NEW = "new"
    EDIT = "edit"


class Focus(enum.Enum):
    LIST = "list"
    TITLE = "title"
    CONTENT = "content"


class Action(enum.Enum):
    QUIT = "quit"
    REFRESH = "refresh"
    NEW = "new"
    EDIT = "edit"
    SWITCH_FIELD = "switch_field"
    SAVE = "save"
    DELETE = "delete"
    BACK = "back"
    UP = "up"
    DOWN = "down"
    VIEW = "view"


class NoteBrowser:
    """Mode and selection state machine for the note manager."""

    def __init__(self, repository: NoteRepository, title_field, content_field, note_list: NoteList):
        self.repository = repository
        self.title_field = title_field
        self.content_field = content_field
        self.note_list = note_list

        self.mode = Mode.LIST
        self.focus = Focus.LIST
        self.notes: List[Note] = []
        self.selected_path: Optional[Path] = None
        self.editing_note: Optional[Note] = None
        self.title_entered = False
        self.running = True

        note_list.filter_buffer.on_text_changed += self._filter_changed

    @property
    def editing(self) -> bool:
        return self.mode in (Mode.NEW, Mode.EDIT)

    @property
    def selected_note(self) -> Optional[Note]:
        if self.selected_path is None:
            return None
        for note in self.notes:
            if note.path == self.selected_path:
                return note
        return None

    def accepts(self, action: Action) -> bool:
        """
        Whether ``action`` applies in the current state.

        Keys whose action is not accepted fall through to the focused widget.
        """
        if action in (Action.QUIT, Action.REFRESH):
            return True
        if action is Action.SWITCH_FIELD:
            return self.editing and self.focus is Focus.TITLE
        if action is Action.SAVE:
            return self.editing
        if action is Action.BACK:
            return self.editing or self.selected_note is not None or self.note_list.filtering
        if self.mode is not Mode.LIST:
            return False
        if action in (Action.EDIT, Action.DELETE):
            return self.selected_note is not None
        return action in (Action.NEW, Action.UP, Action.DOWN, Action.VIEW)

    def dispatch(self, action: Action) -> Optional[Command]:
        """
        Apply ``action`` to the state.

        Returns:
            A command whose result must be passed to ``notes_loaded``, or None
        """
        handler = getattr(self, action.value)
        return handler()

    # --- Actions ---

    def quit(self) -> None:
        self.running = False

    def refresh(self) -> Command:
        return self.repository.list_notes

    def new(self) -> None:
        self._clear_fields()
        self.selected_path = None
        self.title_entered = False
        self.focus = Focus.TITLE
        self.mode = Mode.NEW

    def edit(self) -> None:
        note = self.selected_note
        if note is None:
            return
        self.title_field.text = note.title
        self.content_field.text = self.repository.read_content(note.path)
        self.title_entered = True
        self.editing_note = note
        self.focus = Focus.TITLE
        self.mode = Mode.EDIT

    def switch_field(self) -> None:
        self.title_entered = True
        self.focus = Focus.CONTENT

    def save(self) -> Optional[Command]:
        title = self.title_field.text
        if not title:
            return None
        content = self.content_field.text
        existing = self.editing_note if self.mode is Mode.EDIT else None
        repository = self.repository

        def save_and_reload() -> List[Note]:
            repository.save(title, content, existing)
            return repository.list_notes()

        self._return_to_list()
        return save_and_reload

    def delete(self) -> Optional[Command]:
        note = self.selected_note
        if note is None:
            return None
        repository = self.repository

        def delete_and_reload() -> List[Note]:
            repository.delete(note.path)
            return repository.list_notes()

        return delete_and_reload

    def back(self) -> None:
        self.note_list.clear_filter()
        self._return_to_list()

    def up(self) -> None:
        self.note_list.move(-1)
        self._show_highlighted()

    def down(self) -> None:
        self.note_list.move(1)
        self._show_highlighted()

    def view(self) -> None:
        self._show_highlighted()

    # --- Results ---

    def notes_loaded(self, notes: List[Note]) -> None:
        """
        Replace the note collection with a fresh snapshot from disk.

        Notes are ordered newest first. The previous selection is kept if a
        note with the same path is still present, otherwise the newest note
        is selected.
        """
        self.notes = sorted(notes, key=lambda n: n.created_at, reverse=True)
        self.note_list.set_items(self.notes)
        logger.debug("Loaded %d notes", len(self.notes))

        if not self.notes:
            self.selected_path = None
            if not self.editing:
                self.content_field.text = ""
            return

        note = self.selected_note or self.notes[0]
        self._select(note)

    # --- Helpers ---

    def _filter_changed(self, buff) -> None:
        if self.mode is not Mode.LIST:
            return
        note = self.note_list.selected_item()
        if note is None:
            self.selected_path = None
            self.content_field.text = ""
        else:
            self._select(note)

    def _select(self, note: Note) -> None:
        self.selected_path = note.path
        self.note_list.select_item(note)
        if not self.editing:
            self.content_field.text = self.repository.read_content(note.path)

    def _show_highlighted(self) -> None:
        note = self.note_list.selected_item()
        if note is not None:
            self._select(note)

    def _clear_fields(self) -> None:
        self.title_field.text = ""
        self.content_field.text = ""

    def _return_to_list(self) -> None:
        self._clear_fields()
        self.selected_path = None
        self.editing_note = None
        self.title_entered = False
        self.focus = Focus.LIST
        self.mode = Mode.LIST
