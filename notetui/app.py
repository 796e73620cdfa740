"""
notetui - a terminal note manager.

Notes are listed on the left and shown on the right. Create a note with
Ctrl-N, type a title, press Tab to move to the content, and Ctrl-S to save.
Ctrl-E edits the selected note and Ctrl-D deletes it. Typing while the list
is shown filters it by title.

Notes are stored as ``~/.notes/<timestamp>-<title>.md``.
"""

import asyncio
import logging
import sys
from typing import List, Optional, Tuple

from prompt_toolkit import Application
from prompt_toolkit.application.current import get_app
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.widgets import TextArea

from .config import Colors, Settings
from .logging_setup import setup_logging
from .repository import NoteRepository
from .state import Action, Command, Focus, NoteBrowser
from .view import Compositor
from .widgets import NoteList, limit_length

logger = logging.getLogger(__name__)

KEYMAP: List[Tuple[Tuple[str, ...], Action]] = [
    (("c-c", "c-q"), Action.QUIT),
    (("c-u",), Action.REFRESH),
    (("c-n",), Action.NEW),
    (("c-e",), Action.EDIT),
    (("tab",), Action.SWITCH_FIELD),
    (("c-s",), Action.SAVE),
    (("c-d",), Action.DELETE),
    (("escape",), Action.BACK),
    (("up",), Action.UP),
    (("down",), Action.DOWN),
    (("enter",), Action.VIEW),
]

EAGER_ACTIONS = {Action.QUIT, Action.BACK}


class NoteApp:
    """Main application class for notetui."""

    def __init__(self, settings: Settings, repository: Optional[NoteRepository] = None):
        self.settings = settings
        self.repository = repository or NoteRepository(settings.notes_dir)

        self.title_field = TextArea(multiline=False, style="class:title-field")
        limit_length(self.title_field, settings.title_char_limit)
        self.content_field = TextArea(
            prompt="┃ ",
            style="class:content",
            read_only=Condition(lambda: not self.browser.editing),
        )
        self.note_list = NoteList()

        self.browser = NoteBrowser(self.repository, self.title_field, self.content_field, self.note_list)
        self.compositor = Compositor(self.browser, settings)
        self.kb = KeyBindings()
        self._setup_key_bindings()

    def _setup_key_bindings(self) -> None:
        """Bind every keymap entry to its browser action."""
        for keys, action in KEYMAP:
            accepted = Condition(lambda action=action: self.browser.accepts(action))
            for key in keys:
                self.kb.add(key, filter=accepted, eager=action in EAGER_ACTIONS)(
                    self._make_handler(action)
                )

    def _make_handler(self, action: Action):
        def handler(event):
            command = self.browser.dispatch(action)
            if not self.browser.running:
                event.app.exit()
                return
            self._dispatch(command)
            self._sync_focus(event.app)

        handler.__name__ = f"handle_{action.value}"
        return handler

    def _dispatch(self, command: Optional[Command]) -> None:
        """Run a filesystem command off the event loop and feed back its result."""
        if command is None:
            return
        app = get_app()

        async def run_command() -> None:
            loop = asyncio.get_running_loop()
            notes = await loop.run_in_executor(None, command)
            self.browser.notes_loaded(notes)
            app.invalidate()

        app.create_background_task(run_command())

    def _focus_target(self):
        if self.browser.focus is Focus.TITLE:
            return self.title_field
        if self.browser.focus is Focus.CONTENT:
            return self.content_field
        return self.note_list.filter_window

    def _sync_focus(self, app: Application) -> None:
        app.layout.focus(self._focus_target())

    def _before_render(self, app: Application) -> None:
        size = app.output.get_size()
        self.compositor.resize(size.columns, size.rows)

    def create_application(self) -> Application:
        return Application(
            layout=Layout(self.compositor, focused_element=self.note_list.filter_window),
            key_bindings=self.kb,
            style=self.settings.theme.to_style(),
            full_screen=True,
            before_render=self._before_render,
        )

    def run(self) -> None:
        """Run the application until the user quits."""
        app = self.create_application()
        app.run(pre_run=self._load_notes)

    async def run_async(self) -> None:
        app = self.create_application()
        await app.run_async(pre_run=self._load_notes)

    def _load_notes(self) -> None:
        self._dispatch(self.browser.refresh())


def main() -> None:
    """Main entry point for notetui."""
    settings = Settings.from_environment()
    setup_logging(settings.log_file)
    try:
        app = NoteApp(settings)
        app.repository.ensure_directory()
        app.run()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.exception("notetui terminated")
        print(f"{Colors.RED}Error: {e}{Colors.END}")
        sys.exit(1)


if __name__ == "__main__":
    main()
