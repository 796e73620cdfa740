"""
Configuration for notetui.

Everything the application needs to know at startup lives in a ``Settings``
value built once by ``Settings.from_environment()`` and handed to the parts
that need it. There is no configuration file; the only environment input is
``$HOME``, which locates the notes directory and the log file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from prompt_toolkit.styles import Style

# --- Configuration Constants ---
APP_NAME = "notetui"
NOTES_DIRNAME = ".notes"
NOTE_EXTENSION = ".md"
TITLE_CHAR_LIMIT = 50
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

HELP_TEXT = (
    "↑/↓:Navigate | enter:View | esc:Back | ctrl+n:New | tab:Content | "
    "ctrl+s:Save | ctrl+e:Edit | ctrl+d:Delete | ctrl+u:Refresh | ctrl+c:Quit"
)


# --- Color Constants ---
class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[91m'
    END = '\033[0m'


DEFAULT_STYLES: Dict[str, str] = {
    'frame.border': '#5f5fff',
    'frame.label': '#ff5faf bold',
    'search-bar': 'bg:#000000 #ffffff',
    'note-list.header': '#ff5faf bold',
    'note-list.title': '',
    'note-list.description': '#626262',
    'note-list.selected': 'bg:#0055aa #ffffff bold',
    'note-list.selected-description': 'bg:#0055aa #d0d0d0',
    'note-list.empty': '#626262 italic',
    'field-label': '#626262',
    'title-field': '#ff5faf bold',
    'content': '#ffffd7',
    'help': '#626262',
}


@dataclass(frozen=True)
class Theme:
    """Named style classes for the whole UI."""
    styles: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_STYLES))

    def to_style(self) -> Style:
        return Style.from_dict(dict(self.styles))


@dataclass(frozen=True)
class Settings:
    """Startup configuration passed explicitly to the application."""
    notes_dir: Path
    log_file: Path
    theme: Theme = field(default_factory=Theme)
    title_char_limit: int = TITLE_CHAR_LIMIT
    help_text: str = HELP_TEXT

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the process environment.

        Args:
            environ: Mapping to read ``HOME`` from, defaults to ``os.environ``

        Returns:
            Settings rooted at the user's home directory
        """
        if environ is None:
            environ = os.environ
        home = environ.get("HOME")
        home_path = Path(home) if home else Path.home()
        return cls(
            notes_dir=home_path / NOTES_DIRNAME,
            log_file=home_path / f".{APP_NAME}" / f"{APP_NAME}.log",
        )
