"""
Flat-file note storage.

Each note is one file in the notes directory named
``<created_at>-<sanitized title>.md``. The filename is the only place the
creation time and title are recorded, so there is no index to keep in sync.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .config import NOTE_EXTENSION

logger = logging.getLogger(__name__)

TIMESTAMP_DELIMITER = "-"
DESCRIPTION_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Note:
    """A note as recovered from its filename. Content stays on disk."""
    title: str
    path: Path
    created_at: int

    @property
    def description(self) -> str:
        return datetime.fromtimestamp(self.created_at).strftime(DESCRIPTION_FORMAT)

    @property
    def filter_value(self) -> str:
        return self.title


def sanitize_filename(title: str) -> str:
    """
    Map a title to the filename-safe form used in note paths.

    Letters, digits, ``-`` and ``_`` are kept; every other character becomes
    ``-``. A trailing ``.md`` is dropped first so it is not doubled.

    Args:
        title: The user-entered title

    Returns:
        The sanitized title
    """
    if title.endswith(NOTE_EXTENSION):
        title = title[:-len(NOTE_EXTENSION)]
    return "".join(
        ch if ch.isalpha() or ch.isnumeric() or ch in "-_" else "-"
        for ch in title
    )


def parse_note_filename(filename: str) -> Optional[Tuple[int, str]]:
    """
    Split a note filename into ``(created_at, title)``.

    Returns None for names that do not follow the note naming scheme.
    """
    if not filename.endswith(NOTE_EXTENSION):
        return None
    prefix, sep, rest = filename.partition(TIMESTAMP_DELIMITER)
    if not sep:
        return None
    if not (prefix.isascii() and prefix.isdigit()):
        return None
    title = rest[:-len(NOTE_EXTENSION)].replace(TIMESTAMP_DELIMITER, " ")
    return int(prefix), title


def is_safe_path(base_path: Path, user_path: Path) -> bool:
    """
    Check that a path names an entry directly inside the base directory.

    Only the parent directory is resolved, so a symlink in the base
    directory counts as inside it wherever it points.

    Args:
        base_path: The directory that must contain ``user_path``
        user_path: Absolute or base-relative path to check

    Returns:
        True if the path is an entry of ``base_path``, False otherwise
    """
    try:
        base = base_path.resolve()
        full_path = base / user_path
        if full_path.name in ("", ".", ".."):
            return False
        return full_path.parent.resolve() == base
    except (ValueError, RuntimeError, OSError):
        return False


class NoteRepository:
    """Reads and writes notes in a single flat directory."""

    def __init__(self, notes_dir: Path, clock: Callable[[], float] = time.time):
        self.notes_dir = Path(notes_dir)
        self.clock = clock

    def ensure_directory(self) -> None:
        """Create the notes directory if it does not exist yet."""
        try:
            self.notes_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create notes directory %s: %s", self.notes_dir, e)

    def note_path(self, created_at, title: str) -> Path:
        filename = f"{created_at}{TIMESTAMP_DELIMITER}{sanitize_filename(title)}{NOTE_EXTENSION}"
        return self.notes_dir / filename

    def list_notes(self) -> List[Note]:
        """
        Load every note in the notes directory.

        Files with another extension, or whose name has no numeric timestamp
        prefix, are skipped.

        Returns:
            Notes in directory order; callers sort as they need
        """
        notes = []
        try:
            entries = list(self.notes_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot read notes directory %s: %s", self.notes_dir, e)
            return notes

        for entry in entries:
            parsed = parse_note_filename(entry.name)
            if parsed is None:
                continue
            try:
                if not entry.is_file():
                    continue
            except OSError:
                continue
            created_at, title = parsed
            notes.append(Note(title=title, path=entry, created_at=created_at))
        return notes

    def read_content(self, path: Path) -> str:
        """Return the note's text, or an empty string if it cannot be read."""
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read note %s: %s", path, e)
            return ""

    def save(self, title: str, content: str, existing: Optional[Note] = None) -> Optional[Path]:
        """
        Write a note, creating it or rewriting an existing one.

        An existing note keeps the timestamp from its current filename; a
        changed title moves it to a new filename and the old file is removed.

        Args:
            title: Note title, sanitized into the filename
            content: Full body text, replacing anything previously stored
            existing: The note being edited, or None for a new note

        Returns:
            Path written, or None if the write failed
        """
        if existing is None:
            path = self.note_path(int(self.clock()), title)
        else:
            created_at = Path(existing.path).name.split(TIMESTAMP_DELIMITER, 1)[0]
            path = self.note_path(created_at, title)

        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Error saving note %s: %s", path, e)
            return None

        if existing is not None and Path(existing.path) != path:
            self._remove(Path(existing.path))
        logger.info("Saved note %s", path.name)
        return path

    def delete(self, path: Path) -> bool:
        """
        Delete a note file.

        A file that is already gone counts as deleted. Paths outside the
        notes directory are refused.

        Returns:
            True if the note no longer exists, False otherwise
        """
        path = Path(path)
        if not is_safe_path(self.notes_dir, path):
            logger.warning("Refusing to delete %s outside %s", path, self.notes_dir)
            return False
        return self._remove(path)

    def _remove(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return True
        except OSError as e:
            logger.error("Error deleting note %s: %s", path, e)
            return False
        logger.info("Deleted note %s", path.name)
        return True
