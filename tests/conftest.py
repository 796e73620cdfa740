from pathlib import Path

import pytest
from prompt_toolkit.widgets import TextArea

from notetui.repository import NoteRepository
from notetui.state import NoteBrowser
from notetui.widgets import NoteList


class FakeClock:
    """Clock returning a fixed time that tests can advance."""

    def __init__(self, now: float = 1700000000):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1) -> None:
        self.now += seconds


def write_note(directory: Path, name: str, content: str = "") -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def notes_dir(tmp_path: Path) -> Path:
    path = tmp_path / ".notes"
    path.mkdir()
    return path


@pytest.fixture()
def repository(notes_dir: Path, clock: FakeClock) -> NoteRepository:
    return NoteRepository(notes_dir, clock=clock)


@pytest.fixture()
def browser(repository: NoteRepository) -> NoteBrowser:
    return NoteBrowser(
        repository,
        title_field=TextArea(multiline=False),
        content_field=TextArea(),
        note_list=NoteList(),
    )
