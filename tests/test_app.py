import asyncio
from types import SimpleNamespace

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.data_structures import Size
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from conftest import write_note
from notetui.app import KEYMAP, NoteApp
from notetui.config import Settings
from notetui.repository import NoteRepository
from notetui.state import Action, Mode


@pytest.fixture()
def note_app(tmp_path, notes_dir, clock) -> NoteApp:
    settings = Settings(notes_dir=notes_dir, log_file=tmp_path / "notetui.log")
    return NoteApp(settings, NoteRepository(notes_dir, clock=clock))


def binding_for(note_app: NoteApp, *keys):
    bindings = note_app.kb.get_bindings_for_keys(keys)
    assert len(bindings) == 1
    return bindings[0]


def test_every_keymap_entry_is_bound(note_app):
    bound = len(note_app.kb.bindings)
    assert bound == sum(len(keys) for keys, _ in KEYMAP)


def test_quit_and_escape_are_eager(note_app):
    assert binding_for(note_app, Keys.ControlC).eager()
    assert binding_for(note_app, Keys.Escape).eager()
    assert not binding_for(note_app, Keys.ControlN).eager()


def test_bindings_follow_browser_guards(note_app):
    new = binding_for(note_app, Keys.ControlN)
    tab = binding_for(note_app, Keys.Tab)
    down = binding_for(note_app, Keys.Down)

    assert new.filter()
    assert not tab.filter()
    assert down.filter()

    note_app.browser.dispatch(Action.NEW)
    assert not new.filter()
    assert tab.filter()
    assert not down.filter()


def test_content_field_read_only_outside_editing(note_app):
    assert note_app.content_field.buffer.read_only()
    note_app.browser.dispatch(Action.NEW)
    assert not note_app.content_field.buffer.read_only()


def test_title_field_is_clamped(note_app):
    note_app.title_field.buffer.text = "x" * 80
    assert len(note_app.title_field.text) == note_app.settings.title_char_limit


def test_focus_target_tracks_browser_focus(note_app):
    assert note_app._focus_target() is note_app.note_list.filter_window
    note_app.browser.dispatch(Action.NEW)
    assert note_app._focus_target() is note_app.title_field
    note_app.browser.dispatch(Action.SWITCH_FIELD)
    assert note_app._focus_target() is note_app.content_field


def test_before_render_resizes_from_output(note_app):
    fake_app = SimpleNamespace(output=SimpleNamespace(get_size=lambda: Size(rows=40, columns=120)))
    note_app._before_render(fake_app)
    assert note_app.compositor.geometry.list_width == 38


def test_browser_reads_through_app_repository(note_app, notes_dir):
    write_note(notes_dir, "10-From-disk.md", "body")
    note_app.browser.notes_loaded(note_app.browser.refresh()())
    assert note_app.content_field.text == "body"


async def wait_until(predicate, timeout=5.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        assert loop.time() < deadline, "condition not reached in time"
        await asyncio.sleep(0.02)


def test_new_note_saved_through_running_app(note_app, notes_dir):
    async def session():
        with create_pipe_input() as inp, create_app_session(input=inp, output=DummyOutput()):
            task = asyncio.ensure_future(note_app.run_async())
            await asyncio.sleep(0.1)

            inp.send_text("\x0e")  # ctrl+n
            await wait_until(lambda: note_app.browser.editing)
            inp.send_text("Groceries")
            await wait_until(lambda: note_app.title_field.text == "Groceries")
            inp.send_text("\x13")  # ctrl+s
            await wait_until(lambda: bool(note_app.browser.notes))

            inp.send_text("\x03")  # ctrl+c
            await asyncio.wait_for(task, 5)

    asyncio.run(session())

    assert (notes_dir / "1700000000-Groceries.md").exists()
    assert [n.title for n in note_app.browser.notes] == ["Groceries"]
    assert note_app.browser.mode is Mode.LIST
    assert not note_app.browser.running
