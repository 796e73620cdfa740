from dataclasses import astuple

import pytest
from prompt_toolkit.layout.containers import to_container
from prompt_toolkit.layout.layout import walk

from conftest import write_note
from notetui.config import Settings
from notetui.state import Action
from notetui.view import Compositor, Geometry


@pytest.fixture()
def compositor(browser, tmp_path) -> Compositor:
    settings = Settings(notes_dir=tmp_path / ".notes", log_file=tmp_path / "log")
    return Compositor(browser, settings)


def windows_in(container):
    return list(walk(to_container(container)))


class TestGeometry:
    def test_splits_columns(self):
        geometry = Geometry.for_size(120, 40)
        assert geometry.list_width == 38
        assert geometry.content_width == 78
        assert geometry.pane_height == 36
        assert geometry.editor_height == 31
        assert geometry.list_height == 31

    def test_narrow_list_keeps_minimum_width(self):
        assert Geometry.for_size(60, 20).list_width == 24

    @pytest.mark.parametrize("size", [(0, 0), (5, 3), (30, 8), (300, 100)])
    def test_sizes_always_positive(self, size):
        assert all(value > 0 for value in astuple(Geometry.for_size(*size)))


class TestCompositor:
    def test_resize_updates_widget_sizes(self, compositor, browser):
        geometry = compositor.resize(120, 40)
        assert browser.note_list.height == geometry.list_height
        assert browser.content_field.window.height.preferred == geometry.editor_height
        assert browser.title_field.window.width.preferred == geometry.text_width

    def test_resize_is_idempotent(self, compositor):
        first = compositor.resize(100, 30)
        assert compositor.resize(100, 30) == first
        assert compositor.resize(80, 24) != first

    def test_list_mode_shows_read_only_content(self, compositor, browser):
        pane = compositor.content_pane()
        assert pane is compositor.viewer_pane
        assert browser.title_field.window not in windows_in(pane)
        assert browser.content_field.window in windows_in(pane)

    def test_edit_modes_show_both_fields(self, compositor, browser):
        browser.dispatch(Action.NEW)
        pane = compositor.content_pane()
        assert pane is compositor.editor_pane
        assert compositor._editor_title() == "New note"
        assert browser.title_field.window in windows_in(pane)
        assert browser.content_field.window in windows_in(pane)

    def test_viewer_title_follows_selection(self, compositor, browser, notes_dir):
        assert compositor._viewer_title() == ""
        write_note(notes_dir, "5-Shopping.md")
        browser.notes_loaded(browser.repository.list_notes())
        assert compositor._viewer_title() == "Shopping"

    def test_help_line_always_present(self, compositor, browser):
        assert compositor.help_line in windows_in(compositor)
        browser.dispatch(Action.NEW)
        assert compositor.help_line in windows_in(compositor)
        assert compositor.help_line.content.text == compositor.settings.help_text
