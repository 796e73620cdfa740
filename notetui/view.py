"""
Screen composition.

The screen is two framed columns (note list on the left, note content or the
title/content editor on the right) above a single help line. Which right-hand
pane is shown is decided from the browser state on every render; sizes are
recomputed from the terminal size by ``Compositor.resize``.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from prompt_toolkit.layout.containers import (
    Container, DynamicContainer, HSplit, VSplit, Window,
)
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.widgets import Box, Frame

from .config import Settings
from .state import Mode, NoteBrowser

PADDING_X = 2
PADDING_Y = 1
HELP_ROWS = 2
FRAME_BORDER = 2
LIST_HEADER_ROWS = 3
EDITOR_HEADER_ROWS = 3
MIN_LIST_WIDTH = 24

DEFAULT_SIZE = (80, 24)


@dataclass(frozen=True)
class Geometry:
    """Column widths and pane heights for one terminal size."""
    list_width: int
    content_width: int
    pane_height: int
    list_height: int
    editor_height: int
    text_width: int

    @classmethod
    def for_size(cls, columns: int, rows: int) -> "Geometry":
        inner_width = max(2, columns - 2 * PADDING_X)
        list_width = max(1, min(max(MIN_LIST_WIDTH, inner_width // 3), inner_width - 1))
        content_width = max(1, inner_width - list_width)
        pane_height = max(
            FRAME_BORDER + EDITOR_HEADER_ROWS + 1,
            rows - 2 * PADDING_Y - HELP_ROWS,
        )
        return cls(
            list_width=list_width,
            content_width=content_width,
            pane_height=pane_height,
            list_height=max(1, pane_height - FRAME_BORDER - LIST_HEADER_ROWS),
            editor_height=max(1, pane_height - FRAME_BORDER - EDITOR_HEADER_ROWS),
            text_width=max(1, content_width - FRAME_BORDER),
        )


class Compositor:
    """Maps browser state onto the prompt_toolkit container tree."""

    def __init__(self, browser: NoteBrowser, settings: Settings):
        self.browser = browser
        self.settings = settings
        self._size: Optional[Tuple[int, int]] = None
        self.geometry = Geometry.for_size(*DEFAULT_SIZE)

        self.list_pane = Frame(
            browser.note_list,
            width=lambda: D.exact(self.geometry.list_width),
            height=lambda: D.exact(self.geometry.pane_height),
        )
        self.editor_pane = Frame(
            HSplit([
                Window(
                    FormattedTextControl("Title (tab: content, ctrl+s: save)"),
                    height=1,
                    style="class:field-label",
                ),
                browser.title_field,
                Window(height=1),
                browser.content_field,
            ]),
            title=self._editor_title,
            width=lambda: D.exact(self.geometry.content_width),
            height=lambda: D.exact(self.geometry.pane_height),
        )
        self.viewer_pane = Frame(
            browser.content_field,
            title=self._viewer_title,
            width=lambda: D.exact(self.geometry.content_width),
            height=lambda: D.exact(self.geometry.pane_height),
        )
        self.help_line = Window(
            FormattedTextControl(settings.help_text),
            height=1,
            style="class:help",
        )
        self.container = Box(
            HSplit([
                VSplit([self.list_pane, DynamicContainer(self.content_pane)]),
                Window(height=HELP_ROWS - 1),
                self.help_line,
            ]),
            padding_left=PADDING_X,
            padding_right=PADDING_X,
            padding_top=PADDING_Y,
            padding_bottom=PADDING_Y,
        )

    def resize(self, columns: int, rows: int) -> Geometry:
        """
        Recompute sizes for a terminal of ``columns`` x ``rows``.

        Only the list and the two text fields have their size fields
        updated; calling it again with the same size changes nothing.
        """
        if self._size == (columns, rows):
            return self.geometry
        self._size = (columns, rows)
        self.geometry = geometry = Geometry.for_size(columns, rows)

        self.browser.note_list.set_size(geometry.list_width - FRAME_BORDER, geometry.list_height)
        self.browser.title_field.window.width = D.exact(geometry.text_width)
        self.browser.content_field.window.width = D.exact(geometry.text_width)
        self.browser.content_field.window.height = D.exact(geometry.editor_height)
        return geometry

    def content_pane(self) -> Container:
        if self.browser.editing:
            return self.editor_pane
        return self.viewer_pane

    def _editor_title(self) -> str:
        return "New note" if self.browser.mode is Mode.NEW else "Edit note"

    def _viewer_title(self) -> str:
        note = self.browser.selected_note
        return note.title if note is not None else ""

    def __pt_container__(self) -> Container:
        return self.container
