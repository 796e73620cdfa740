"""
Widgets not supplied by prompt_toolkit itself.

``NoteList`` is a navigable list with a type-to-filter search bar. Items are
any objects exposing ``title``, ``description`` and ``filter_value``.
"""

from typing import Any, List, Optional, Tuple

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.layout.containers import HSplit, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.widgets import TextArea


class NoteList:
    """Filterable list of notes, two rows per item."""

    def __init__(self, title: str = "Notes", empty_text: str = "No notes found."):
        self.title = title
        self.empty_text = empty_text
        self.items: List[Any] = []
        self.visible_items: List[Any] = []
        self.selected_index = 0
        self.width = 0
        self.height = 0

        self.filter_buffer = Buffer(multiline=False, on_text_changed=self._update_filter)
        self.filter_window = Window(
            content=BufferControl(buffer=self.filter_buffer),
            height=1,
            style="class:search-bar",
        )
        self.list_window = Window(
            content=FormattedTextControl(self._get_items_text),
            wrap_lines=False,
            height=lambda: Dimension(min=1, preferred=self.height or 1),
        )
        self.container = HSplit([
            Window(FormattedTextControl(self._get_header_text), height=1),
            self.filter_window,
            Window(height=1, char='─'),
            self.list_window,
        ])

    @property
    def query(self) -> str:
        return self.filter_buffer.text

    @property
    def filtering(self) -> bool:
        return bool(self.query)

    def set_items(self, items: List[Any]) -> None:
        """Replace the items, keeping the current filter."""
        self.items = list(items)
        self._apply_filter()

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def selected_item(self) -> Optional[Any]:
        if not self.visible_items:
            return None
        return self.visible_items[self.selected_index]

    def select(self, index: int) -> None:
        """Highlight the visible item at ``index``, clamped to the list."""
        if not self.visible_items:
            self.selected_index = 0
            return
        self.selected_index = max(0, min(index, len(self.visible_items) - 1))

    def select_item(self, item: Any) -> bool:
        """
        Highlight ``item`` if it is currently visible.

        Returns:
            True if the item was found, False otherwise
        """
        for i, visible in enumerate(self.visible_items):
            if visible == item:
                self.selected_index = i
                return True
        return False

    def move(self, delta: int) -> None:
        """Move the highlight, wrapping around at either end."""
        if self.visible_items:
            self.selected_index = (self.selected_index + delta) % len(self.visible_items)

    def clear_filter(self) -> None:
        self.filter_buffer.reset()
        self._apply_filter()

    def _update_filter(self, buff: Buffer) -> None:
        self._apply_filter()
        self.selected_index = 0

    def _apply_filter(self) -> None:
        query = self.query.lower()
        if query:
            self.visible_items = [i for i in self.items if query in i.filter_value.lower()]
        else:
            self.visible_items = list(self.items)
        self.select(self.selected_index)

    def _get_header_text(self) -> List[Tuple[str, str]]:
        if self.filtering:
            shown = f" {self.title} ({len(self.visible_items)}/{len(self.items)})"
        else:
            shown = f" {self.title}"
        return [("class:note-list.header", shown)]

    def _get_items_text(self) -> List[Tuple[str, str]]:
        """
        Create formatted text for the list display.

        Returns:
            List of (style, text) tuples for display
        """
        if not self.visible_items:
            return [("class:note-list.empty", f" {self.empty_text}")]

        result = []
        for i, item in enumerate(self.visible_items):
            title = self._fit(item.title)
            description = self._fit(item.description)
            if i == self.selected_index:
                result.append(("[SetCursorPosition]", ""))
                result.append(("class:note-list.selected", f"│ {title}\n"))
                result.append(("class:note-list.selected-description", f"│ {description}\n"))
            else:
                result.append(("class:note-list.title", f"  {title}\n"))
                result.append(("class:note-list.description", f"  {description}\n"))
        return result

    def _fit(self, text: str) -> str:
        # Two columns go to the row marker.
        room = self.width - 2
        if room <= 0 or len(text) <= room:
            return text
        return text[:room - 1] + "…"

    def __pt_container__(self) -> HSplit:
        return self.container


def limit_length(text_area: TextArea, limit: int) -> None:
    """Keep a text field's value at most ``limit`` characters long."""

    def _clamp(buff: Buffer) -> None:
        if len(buff.text) > limit:
            buff.text = buff.text[:limit]

    text_area.buffer.on_text_changed += _clamp
