"""Boundary between the mark engine and the editor that hosts it."""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Optional, Protocol


class MarkView(Protocol):
    """One editor view (a tab, or one side of a split)."""

    @property
    def view_id(self) -> Hashable:
        """Stable identity while the view is open."""
        ...

    def line_count(self) -> int: ...

    def line_text(self, y: int) -> str: ...

    def caret(self) -> tuple[int, int]:
        """Caret position as (x, y)."""
        ...

    def set_caret(self, x: int, y: int) -> None: ...

    def selection(self) -> Optional[tuple[int, int, int, int]]:
        """Selected range as (x1, y1, x2, y2) in document order, or None."""
        ...

    def add_highlight(self, group: str, expr: str, priority: int) -> Any:
        """Highlights every match of `expr` with color group `group`; returns a handle."""
        ...

    def remove_highlight(self, handle: Any) -> None: ...


class MarkHost(Protocol):
    """Editor-wide services."""

    def views(self) -> Iterable[MarkView]:
        """Every view in the current window/tab scope."""
        ...

    def current_view(self) -> Optional[MarkView]: ...

    def save_layout(self) -> Any:
        """Snapshot of whatever visiting all views may disturb."""
        ...

    def restore_layout(self, layout: Any) -> None: ...

    def color_count(self) -> int:
        """How many mark color definitions exist right now."""
        ...

    def ignores_case(self) -> bool:
        """The editor's own default for case-insensitive search."""
        ...

    def history_add(self, register: str, pattern: str) -> None: ...

    def set_last_search(self, pattern: str) -> None: ...

    def status(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
