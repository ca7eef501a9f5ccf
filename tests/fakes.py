"""In-memory stand-ins for the editor used by the mark engine tests."""

from __future__ import annotations


class FakeView:
    """In-memory view recording its highlight registrations."""

    def __init__(self, view_id, lines=None, caret=(0, 0), selection=None):
        self.view_id = view_id
        self.lines = list(lines) if lines else ['']
        self.caret_pos = caret
        self.sel = selection
        self.highlights = {}
        self._next_handle = 1

    def line_count(self):
        return len(self.lines)

    def line_text(self, y):
        return self.lines[y]

    def caret(self):
        return self.caret_pos

    def set_caret(self, x, y):
        self.caret_pos = (x, y)
        self.sel = None

    def selection(self):
        return self.sel

    def add_highlight(self, group, expr, priority):
        handle = (self.view_id, self._next_handle)
        self._next_handle += 1
        self.highlights[handle] = (group, expr, priority)
        return handle

    def remove_highlight(self, handle):
        # KeyError here means a handle was removed twice
        del self.highlights[handle]

    def registered(self):
        """Sorted (group, expr) pairs currently highlighted."""
        return sorted((group, expr) for group, expr, _priority in self.highlights.values())


class FakeHost:
    """In-memory editor: a fixed set of views, a color count and message logs."""

    def __init__(self, colors=3, views=None, ignore_case=False):
        self.colors = colors
        self.view_list = list(views) if views else []
        self.current = self.view_list[0] if self.view_list else None
        self.ignore_case = ignore_case
        self.layout = ('top', 10, 'scroll', 0)
        self.restored = []
        self.history = []
        self.last_search = None
        self.messages = []
        self.errors = []

    def views(self):
        return list(self.view_list)

    def current_view(self):
        return self.current

    def save_layout(self):
        return self.layout

    def restore_layout(self, layout):
        self.restored.append(layout)

    def color_count(self):
        return self.colors

    def ignores_case(self):
        return self.ignore_case

    def history_add(self, register, pattern):
        self.history.append((register, pattern))

    def set_last_search(self, pattern):
        self.last_search = pattern

    def status(self, message):
        self.messages.append(message)

    def error(self, message):
        self.errors.append(message)
