"""
Pushing registry state into the highlight registrations of every view.

Each view gets a record {slot index: highlight handle or None}. Records are
built lazily the first time a view is seen and dropped when it closes.
"""

HIGHLIGHT_GROUP_PREFIX = 'MarkWord'

# Priority of the editor's own search-match highlighting; every mark stays below it.
SEARCH_HIGHLIGHT_PRIORITY = 0


def highlight_group(index):
    """Color group name of slot `index`: MarkWord1, MarkWord2, ..."""
    return HIGHLIGHT_GROUP_PREFIX + str(index + 1)

def slot_priority(index, capacity, search_priority=SEARCH_HIGHLIGHT_PRIORITY):
    """Below `search_priority`, and slot i+1 always above slot i."""
    return search_priority - capacity + index


class ViewSync:
    """Keeps the highlights of all views in line with a SlotRegistry."""

    def __init__(self, registry, host, render=None):
        self.registry = registry
        self.host = host
        # Turns a stored pattern into the expression handed to the highlighter
        self.render = render or (lambda pattern: pattern)
        self.records = {}

    def has_record(self, view):
        return view.view_id in self.records

    def forget(self, view):
        """Drops the record of a closed view."""
        self.records.pop(view.view_id, None)

    def handles(self, view):
        """Copy of the view's record, for inspection."""
        return dict(self.records.get(view.view_id, {}))

    def _register(self, view, index, pattern):
        return view.add_highlight(
            highlight_group(index),
            self.render(pattern),
            slot_priority(index, self.registry.capacity),
        )

    def apply_one_view(self, view, indices, pattern=''):
        """
        Clears the given slots in `view`, then registers `pattern` if one is given.
        Only a single-index call may carry a pattern; multi-index calls are bulk clears.
        """
        if pattern and len(indices) != 1:
            raise ValueError('only one slot can be set at a time')
        record = self.records.setdefault(view.view_id, {})
        for index in indices:
            handle = record.get(index)
            if handle is not None:
                view.remove_highlight(handle)
            record[index] = None
            if pattern:
                record[index] = self._register(view, index, pattern)

    def apply_all_views(self, indices, pattern=''):
        """
        Applies the same change to every view in scope.
        A view without a record yet is built in full from the current state instead.
        """
        layout = self.host.save_layout()
        try:
            for view in self.host.views():
                if self.has_record(view):
                    self.apply_one_view(view, indices, pattern)
                else:
                    self.refresh_view(view)
        finally:
            self.host.restore_layout(layout)

    def refresh_view(self, view):
        """Rebuilds the whole record of `view` from the registry."""
        record = self.records.get(view.view_id, {})
        for handle in record.values():
            if handle is not None:
                view.remove_highlight(handle)
        record = {}
        for index in range(self.registry.capacity):
            pattern = self.registry.pattern(index) if self.registry.enabled else ''
            record[index] = self._register(view, index, pattern) if pattern else None
        self.records[view.view_id] = record

    def ensure_view(self, view):
        """Builds the record of a view seen for the first time."""
        if not self.has_record(view):
            self.refresh_view(view)

    def refresh_all_views(self, lazy=False):
        """Full refresh of every view in scope; with `lazy`, only views that have no record."""
        layout = self.host.save_layout()
        try:
            for view in self.host.views():
                if lazy:
                    self.ensure_view(view)
                else:
                    self.refresh_view(view)
        finally:
            self.host.restore_layout(layout)
