"""
User actions on marks.

Every command runs to completion, including propagation to all views,
before returning. MarkError is caught here and nowhere else: it is shown
to the user and the command is abandoned without changing state.
"""

from .errors import MarkError
from .matching import literal_pattern, word_pattern, word_under_cursor

MSG_NO_WORD = 'No word under cursor'
MSG_MULTILINE = 'Cannot mark a selection spanning lines'
MSG_MARKED = 'Marked: {}'
MSG_UNMARKED = 'Unmarked: {}'
MSG_ENABLED = 'Enabled {} mark(s)'
MSG_DISABLED = 'Disabled marks'
MSG_CLEARED = 'Cleared {} mark(s)'
MSG_NO_MARKS = 'No marks defined'
MSG_NO_MARK_HERE = 'No mark under cursor'
MSG_NOT_FOUND = 'Pattern not found: {}'
MSG_HIT_BOTTOM = 'Search hit BOTTOM, continuing at TOP'
MSG_HIT_TOP = 'Search hit TOP, continuing at BOTTOM'


class MarkCommands:
    """Translates user actions into registry changes and propagates them."""

    def __init__(self, session, translate=None):
        self.session = session
        # Message translation, e.g. the editor's I18N helper
        self._ = translate or (lambda text: text)

    @property
    def registry(self):
        return self.session.registry

    @property
    def sync(self):
        return self.session.sync

    @property
    def host(self):
        return self.session.host

    # --- Core protocol ---

    def add_pattern(self, pattern):
        """
        Marks `pattern`, or unmarks it if it is already marked.
        Returns True when the pattern ends up marked. Raises MarkError.
        """
        registry = self.registry
        index = registry.find_index_of(pattern)
        if index is not None:
            # Marking a marked pattern again removes it
            registry.release(index)
            self.sync.apply_all_views([index])
            return False

        self.session.ensure_capacity()
        self.session.matcher.check(self.session.render(pattern))

        index, _evicted = registry.assign(pattern)
        # While hidden, the next show draws it
        if registry.enabled:
            self.sync.apply_all_views([index], pattern)
        return True

    def _mark(self, pattern):
        """add_pattern() with the outcome reported to the user. Returns None on error."""
        try:
            added = self.add_pattern(pattern)
        except MarkError as ex:
            self.host.error(self._(str(ex)))
            return None
        self.host.status(self._(MSG_MARKED if added else MSG_UNMARKED).format(pattern))
        return added

    # --- Commands ---

    def mark_current_word(self):
        """
        Marks the word under the caret, or the single-line selection.
        On an existing mark, unmarks exactly that mark's pattern.
        """
        view = self.host.current_view()
        if view is None:
            return None
        settings = self.session.settings

        sel = view.selection()
        if sel is not None:
            x1, y1, x2, y2 = sel
            if y1 != y2:
                self.host.status(self._(MSG_MULTILINE))
                return None
            text = view.line_text(y1)[x1:x2]
            if not text:
                self.host.status(self._(MSG_NO_WORD))
                return None
            pattern = literal_pattern(text)
        else:
            x, y = view.caret()
            line = view.line_text(y)
            pattern = self.session.lookup.find_current_mark(line, x).pattern
            if not pattern:
                word = word_under_cursor(line, x, settings.regex_word)
                if not word:
                    self.host.status(self._(MSG_NO_WORD))
                    return None
                pattern = word_pattern(word, settings.regex_word)

        added = self._mark(pattern)
        if added is not None:
            self.host.set_last_search(pattern)
            if added:
                self.registry.last_search = pattern
        return added

    def mark_explicit(self, pattern=''):
        """Marks/unmarks `pattern`; an empty pattern toggles visibility instead."""
        if not pattern:
            return self.toggle_visibility()
        added = self._mark(pattern)
        if added is not None:
            for register in self.session.settings.history_add:
                self.host.history_add(register, pattern)
        return added

    def set_visibility(self, value=None):
        """Shows, hides or (with None) flips all marks. Returns whether anything changed."""
        registry = self.registry
        if not registry.toggle_enabled(value):
            return False
        if registry.enabled:
            self.sync.refresh_all_views()
            self.host.status(self._(MSG_ENABLED).format(registry.count()))
        else:
            self.sync.apply_all_views(list(range(registry.capacity)))
            self.host.status(self._(MSG_DISABLED))
        return True

    def toggle_visibility(self):
        return self.set_visibility(None)

    def clear_all(self):
        """Removes every mark. Returns how many were removed."""
        cleared = self.registry.clear_all()
        if cleared:
            self.sync.apply_all_views(cleared)
        # Everything is blank already, so no refresh is needed
        self.registry.toggle_enabled(True)
        self.host.status(self._(MSG_CLEARED).format(len(cleared)))
        return len(cleared)

    # --- Navigation ---

    def _jump(self, view, patterns, label, backward):
        session = self.session
        rendered = [session.render(p) for p in patterns]
        try:
            hit = session.navigator.find(view, rendered, backward)
        except MarkError as ex:
            self.host.error(self._(str(ex)))
            return None
        if hit is None:
            self.host.status(self._(MSG_NOT_FOUND).format(label))
            return None
        view.set_caret(hit.x, hit.y)
        if hit.wrapped:
            self.host.status(self._(MSG_HIT_TOP if backward else MSG_HIT_BOTTOM))
        return hit

    def search_current_mark(self, backward=False):
        """
        Jumps to the next/previous occurrence of the mark under the caret,
        or of the mark searched for last when the caret is not on one.
        """
        view = self.host.current_view()
        if view is None:
            return None
        x, y = view.caret()
        pattern = self.session.lookup.find_current_mark(view.line_text(y), x).pattern
        if not pattern:
            pattern = self.registry.last_search
        if not pattern:
            self.host.status(self._(MSG_NO_MARK_HERE))
            return None
        hit = self._jump(view, [pattern], pattern, backward)
        if hit is not None:
            self.host.set_last_search(pattern)
            self.registry.last_search = pattern
        return hit

    def search_any_mark(self, backward=False):
        """Jumps to the nearest occurrence of any mark."""
        view = self.host.current_view()
        if view is None:
            return None
        patterns = [self.registry.pattern(i) for i in self.registry.marked_indices()]
        if not patterns:
            self.host.status(self._(MSG_NO_MARKS))
            return None
        return self._jump(view, patterns, ' | '.join(patterns), backward)

    # --- View lifecycle ---

    def on_view_entered(self, view):
        self.sync.ensure_view(view)

    def on_view_closed(self, view):
        self.sync.forget(view)

    def on_tab_entered(self):
        self.sync.refresh_all_views(lazy=True)

    def on_text_changed(self, view):
        self.sync.refresh_view(view)

    def on_colors_changed(self):
        """Colors were redefined: pick up a palette that appeared, then redraw everything."""
        if self.registry.capacity == 0:
            self.session.start()
        self.sync.refresh_all_views()
