"""
Fixed-size registry of mark slots.

Each slot holds one pattern ('' when unassigned). The slot index doubles as
its display priority: a higher index is drawn above a lower one.
"""

from .errors import NoHighlightSlotsError


class SlotRegistry:
    """
    Allocation state for the mark colors.
    Free slots are used up first; once all are taken the cycle pointer picks
    the slot to overwrite, so the most recently added patterns stay visible.
    """

    def __init__(self):
        self.slots = []
        self.cursor = 0          # Round-robin pointer, always a valid index when slots exist
        self.enabled = True      # Global visibility; hiding never clears patterns
        self.last_search = ''    # Pattern this engine last wrote to the search register
        self._undo_cursor = None # (index, cursor before) of the last assignment into a free slot

    @property
    def capacity(self):
        return len(self.slots)

    def init(self, capacity):
        """Resets all slots. Raises NoHighlightSlotsError when there is no color to mark with."""
        if capacity <= 0:
            raise NoHighlightSlotsError()
        self.slots = [''] * capacity
        self.cursor = 0
        self.enabled = True
        self.last_search = ''
        self._undo_cursor = None

    def pattern(self, index):
        return self.slots[index]

    def set_pattern(self, index, pattern):
        """Stores `pattern` in slot `index`; a replaced pattern stops being the last search."""
        old = self.slots[index]
        if old and old == self.last_search and old != pattern:
            self.last_search = ''
        self.slots[index] = pattern

    def find_index_of(self, pattern):
        """Index of the slot holding `pattern`, or None."""
        if not pattern:
            return None
        for index, value in enumerate(self.slots):
            if value == pattern:
                return index
        return None

    def find_free_slot(self):
        """Index of the first empty slot, or None when all are taken."""
        for index, value in enumerate(self.slots):
            if not value:
                return index
        return None

    def cycle_next(self):
        """Slot the next forced reuse would overwrite."""
        return self.cursor

    def advance_cursor(self, index):
        """Moves the cycle pointer just past `index`."""
        self.cursor = (index + 1) % len(self.slots)

    def allocate_slot(self):
        """Returns the slot under the cycle pointer and advances it."""
        index = self.cycle_next()
        self.advance_cursor(index)
        return index

    def assign(self, pattern):
        """
        Puts `pattern` into the first free slot, or overwrites the slot under the
        cycle pointer when none is free. Returns (index, evicted pattern or '').
        Does not check for duplicates; use find_index_of first.
        """
        previous_cursor = self.cursor
        index = self.find_free_slot()
        if index is not None:
            self.advance_cursor(index)
            self._undo_cursor = (index, previous_cursor)
        else:
            index = self.allocate_slot()
            self._undo_cursor = None
        evicted = self.slots[index]
        self.set_pattern(index, pattern)
        return index, evicted

    def release(self, index):
        """
        Blanks slot `index`. Releasing the slot that the last assign() took from
        the free ones also moves the cycle pointer back, so mark + unmark is a no-op.
        """
        self.set_pattern(index, '')
        if self._undo_cursor and self._undo_cursor[0] == index:
            self.cursor = self._undo_cursor[1]
        self._undo_cursor = None

    def toggle_enabled(self, value=None):
        """Flips visibility, or sets it to `value`. Returns whether it changed."""
        new_value = (not self.enabled) if value is None else bool(value)
        changed = new_value != self.enabled
        self.enabled = new_value
        return changed

    def clear_all(self):
        """Blanks every slot. Returns the indices that held a pattern."""
        cleared = [index for index, value in enumerate(self.slots) if value]
        for index in cleared:
            self.slots[index] = ''
        self.last_search = ''
        self._undo_cursor = None
        return cleared

    def marked_indices(self):
        return [index for index, value in enumerate(self.slots) if value]

    def count(self):
        """Number of non-empty slots."""
        return len(self.marked_indices())
