"""Which mark, if any, covers a position in a line."""

from typing import NamedTuple, Optional


class CurrentMark(NamedTuple):
    pattern: str
    start: Optional[int]


NO_MARK = CurrentMark('', None)


class MarkLookup:
    """Read-only view of a SlotRegistry answering "what is marked here"."""

    def __init__(self, registry, matcher, render=None):
        self.registry = registry
        self.matcher = matcher
        # Same expression the view highlights, so lookup agrees with what is drawn
        self.render = render or (lambda pattern: pattern)

    def find_current_mark(self, line_text, offset):
        """
        Returns the pattern and start column of the match that covers column `offset`,
        or NO_MARK. Slots are tried from the highest priority down, as that is the
        mark drawn on top. Matches cannot span lines.
        """
        for index in reversed(range(self.registry.capacity)):
            pattern = self.registry.pattern(index)
            if not pattern:
                continue
            expr = self.render(pattern)
            position = 0
            while True:
                found = self.matcher.search(line_text, expr, position)
                if found is None:
                    break
                start, end = found
                if start == end:
                    # Zero-width match; give up on this slot to avoid looping
                    break
                if start <= offset < end:
                    return CurrentMark(pattern, start)
                if start > offset:
                    break
                position = end
        return NO_MARK
