"""Jumping between occurrences of marks in one view."""

from typing import NamedTuple


class SearchHit(NamedTuple):
    x: int
    y: int
    wrapped: bool


class MarkNavigator:
    """Finds the next/previous occurrence of one or more patterns relative to the caret."""

    def __init__(self, matcher, wrap=True):
        self.matcher = matcher
        self.wrap = wrap

    def _starts(self, view, y, patterns):
        text = view.line_text(y)
        starts = set()
        for pattern in patterns:
            for start, _end in self.matcher.find_all(text, pattern):
                starts.add(start)
        return sorted(starts)

    def _scan_order(self, view, backward):
        """(line, column filter, wrapped) in the order lines must be visited."""
        x0, y0 = view.caret()
        count = view.line_count()
        if not backward:
            order = [(y0, lambda s: s > x0, False)]
            order += [(y, None, False) for y in range(y0 + 1, count)]
            if self.wrap:
                order += [(y, None, True) for y in range(0, y0)]
                order.append((y0, lambda s: s <= x0, True))
        else:
            order = [(y0, lambda s: s < x0, False)]
            order += [(y, None, False) for y in range(y0 - 1, -1, -1)]
            if self.wrap:
                order += [(y, None, True) for y in range(count - 1, y0, -1)]
                order.append((y0, lambda s: s >= x0, True))
        return order

    def find(self, view, patterns, backward=False):
        """SearchHit of the nearest occurrence of any of `patterns`, or None."""
        patterns = [p for p in patterns if p]
        if not patterns:
            return None
        for y, accept, wrapped in self._scan_order(view, backward):
            starts = self._starts(view, y, patterns)
            if accept is not None:
                starts = [s for s in starts if accept(s)]
            if not starts:
                continue
            x = starts[-1] if backward else starts[0]
            return SearchHit(x, y, wrapped)
        return None
