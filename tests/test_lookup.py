"""Tests for finding the mark under the cursor."""

from __future__ import annotations

import pytest

from multimark.lookup import NO_MARK, CurrentMark, MarkLookup
from multimark.matching import RegexMatcher
from multimark.registry import SlotRegistry


@pytest.fixture
def registry():
    registry = SlotRegistry()
    registry.init(3)
    return registry


@pytest.fixture
def lookup(registry):
    return MarkLookup(registry, RegexMatcher())


class TestFindCurrentMark:
    """Tests for MarkLookup.find_current_mark."""

    @pytest.mark.parametrize(
        ('offset', 'expected'),
        [
            (3, CurrentMark('foobar', 0)),
            (7, CurrentMark('foobar', 7)),
            (6, NO_MARK),
            (0, CurrentMark('foobar', 0)),
            (13, NO_MARK),
        ],
    )
    def test_offsets(self, registry, lookup, offset, expected):
        registry.set_pattern(0, 'foobar')
        assert lookup.find_current_mark('foobar foobar', offset) == expected

    def test_nothing_marked(self, lookup):
        assert lookup.find_current_mark('foobar', 1) == NO_MARK
        assert NO_MARK.start is None
        assert NO_MARK.pattern == ''

    def test_highest_slot_wins(self, registry, lookup):
        registry.set_pattern(0, 'foo')
        registry.set_pattern(2, 'foobar')
        assert lookup.find_current_mark('foobar', 1) == CurrentMark('foobar', 0)

    def test_lower_slot_found_when_higher_misses(self, registry, lookup):
        registry.set_pattern(0, 'bar')
        registry.set_pattern(2, 'foo')
        assert lookup.find_current_mark('foo bar', 5) == CurrentMark('bar', 4)

    def test_zero_width_match_skips_slot(self, registry, lookup):
        registry.set_pattern(0, 'x')
        registry.set_pattern(1, 'y*')
        assert lookup.find_current_mark('ax', 1) == CurrentMark('x', 1)

    def test_render_is_applied(self, registry):
        lookup = MarkLookup(registry, RegexMatcher(), render=lambda p: '\\c' + p)
        registry.set_pattern(0, 'foo')
        assert lookup.find_current_mark('FOO', 1) == CurrentMark('foo', 0)
