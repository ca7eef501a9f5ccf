"""Multi-color marks: highlight several patterns at once, each in its own color."""

from .commands import MarkCommands
from .config import MarkSettings, PluginConfig
from .errors import InvalidPatternError, MarkError, NoHighlightSlotsError
from .lookup import NO_MARK, CurrentMark, MarkLookup
from .matching import RegexMatcher, adjust_for_case_sensitivity
from .palette import MarkPalette
from .registry import SlotRegistry
from .session import MarkSession
from .viewsync import ViewSync, highlight_group, slot_priority

__all__ = [
    'CurrentMark',
    'InvalidPatternError',
    'MarkCommands',
    'MarkError',
    'MarkLookup',
    'MarkPalette',
    'MarkSession',
    'MarkSettings',
    'NO_MARK',
    'NoHighlightSlotsError',
    'PluginConfig',
    'RegexMatcher',
    'SlotRegistry',
    'ViewSync',
    'adjust_for_case_sensitivity',
    'highlight_group',
    'slot_priority',
]
