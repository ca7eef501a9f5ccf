"""Mark colors: one per slot, read from the [colors] definitions."""

import re

import randomcolor

from .config import RANDOM_COLOR

FALLBACK_COLOR = '#808080'

_HTML_COLOR = re.compile(r'#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})')


def random_light_color(index):
    """Light background color for slot `index`; the same index always gets the same color."""
    # Seed 0 would mean "unseeded" to RandomColor
    rand_color = randomcolor.RandomColor(seed=index + 1)
    return rand_color.generate(luminosity='light')[0]

def resolve_color(value, index):
    """Turns one raw definition into an HTML color string."""
    value = value.strip()
    if value.lower() == RANDOM_COLOR:
        return random_light_color(index)
    if _HTML_COLOR.fullmatch(value):
        return value.upper()
    return FALLBACK_COLOR


class MarkPalette:
    """Resolved colors, indexed like the registry slots."""

    def __init__(self, definitions=()):
        self.colors = [resolve_color(value, i) for i, value in enumerate(definitions)]

    def __len__(self):
        return len(self.colors)

    def color(self, index):
        if 0 <= index < len(self.colors):
            return self.colors[index]
        return FALLBACK_COLOR
