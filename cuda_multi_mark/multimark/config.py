"""
Mark settings stored in an INI file.

The engine does not touch files itself: PluginConfig is given a reader
``read(section, key, default) -> str`` and a writer
``write(section, key, value)`` with the semantics of the editor's
``ini_read`` / ``ini_write`` bound to one file.
"""

import re

# --- Default Configuration ---
HISTORY_ADD_DEFAULT = 'search,input'
IGNORE_CASE_DEFAULT = 'auto'
SMART_CASE_DEFAULT = False
WORD_REGEX_DEFAULT = r'\w+'
WRAP_SEARCH_DEFAULT = True

# Registers that may receive newly added patterns
HISTORY_REGISTERS = ('search', 'input')

# [colors] keys follow the reserved naming convention mark1, mark2, ...
COLORS_SECTION = 'colors'
COLOR_KEY_PREFIX = 'mark'
RANDOM_COLOR = 'random'
DEFAULT_PALETTE = [
    '#8CCBEA',
    '#A4E57E',
    '#FFDB72',
    '#FF7272',
    '#FFB3FF',
    '#9999FF',
]


def bool_to_ini(value):
    return 'true' if value else 'false'

def ini_to_bool(value, default):
    if value is None:
        return default
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in ('1', 'true', 'yes', 'on'):
            return True
        if normalized in ('0', 'false', 'no', 'off'):
            return False
    return default

def parse_history_add(value):
    """Turns 'search, input' into ('search', 'input'), dropping unknown names."""
    if value is None:
        value = HISTORY_ADD_DEFAULT
    names = []
    for item in value.split(','):
        item = item.strip().lower()
        if item in HISTORY_REGISTERS and item not in names:
            names.append(item)
    return tuple(names)

def parse_ignore_case(value):
    """Returns 'auto', True or False."""
    if value is None or value.strip().lower() == 'auto':
        return 'auto'
    return ini_to_bool(value, 'auto')

def color_key(index):
    """INI key of the color for slot `index` (0-based)."""
    return COLOR_KEY_PREFIX + str(index + 1)


GLOBAL_DEFAULTS = {
    'history_add': HISTORY_ADD_DEFAULT,
    'ignore_case': IGNORE_CASE_DEFAULT,
    'smart_case': bool_to_ini(SMART_CASE_DEFAULT),
    'word_regex': WORD_REGEX_DEFAULT,
    'wrap_search': bool_to_ini(WRAP_SEARCH_DEFAULT),
}


class MarkSettings:
    """Parsed values of the [global] section."""

    def __init__(self):
        self.history_add = parse_history_add(HISTORY_ADD_DEFAULT)
        self.ignore_case = IGNORE_CASE_DEFAULT
        self.smart_case = SMART_CASE_DEFAULT
        self.word_regex = WORD_REGEX_DEFAULT
        self.wrap_search = WRAP_SEARCH_DEFAULT

        # Compiled regex object
        self.regex_word = re.compile(WORD_REGEX_DEFAULT)

    def resolve_ignore_case(self, editor_ignores_case):
        """Applies the 'auto' setting against the editor's own find option."""
        if self.ignore_case == 'auto':
            return bool(editor_ignores_case)
        return self.ignore_case


class PluginConfig:
    """Handles reading and ensuring defaults for plugin configuration stored in an INI file."""

    _SENTINEL = '__cuda_multi_mark_missing__'

    def __init__(self, read, write=None):
        self._read = read
        self._write = write

    def ensure_file(self):
        """Populates missing default keys; never overwrites existing values."""
        if self._write is None:
            return
        fresh = all(self._read_raw('global', key) is None for key in GLOBAL_DEFAULTS)
        for key, value in GLOBAL_DEFAULTS.items():
            if self._read_raw('global', key) is None:
                self._write('global', key, value)
        # The palette is only seeded into a new file: a user who deleted all
        # colors asked for no highlighting.
        if fresh:
            for index, color in enumerate(DEFAULT_PALETTE):
                if self._read_raw(COLORS_SECTION, color_key(index)) is None:
                    self._write(COLORS_SECTION, color_key(index), color)

    def read_settings(self, on_error=None):
        """
        Reads [global] into a MarkSettings object.
        An invalid word_regex falls back to the default and is reported through `on_error`.
        """
        settings = MarkSettings()
        settings.history_add = parse_history_add(self._read_raw('global', 'history_add'))
        settings.ignore_case = parse_ignore_case(self._read_raw('global', 'ignore_case'))
        settings.smart_case = ini_to_bool(self._read_raw('global', 'smart_case'), SMART_CASE_DEFAULT)
        settings.wrap_search = ini_to_bool(self._read_raw('global', 'wrap_search'), WRAP_SEARCH_DEFAULT)

        word_regex = self._read_raw('global', 'word_regex')
        if word_regex:
            settings.word_regex = word_regex
        try:
            settings.regex_word = re.compile(settings.word_regex)
        except re.error:
            if on_error:
                on_error('Invalid word_regex config - using fallback')
            settings.word_regex = WORD_REGEX_DEFAULT
            settings.regex_word = re.compile(WORD_REGEX_DEFAULT)
        return settings

    def color_definitions(self):
        """
        Returns the raw values of mark1, mark2, ... up to the first missing or empty key.
        Its length is the number of available mark slots.
        """
        colors = []
        while True:
            value = self._read_raw(COLORS_SECTION, color_key(len(colors)))
            if value is None or not value.strip():
                return colors
            colors.append(value.strip())

    def _read_raw(self, section, key):
        result = self._read(section, key, self._SENTINEL)
        return None if result == self._SENTINEL else result
