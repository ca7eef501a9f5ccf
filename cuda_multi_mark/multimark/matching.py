"""
Pattern helpers and the regex matching engine used for marks.

Patterns are Python regular expressions that may also carry the case
markers known from incremental search: ``\\c`` anywhere in the pattern
means "ignore case", ``\\C`` means "match case".
"""

import re
from functools import lru_cache

from .errors import InvalidPatternError

IGNORE_CASE_MARKER = '\\c'
MATCH_CASE_MARKER = '\\C'

# \c or \C that is not itself escaped (preceded by an even number of backslashes)
_CASE_MARKER = re.compile(r'(?<!\\)((?:\\\\)*)\\([cC])')
_ESCAPE_SEQUENCE = re.compile(r'\\.')
_NON_BLANK = re.compile(r'\S+')


def case_markers(expr):
    """Set of case markers present in `expr`: a subset of {'c', 'C'}."""
    return {m.group(2) for m in _CASE_MARKER.finditer(expr)}

def strip_case_markers(expr):
    return _CASE_MARKER.sub(r'\1', expr)

def has_uppercase(expr):
    """True if a literal uppercase letter appears outside escape sequences."""
    return any(ch.isupper() for ch in _ESCAPE_SEQUENCE.sub('', expr))

def adjust_for_case_sensitivity(expr, ignore_case, smart_case=False):
    """
    Makes a mark highlight the same text a manual search for `expr` would.
    When the editor ignores case and `expr` does not force either case,
    a leading ignore-case marker is added.
    """
    if not ignore_case or not expr:
        return expr
    if case_markers(expr):
        return expr
    if smart_case and has_uppercase(expr):
        return expr
    return IGNORE_CASE_MARKER + expr

def word_pattern(word, regex_word):
    """
    Pattern for a word taken from under the cursor: escaped, and bound to
    whole words only when every character of it is a keyword character.
    """
    escaped = re.escape(word)
    if regex_word.fullmatch(word):
        return r'\b' + escaped + r'\b'
    return escaped

def literal_pattern(text):
    """Pattern matching `text` literally, e.g. a selection."""
    return re.escape(text)

def word_under_cursor(line, x, regex_word):
    """
    Keyword under or after column `x`; failing that, the run of non-blank
    characters under or after it. Empty string if the rest of the line is blank.
    """
    for match in regex_word.finditer(line):
        if match.end() > x and match.end() > match.start():
            return match.group()
    for match in _NON_BLANK.finditer(line):
        if match.end() > x:
            return match.group()
    return ''


@lru_cache(maxsize=256)
def compile_pattern(pattern):
    """Compiles a mark pattern, honouring its case markers."""
    markers = case_markers(pattern)
    flags = re.IGNORECASE if 'c' in markers else 0
    try:
        return re.compile(strip_case_markers(pattern), flags)
    except re.error as ex:
        raise InvalidPatternError(pattern, str(ex)) from ex


class RegexMatcher:
    """Finds matches of mark patterns inside a single line of text."""

    def check(self, pattern):
        """Raises InvalidPatternError if `pattern` cannot be used."""
        compile_pattern(pattern)

    def search(self, text, pattern, start=0):
        """(start, end) of the first match at or after `start`, or None."""
        if start > len(text):
            return None
        match = compile_pattern(pattern).search(text, start)
        if match is None:
            return None
        return match.start(), match.end()

    def search_backward(self, text, pattern, end):
        """(start, end) of the last non-empty match starting before column `end`, or None."""
        found = None
        for match in compile_pattern(pattern).finditer(text):
            if match.start() >= end:
                break
            if match.end() > match.start():
                found = (match.start(), match.end())
        return found

    def find_all(self, text, pattern):
        """All non-empty matches in `text` as (start, end) pairs."""
        return [(m.start(), m.end()) for m in compile_pattern(pattern).finditer(text) if m.end() > m.start()]
