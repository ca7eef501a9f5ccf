"""Exceptions raised by the mark engine."""


class MarkError(Exception):
    """Base class for errors the command layer reports to the user."""


class NoHighlightSlotsError(MarkError):
    """No mark colors are defined, so there is nothing to highlight with."""

    def __init__(self, message='No mark highlightings defined'):
        super().__init__(message)


class InvalidPatternError(MarkError):
    """The matching engine rejected a pattern."""

    def __init__(self, pattern, reason=''):
        self.pattern = pattern
        self.reason = reason
        text = 'Invalid pattern: ' + pattern
        if reason:
            text += ' (' + reason + ')'
        super().__init__(text)
