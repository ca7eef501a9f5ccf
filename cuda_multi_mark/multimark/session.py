"""The state of one mark session, shared by everything that reads or changes it."""

from .config import MarkSettings
from .errors import NoHighlightSlotsError
from .lookup import MarkLookup
from .matching import RegexMatcher, adjust_for_case_sensitivity
from .navigation import MarkNavigator
from .registry import SlotRegistry
from .viewsync import ViewSync


class MarkSession:
    """
    Owns the registry and the per-view records for the lifetime of the editor process.
    Components get their state from here instead of from module globals.
    """

    def __init__(self, host, settings=None, matcher=None):
        self.host = host
        self.settings = settings or MarkSettings()
        self.matcher = matcher or RegexMatcher()
        self.registry = SlotRegistry()
        self.sync = ViewSync(self.registry, host, render=self.render)
        self.lookup = MarkLookup(self.registry, self.matcher, render=self.render)
        self.navigator = MarkNavigator(self.matcher, wrap=self.settings.wrap_search)

    def update_settings(self, settings):
        self.settings = settings
        self.navigator.wrap = settings.wrap_search

    def render(self, pattern):
        """Expression that highlights what a manual search for `pattern` would find."""
        ignore_case = self.settings.resolve_ignore_case(self.host.ignores_case())
        return adjust_for_case_sensitivity(pattern, ignore_case, self.settings.smart_case)

    def start(self):
        """
        Sizes the registry from the colors available at startup.
        Returns False if there are none; the first mark attempt will report it.
        """
        try:
            self.registry.init(self.host.color_count())
        except NoHighlightSlotsError:
            return False
        return True

    def ensure_capacity(self):
        """Re-detects the colors while the registry has no slots; raises NoHighlightSlotsError."""
        if self.registry.capacity == 0:
            self.registry.init(self.host.color_count())
