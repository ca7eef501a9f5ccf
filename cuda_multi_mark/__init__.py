# Multi Mark plugin for CudaText
# MIT License

import os
from cudatext import *
from cudax_lib import html_color_to_int

from .multimark.commands import MarkCommands
from .multimark.config import PluginConfig
from .multimark.palette import MarkPalette
from .multimark.session import MarkSession
from .multimark.viewsync import highlight_group

from cudax_lib import get_translation
_ = get_translation(__file__)  # I18N

# --- Plugin Description & Logic ---
# Highlights several words/patterns at the same time, each in its own color.
#
# WORKFLOW:
# 1. Mark: user runs 'Mark word' on a word (or a single-line selection); it gets the next free color.
#    Running it again on a marked word removes that mark.
# 2. When all colors are used, the oldest-cycled color is taken over by the new pattern.
# 3. Toggle hides/shows all marks without forgetting them; Clear forgets them all.
# 4. All open editors show the same marks; editors opened later get them on first focus.

CONFIG_FILENAME = 'cuda_multi_mark.ini'
PREFIX = _('Multi Mark: ')

# Dark text stays readable on the light mark backgrounds, with light and dark themes alike
COLOR_MARK_FONT = 0xb000000


def config_path():
    return os.path.join(app_path(APP_DIR_SETTINGS), CONFIG_FILENAME)

def open_config():
    """INI-backed config bound to the plugin's settings file, with defaults ensured."""
    path = config_path()
    ini_config = PluginConfig(
        lambda section, key, default: ini_read(path, section, key, default),
        lambda section, key, value: ini_write(path, section, key, value),
    )
    ini_config.ensure_file()
    return ini_config


class CudaView:
    """MarkView over one CudaText editor."""

    def __init__(self, editor, plugin):
        self.ed = editor
        self.plugin = plugin

    @property
    def view_id(self):
        return self.ed.get_prop(PROP_HANDLE_SELF)

    def line_count(self):
        return self.ed.get_line_count()

    def line_text(self, y):
        return self.ed.get_text_line(y) or ''

    def caret(self):
        carets = self.ed.get_carets()
        if not carets:
            return 0, 0
        return carets[0][0], carets[0][1]

    def set_caret(self, x, y):
        self.ed.set_caret(x, y, id=CARET_SET_ONE)

    def selection(self):
        carets = self.ed.get_carets()
        if len(carets) != 1:
            return None
        x0, y0, x1, y1 = carets[0]
        if y1 < 0 or (x0, y0) == (x1, y1):
            return None
        # Sort coords of caret
        if (y0, x0) > (y1, x1):
            x0, y0, x1, y1 = x1, y1, x0, y0
        return x0, y0, x1, y1

    def add_highlight(self, group, expr, priority):
        """
        Adds one marker per match on every line; the slot's marker tag is the handle.
        Markers are positional, so the plugin redraws the view after text changes.
        CudaText has no marker priority; `priority` is unused.
        """
        tag = self.plugin.tag_for(group)
        color = html_color_to_int(self.plugin.group_colors.get(group, '#808080'))
        matcher = self.plugin.session.matcher

        # Collect all markers to add, sorted by (y, x)
        markers_to_add = []
        for y in range(self.line_count()):
            for start, end in matcher.find_all(self.line_text(y), expr):
                markers_to_add.append((y, start, end - start))
        markers_to_add.sort()

        for y, x, length in markers_to_add:
            self.ed.attr(MARKERS_ADD,
                tag=tag,
                x=x,
                y=y,
                len=length,
                color_font=COLOR_MARK_FONT,
                color_bg=color,
                color_border=COLOR_MARK_FONT,
            )
        return tag

    def remove_highlight(self, handle):
        self.ed.attr(MARKERS_DELETE_BY_TAG, tag=handle)


class CudaHost:
    """MarkHost over the CudaText application."""

    def __init__(self, plugin):
        self.plugin = plugin
        self.input_history = []

    def views(self):
        return [CudaView(Editor(h), self.plugin) for h in ed_handles()]

    def current_view(self):
        return CudaView(ed, self.plugin)

    def save_layout(self):
        return ed.get_prop(PROP_LINE_TOP), ed.get_prop(PROP_SCROLL_HORZ)

    def restore_layout(self, layout):
        line_top, scroll_horz = layout
        if ed.get_prop(PROP_LINE_TOP) != line_top:
            ed.set_prop(PROP_LINE_TOP, line_top)
        if ed.get_prop(PROP_SCROLL_HORZ) != scroll_horz:
            ed.set_prop(PROP_SCROLL_HORZ, scroll_horz)

    def color_count(self):
        return len(open_config().color_definitions())

    def ignores_case(self):
        props = app_proc(PROC_GET_FINDER_PROP, '') or {}
        return not props.get('op_case', False)

    def history_add(self, register, pattern):
        if register == 'search':
            self.set_last_search(pattern)
        elif register == 'input':
            if pattern in self.input_history:
                self.input_history.remove(pattern)
            self.input_history.append(pattern)

    def set_last_search(self, pattern):
        app_proc(PROC_SET_FINDER_PROP, {'find': pattern, 'op_regex': True})

    def status(self, message):
        msg_status(PREFIX + message)

    def error(self, message):
        msg_status(PREFIX + message)
        print(_('ERROR: ') + PREFIX + message)


class Command:
    """
    Entry points for the commands and events listed in install.inf.
    One MarkSession serves all editors; each editor keeps its own marker record.
    """

    def __init__(self):
        """Initializes plugin state."""
        self.tags = {}         # {group name: marker tag}
        self.group_colors = {} # {group name: HTML color}
        self.host = CudaHost(self)
        self.session = MarkSession(self.host)
        self.commands = MarkCommands(self.session, translate=_)
        self.load_config()
        self.session.start()

    def tag_for(self, group):
        """Unique marker tag per color group, so each slot can be deleted on its own."""
        if group not in self.tags:
            self.tags[group] = app_proc(PROC_GET_UNIQUE_TAG, '')
        return self.tags[group]

    def load_config(self):
        """Reads settings and colors fresh from the INI file, so no restart is needed."""
        ini_config = open_config()
        self.session.update_settings(ini_config.read_settings(on_error=lambda text: self.host.error(_(text))))
        palette = MarkPalette(ini_config.color_definitions())
        self.group_colors = {highlight_group(i): palette.color(i) for i in range(len(palette))}

    def view(self, ed_self):
        return CudaView(ed_self, self)

    # --- Commands ---

    def mark(self):
        """Mark (or unmark) the word under caret, or the selected text."""
        self.load_config()
        self.commands.mark_current_word()

    def mark_regex(self):
        """Mark an explicit pattern; an empty answer toggles all marks."""
        self.load_config()
        history = self.host.input_history
        default = history[-1] if history else ''
        pattern = dlg_input(_('Mark pattern (empty to show/hide marks):'), default)
        if pattern is None:
            return
        self.commands.mark_explicit(pattern)

    def toggle(self):
        self.load_config()
        self.commands.toggle_visibility()

    def clear(self):
        self.load_config()
        self.commands.clear_all()

    def next_current(self):
        self.load_config()
        self.commands.search_current_mark(backward=False)

    def prev_current(self):
        self.load_config()
        self.commands.search_current_mark(backward=True)

    def next_any(self):
        self.load_config()
        self.commands.search_any_mark(backward=False)

    def prev_any(self):
        self.load_config()
        self.commands.search_any_mark(backward=True)

    def config(self):
        """Opens the plugin configuration INI file."""
        try:
            open_config()
            file_open(config_path())
        except Exception as ex:
            msg_status(_('Cannot open config: ') + str(ex))

    # --- Events ---

    def on_open(self, ed_self):
        self.commands.on_view_entered(self.view(ed_self))

    def on_focus(self, ed_self):
        self.commands.on_view_entered(self.view(ed_self))

    def on_tab_change(self, ed_self):
        self.commands.on_tab_entered()

    def on_close(self, ed_self):
        self.commands.on_view_closed(self.view(ed_self))

    def on_change_slow(self, ed_self):
        self.commands.on_text_changed(self.view(ed_self))

    def on_open_reopen(self, ed_self):
        """File reloaded from disk: every marker position is stale."""
        self.commands.on_text_changed(self.view(ed_self))

    def on_state(self, ed_self, state):
        if state in (APPSTATE_THEME_SYNTAX, APPSTATE_THEME_UI):
            self.load_config()
            self.commands.on_colors_changed()
