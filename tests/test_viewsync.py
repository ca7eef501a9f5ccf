"""Tests for propagating registry state into views."""

from __future__ import annotations

import pytest

from multimark.registry import SlotRegistry
from multimark.viewsync import (
    SEARCH_HIGHLIGHT_PRIORITY,
    ViewSync,
    highlight_group,
    slot_priority,
)
from tests.fakes import FakeHost, FakeView


@pytest.fixture
def registry():
    registry = SlotRegistry()
    registry.init(3)
    return registry


@pytest.fixture
def sync_env(registry):
    views = [FakeView('a'), FakeView('b')]
    host = FakeHost(views=views)
    return ViewSync(registry, host), host, views


class TestPriorities:
    """Tests for group names and priorities."""

    def test_group_names(self):
        assert highlight_group(0) == 'MarkWord1'
        assert highlight_group(5) == 'MarkWord6'

    def test_priorities_ordered_below_search(self):
        priorities = [slot_priority(i, 6) for i in range(6)]
        assert priorities == sorted(priorities)
        assert len(set(priorities)) == 6
        assert max(priorities) < SEARCH_HIGHLIGHT_PRIORITY


class TestApplyOneView:
    """Tests for ViewSync.apply_one_view."""

    def test_set_then_replace(self, sync_env):
        sync, _host, (view, _other) = sync_env
        sync.apply_one_view(view, [1], 'foo')
        assert view.registered() == [('MarkWord2', 'foo')]
        sync.apply_one_view(view, [1], 'bar')
        assert view.registered() == [('MarkWord2', 'bar')]

    def test_priority_passed(self, sync_env):
        sync, _host, (view, _other) = sync_env
        sync.apply_one_view(view, [2], 'foo')
        (_group, _expr, priority), = view.highlights.values()
        assert priority == slot_priority(2, 3)

    def test_clear_is_idempotent(self, sync_env):
        sync, _host, (view, _other) = sync_env
        sync.apply_one_view(view, [0], 'foo')
        sync.apply_one_view(view, [0, 1, 2])
        sync.apply_one_view(view, [0, 1, 2])
        assert view.highlights == {}
        assert sync.handles(view) == {0: None, 1: None, 2: None}

    def test_multi_index_set_rejected(self, sync_env):
        sync, _host, (view, _other) = sync_env
        with pytest.raises(ValueError):
            sync.apply_one_view(view, [0, 1], 'foo')

    def test_render_applied(self, registry):
        view = FakeView('a')
        sync = ViewSync(registry, FakeHost(views=[view]), render=lambda p: '\\c' + p)
        sync.apply_one_view(view, [0], 'foo')
        assert view.registered() == [('MarkWord1', '\\cfoo')]


class TestApplyAllViews:
    """Tests for ViewSync.apply_all_views."""

    def test_every_view_updated(self, registry, sync_env):
        sync, _host, views = sync_env
        registry.set_pattern(0, 'foo')
        for view in views:
            sync.refresh_view(view)
        registry.set_pattern(1, 'bar')
        sync.apply_all_views([1], 'bar')
        for view in views:
            assert view.registered() == [('MarkWord1', 'foo'), ('MarkWord2', 'bar')]

    def test_view_without_record_gets_full_refresh(self, registry, sync_env):
        sync, _host, (seen, unseen) = sync_env
        registry.set_pattern(0, 'foo')
        sync.refresh_view(seen)
        registry.set_pattern(2, 'baz')
        sync.apply_all_views([2], 'baz')
        assert unseen.registered() == [('MarkWord1', 'foo'), ('MarkWord3', 'baz')]
        assert sync.has_record(unseen)

    def test_layout_restored(self, sync_env):
        sync, host, _views = sync_env
        sync.apply_all_views([0], 'foo')
        assert host.restored == [host.layout]

    def test_layout_restored_on_failure(self, registry, sync_env):
        sync, host, (view, _other) = sync_env

        def broken(group, expr, priority):
            raise RuntimeError('editor gone')

        view.add_highlight = broken
        registry.set_pattern(0, 'foo')
        with pytest.raises(RuntimeError):
            sync.apply_all_views([0], 'foo')
        assert host.restored == [host.layout]


class TestRefresh:
    """Tests for lazy and full refresh."""

    def test_disabled_registry_registers_nothing(self, registry, sync_env):
        sync, _host, (view, _other) = sync_env
        registry.set_pattern(0, 'foo')
        sync.refresh_view(view)
        registry.toggle_enabled(False)
        sync.refresh_view(view)
        assert view.highlights == {}
        assert sync.handles(view) == {0: None, 1: None, 2: None}

    def test_ensure_view_only_builds_once(self, registry, sync_env):
        sync, _host, (view, _other) = sync_env
        registry.set_pattern(0, 'foo')
        sync.ensure_view(view)
        handles = sync.handles(view)
        sync.ensure_view(view)
        assert sync.handles(view) == handles

    def test_lazy_refresh_all_skips_known_views(self, registry, sync_env):
        sync, _host, (known, fresh) = sync_env
        sync.refresh_view(known)
        registry.set_pattern(0, 'foo')
        sync.refresh_all_views(lazy=True)
        assert known.highlights == {}
        assert fresh.registered() == [('MarkWord1', 'foo')]

    def test_forget(self, sync_env):
        sync, _host, (view, _other) = sync_env
        sync.refresh_view(view)
        sync.forget(view)
        assert not sync.has_record(view)
