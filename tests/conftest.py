"""Shared pytest fixtures for mark engine tests."""

from __future__ import annotations

import pytest

from multimark.commands import MarkCommands
from multimark.session import MarkSession
from tests.fakes import FakeHost, FakeView


@pytest.fixture
def views():
    return [
        FakeView('left', ['foo bar foo', 'alpha beta']),
        FakeView('right', ['bar baz', 'foo']),
    ]


@pytest.fixture
def host(views):
    return FakeHost(colors=3, views=views)


@pytest.fixture
def session(host):
    session = MarkSession(host)
    session.start()
    return session


@pytest.fixture
def commands(session):
    return MarkCommands(session)
