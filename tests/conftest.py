"""Shared fixtures for the importer tests."""

import os

import pytest

from ado_importer.models import RemoteSettings, Task, UserStory

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture
def fixture_path():
    def _path(filename):
        return os.path.join(FIXTURES_DIR, filename)
    return _path


@pytest.fixture
def settings():
    return RemoteSettings(organization="acme", project="Portal", pat="secret-pat")


@pytest.fixture
def story():
    return UserStory(
        name="US1",
        type="User Story",
        description="Story description",
        owner="jane@example.com",
        state="New",
        priority=2,
        area="TeamA",
        path="Portal\\Sprint 1",
        tasks=(
            Task(name="T1", description="first", owner="bob@example.com", state="New", priority=1),
            Task(name="T2", description="second", owner="bob@example.com", state="New", priority=3),
        ),
        team="Team A",
    )
