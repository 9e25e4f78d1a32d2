"""Tests for ado_importer.record_loader."""

import pytest

from ado_importer.errors import ConfigurationError
from ado_importer.record_loader import load_user_stories


@pytest.fixture
def stories(fixture_path):
    return load_user_stories(fixture_path("user_stories.json"))


def test_load_stories_in_order(stories):
    assert [s.name for s in stories] == ["Login page", "Password reset"]


def test_load_story_fields(stories):
    story = stories[0]
    assert story.type == "User Story"
    assert story.owner == "jane@example.com"
    assert story.state == "New"
    assert story.priority == 2
    assert story.area == "Web\\Team A"
    assert story.path == "Web\\Sprint 1"
    assert story.team == "Team A"
    assert story.iteration is None


def test_load_iteration_reference(stories):
    assert stories[1].iteration == "Sprint 2"


def test_load_tasks(stories):
    tasks = stories[0].tasks
    assert [t.name for t in tasks] == ["Build form", "Wire API"]
    assert tasks[0].estimate == 4
    assert tasks[1].estimate == 0
    assert tasks[1].priority == 3
    assert stories[1].tasks == ()


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(ConfigurationError, match="failed to read items file"):
        load_user_stories(str(tmp_path / "missing.json"))


def test_malformed_json_is_fatal(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('[{"name": "US1",', encoding="utf-8")
    with pytest.raises(ConfigurationError, match="failed to decode"):
        load_user_stories(str(path))


def test_top_level_must_be_list(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('{"name": "US1"}', encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_user_stories(str(path))


def test_story_must_be_object(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('["US1"]', encoding="utf-8")
    with pytest.raises(ConfigurationError, match="#0"):
        load_user_stories(str(path))


def test_tasks_must_be_objects(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('[{"name": "US1", "tasks": ["T1"]}]', encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_user_stories(str(path))


def test_non_numeric_priority_is_fatal(tmp_path):
    path = tmp_path / "items.json"
    path.write_text('[{"name": "US1", "priority": "high"}]', encoding="utf-8")
    with pytest.raises(ConfigurationError, match="invalid user story #0"):
        load_user_stories(str(path))


def test_empty_list(tmp_path):
    path = tmp_path / "items.json"
    path.write_text("[]", encoding="utf-8")
    assert load_user_stories(str(path)) == []
