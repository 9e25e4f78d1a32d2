"""Tests for ado_importer.field_mapper."""

import pytest

from ado_importer.field_mapper import (
    AUTOMATION_TAG,
    PARENT_LINK_COMMENT,
    PARENT_LINK_TYPE,
    build_task_operations,
    build_user_story_operations,
    work_item_url,
)
from ado_importer.models import Task


def _by_path(operations):
    return {op["path"]: op["value"] for op in operations}


def test_story_operations_copy_fields_verbatim(story):
    values = _by_path(build_user_story_operations(story))
    assert values["/fields/System.Title"] == "US1"
    assert values["/fields/System.Description"] == "Story description"
    assert values["/fields/System.AssignedTo"] == "jane@example.com"
    assert values["/fields/Microsoft.VSTS.Common.Priority"] == 2
    assert values["/fields/System.State"] == "New"
    assert values["/fields/System.AreaPath"] == "TeamA"


def test_story_operations_order(story):
    paths = [op["path"] for op in build_user_story_operations(story)]
    assert paths == [
        "/fields/System.Title",
        "/fields/System.Description",
        "/fields/System.AssignedTo",
        "/fields/Microsoft.VSTS.Common.Priority",
        "/fields/System.State",
        "/fields/System.Tags",
        "/fields/System.AreaPath",
    ]


def test_all_operations_are_add(story):
    operations = build_user_story_operations(story) + build_task_operations(
        story.tasks[0], story, 100, "acme"
    )
    assert all(op["op"] == "add" for op in operations)


def test_every_item_is_tagged(story):
    assert _by_path(build_user_story_operations(story))["/fields/System.Tags"] == AUTOMATION_TAG
    task_values = _by_path(build_task_operations(story.tasks[0], story, 100, "acme"))
    assert task_values["/fields/System.Tags"] == AUTOMATION_TAG


def test_story_has_no_relation(story):
    paths = [op["path"] for op in build_user_story_operations(story)]
    assert "/relations/-" not in paths


def test_task_inherits_parent_area(story):
    values = _by_path(build_task_operations(story.tasks[1], story, 100, "acme"))
    assert values["/fields/System.AreaPath"] == story.area


def test_task_copies_own_fields(story):
    values = _by_path(build_task_operations(story.tasks[1], story, 100, "acme"))
    assert values["/fields/System.Title"] == "T2"
    assert values["/fields/System.Description"] == "second"
    assert values["/fields/System.AssignedTo"] == "bob@example.com"
    assert values["/fields/Microsoft.VSTS.Common.Priority"] == 3


def test_task_relation_is_last_and_points_at_parent(story):
    operations = build_task_operations(story.tasks[0], story, 4242, "acme")
    relation = operations[-1]
    assert relation["path"] == "/relations/-"
    assert relation["value"] == {
        "rel": PARENT_LINK_TYPE,
        "url": "https://dev.azure.com/acme/_apis/wit/workItems/4242",
        "attributes": {"comment": PARENT_LINK_COMMENT},
    }
    assert sum(1 for op in operations if op["path"] == "/relations/-") == 1


def test_task_relation_uses_service_url(story):
    operations = build_task_operations(
        story.tasks[0], story, 7, "acme", service_url="https://ado.example.com/"
    )
    assert operations[-1]["value"]["url"] == "https://ado.example.com/acme/_apis/wit/workItems/7"


def test_iteration_omitted_without_path(story):
    story_paths = [op["path"] for op in build_user_story_operations(story)]
    task_paths = [op["path"] for op in build_task_operations(story.tasks[0], story, 1, "acme")]
    assert "/fields/System.IterationPath" not in story_paths
    assert "/fields/System.IterationPath" not in task_paths


@pytest.mark.parametrize("iteration_path", [None, ""])
def test_iteration_never_sent_empty(story, iteration_path):
    operations = build_user_story_operations(story, iteration_path)
    assert all(op["path"] != "/fields/System.IterationPath" for op in operations)


def test_iteration_added_when_resolved(story):
    values = _by_path(build_user_story_operations(story, "Portal\\Sprint 3"))
    assert values["/fields/System.IterationPath"] == "Portal\\Sprint 3"


def test_task_estimate_mapped_when_set(story):
    task = Task(name="T3", estimate=5)
    values = _by_path(build_task_operations(task, story, 1, "acme"))
    assert values["/fields/Microsoft.VSTS.Scheduling.OriginalEstimate"] == 5


def test_task_estimate_omitted_when_zero(story):
    values = _by_path(build_task_operations(story.tasks[0], story, 1, "acme"))
    assert "/fields/Microsoft.VSTS.Scheduling.OriginalEstimate" not in values


def test_work_item_url():
    assert work_item_url("https://dev.azure.com", "acme", 12) == (
        "https://dev.azure.com/acme/_apis/wit/workItems/12"
    )
