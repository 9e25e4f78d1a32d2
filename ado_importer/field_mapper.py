"""
Field Mapper — Translate records into Azure DevOps JSON Patch operations.

Azure DevOps creates a work item from an ordered list of patch operations:

    [
        {"op": "add", "path": "/fields/System.Title", "value": "Login page"},
        {"op": "add", "path": "/fields/System.AreaPath", "value": "Web\\Team A"},
        ...
    ]

Tasks carry one extra operation adding a hierarchy relation to their parent:

    {
        "op": "add",
        "path": "/relations/-",
        "value": {
            "rel": "System.LinkTypes.Hierarchy-Reverse",
            "url": "https://dev.azure.com/{org}/_apis/wit/workItems/{parent_id}",
            "attributes": {"comment": "Linking task to user story"},
        },
    }

Values are copied verbatim from the records. Nothing here touches the network.
"""

from typing import Any, Dict, List, Optional

from .models import Task, UserStory

AUTOMATION_TAG = "system_automated"
PARENT_LINK_TYPE = "System.LinkTypes.Hierarchy-Reverse"
PARENT_LINK_COMMENT = "Linking task to user story"

TITLE_FIELD = "/fields/System.Title"
DESCRIPTION_FIELD = "/fields/System.Description"
ASSIGNED_TO_FIELD = "/fields/System.AssignedTo"
PRIORITY_FIELD = "/fields/Microsoft.VSTS.Common.Priority"
STATE_FIELD = "/fields/System.State"
TAGS_FIELD = "/fields/System.Tags"
AREA_PATH_FIELD = "/fields/System.AreaPath"
ITERATION_PATH_FIELD = "/fields/System.IterationPath"
ORIGINAL_ESTIMATE_FIELD = "/fields/Microsoft.VSTS.Scheduling.OriginalEstimate"
RELATIONS_PATH = "/relations/-"


def _add(path: str, value: Any) -> Dict[str, Any]:
    return {"op": "add", "path": path, "value": value}


def _common_operations(item, area: str, iteration_path: Optional[str]) -> List[Dict[str, Any]]:
    operations = [
        _add(TITLE_FIELD, item.name),
        _add(DESCRIPTION_FIELD, item.description),
        _add(ASSIGNED_TO_FIELD, item.owner),
        _add(PRIORITY_FIELD, item.priority),
        _add(STATE_FIELD, item.state),
        _add(TAGS_FIELD, AUTOMATION_TAG),
        _add(AREA_PATH_FIELD, area),
    ]
    # Only emitted once an iteration resolver returns a real path.
    if iteration_path:
        operations.append(_add(ITERATION_PATH_FIELD, iteration_path))
    return operations


def work_item_url(service_url: str, organization: str, item_id: int) -> str:
    """Return the API URL identifying a work item, as used in relations."""
    return f"{service_url.rstrip('/')}/{organization}/_apis/wit/workItems/{item_id}"


def build_user_story_operations(
    story: UserStory, iteration_path: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Build the patch document creating a user story."""
    return _common_operations(story, story.area, iteration_path)


def build_task_operations(
    task: Task,
    story: UserStory,
    parent_id: int,
    organization: str,
    service_url: str = "https://dev.azure.com",
    iteration_path: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Build the patch document creating a task linked to its user story.

    The task takes the area path of its parent story. The relation URL points
    at the parent's id as returned by Azure DevOps when the story was created.
    """
    operations = _common_operations(task, story.area, iteration_path)
    if task.estimate > 0:
        operations.append(_add(ORIGINAL_ESTIMATE_FIELD, task.estimate))
    operations.append(
        _add(
            RELATIONS_PATH,
            {
                "rel": PARENT_LINK_TYPE,
                "url": work_item_url(service_url, organization, parent_id),
                "attributes": {"comment": PARENT_LINK_COMMENT},
            },
        )
    )
    return operations
