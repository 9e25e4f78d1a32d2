"""
Models - In-memory user stories, tasks and remote settings.

Records are built from the input JSON and stay immutable for the whole run.
JSON key names follow the input file, including the "iteraction" spelling
used for the optional iteration reference.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigurationError

USER_STORY_KIND = "User Story"
TASK_KIND = "Task"


def _as_int(value: Any) -> int:
    if value in (None, ""):
        return 0
    return int(value)


@dataclass(frozen=True)
class Task:
    """A unit of work created as a child of one user story."""

    name: str = ""
    type: str = ""
    description: str = ""
    owner: str = ""
    state: str = ""
    priority: int = 0
    estimate: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            name=data.get("name") or "",
            type=data.get("type") or "",
            description=data.get("description") or "",
            owner=data.get("owner") or "",
            state=data.get("state") or "",
            priority=_as_int(data.get("priority")),
            estimate=_as_int(data.get("estimate")),
        )


@dataclass(frozen=True)
class UserStory:
    """A top-level record owning zero or more tasks.

    Attributes:
        area: Area path applied to the story and to every one of its tasks.
        path: Iteration path as written in the input (kept, not mapped).
        iteration: Optional iteration name to resolve ("iteraction" in JSON).
        team: Team used to look up the next iteration when none is named.
    """

    name: str = ""
    type: str = ""
    description: str = ""
    owner: str = ""
    state: str = ""
    priority: int = 0
    area: str = ""
    path: str = ""
    tasks: Tuple[Task, ...] = ()
    iteration: Optional[str] = None
    team: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserStory":
        tasks = tuple(Task.from_dict(t) for t in data.get("tasks") or [])
        return cls(
            name=data.get("name") or "",
            type=data.get("type") or "",
            description=data.get("description") or "",
            owner=data.get("owner") or "",
            state=data.get("state") or "",
            priority=_as_int(data.get("priority")),
            area=data.get("area") or "",
            path=data.get("path") or "",
            tasks=tasks,
            iteration=data.get("iteraction"),
            team=data.get("team") or "",
        )


@dataclass(frozen=True)
class RemoteSettings:
    """Connection settings for one Azure DevOps project."""

    organization: str
    project: str
    pat: str = field(repr=False)
    service_url: str = "https://dev.azure.com"
    api_version: str = "7.0"

    def missing_fields(self):
        missing = []
        if not self.organization:
            missing.append("organization")
        if not self.project:
            missing.append("project")
        if not self.pat:
            missing.append("PAT")
        return missing

    def validate(self) -> None:
        """Raise ConfigurationError unless organization, project and PAT are set."""
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(
                f"missing Azure DevOps configuration: {', '.join(missing)}"
            )
