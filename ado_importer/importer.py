"""
Batch Importer — Create user stories and their tasks in Azure DevOps.

For every user story:

  1. Create the story and wait for the id Azure DevOps assigns to it.
  2. Create each of its tasks with a hierarchy relation to that id.

A story that fails to create is terminal for the story and its tasks: no task
call is issued without a known parent id. A task that fails is terminal only
for itself; its siblings are still attempted. Failures are logged with the
record name and collected on the BatchResult, and the batch moves on.

ConfigurationError is not caught here. Missing settings stop the whole run.
"""

import logging
import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .devops_client import DevOpsClient
from .errors import RemoteError
from .field_mapper import build_task_operations, build_user_story_operations
from .iteration_resolver import IterationResolver
from .models import TASK_KIND, USER_STORY_KIND, Task, UserStory

logger = logging.getLogger(__name__)


@dataclass
class RecordFailure:
    kind: str
    name: str
    error: str
    parent: Optional[str] = None


@dataclass
class BatchResult:
    stories_processed: int = 0
    stories_created: int = 0
    tasks_attempted: int = 0
    tasks_created: int = 0
    failures: List[RecordFailure] = field(default_factory=list)
    cancelled: bool = False

    @property
    def stories_failed(self) -> int:
        return sum(1 for f in self.failures if f.kind == USER_STORY_KIND)

    @property
    def tasks_failed(self) -> int:
        return sum(1 for f in self.failures if f.kind == TASK_KIND)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stories_processed": self.stories_processed,
            "stories_created": self.stories_created,
            "stories_failed": self.stories_failed,
            "tasks_attempted": self.tasks_attempted,
            "tasks_created": self.tasks_created,
            "tasks_failed": self.tasks_failed,
            "cancelled": self.cancelled,
            "failures": [asdict(f) for f in self.failures],
        }


class BatchImporter:
    """Runs the create-story-then-tasks workflow over a list of user stories.

    Attributes:
        client: DevOpsClient bound to the target organization and project.
        iteration_resolver: Optional lookup for iteration paths. When absent or
            when it returns None, no iteration field is sent.
        debug: If True, print verbose progress.
    """

    def __init__(
        self,
        client: DevOpsClient,
        iteration_resolver: Optional[IterationResolver] = None,
        debug: bool = False,
    ):
        self.client = client
        self.iteration_resolver = iteration_resolver
        self.debug = debug

    def run(
        self,
        user_stories: Iterable[UserStory],
        cancel_event: Optional[threading.Event] = None,
    ) -> BatchResult:
        """Import all user stories, isolating per-record failures.

        Args:
            user_stories: Records to create, in order.
            cancel_event: When set, no further create call is issued.

        Returns:
            BatchResult with creation counts and the list of failures.
        """
        self.client.settings.validate()
        result = BatchResult()

        for story in user_stories:
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                break
            self._import_story(story, result, cancel_event)
            result.stories_processed += 1

        return result

    def _import_story(self, story: UserStory, result: BatchResult, cancel_event) -> None:
        iteration_path = self._resolve_iteration(story)
        operations = build_user_story_operations(story, iteration_path)

        try:
            story_id = self.client.create_item(USER_STORY_KIND, operations)
        except RemoteError as e:
            logger.error("Failed to create user story %r: %s", story.name, e)
            result.failures.append(RecordFailure(USER_STORY_KIND, story.name, str(e)))
            return

        result.stories_created += 1
        logger.info("User story created successfully: %r (id=%d)", story.name, story_id)

        for task in story.tasks:
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                return
            self._import_task(task, story, story_id, iteration_path, result)

    def _import_task(
        self,
        task: Task,
        story: UserStory,
        story_id: int,
        iteration_path: Optional[str],
        result: BatchResult,
    ) -> None:
        settings = self.client.settings
        operations = build_task_operations(
            task,
            story,
            story_id,
            settings.organization,
            settings.service_url,
            iteration_path,
        )

        result.tasks_attempted += 1
        try:
            task_id = self.client.create_item(TASK_KIND, operations)
        except RemoteError as e:
            logger.error(
                "Failed to create task %r of user story %r: %s", task.name, story.name, e
            )
            result.failures.append(RecordFailure(TASK_KIND, task.name, str(e), parent=story.name))
            return

        result.tasks_created += 1
        logger.info("Task created successfully: %r (id=%d, parent=%d)", task.name, task_id, story_id)
        if self.debug:
            print(f"    Task #{task_id} -> User Story #{story_id}")

    def _resolve_iteration(self, story: UserStory) -> Optional[str]:
        if self.iteration_resolver is None:
            return None
        if story.iteration:
            return self.iteration_resolver.find_iteration(story.iteration)
        return self.iteration_resolver.find_next_iteration(story.team)
