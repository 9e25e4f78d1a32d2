"""
ado_importer — Batch import of user stories and tasks into Azure DevOps.

  orchestrator.py       Run coordination (.env config, load, import, summary)
  importer.py           Create each story, then its tasks linked to the story id
  devops_client.py      HTTP communication with the work item tracking API
  field_mapper.py       Records to JSON Patch operations
  record_loader.py      JSON items file to records
  iteration_resolver.py Iteration lookups (not implemented, return None)
  models.py             UserStory, Task, RemoteSettings
  errors.py             ConfigurationError / RemoteError taxonomy
"""

from .orchestrator import ImportOrchestrator
from .importer import BatchImporter, BatchResult, RecordFailure
from .devops_client import DevOpsClient
from .field_mapper import build_task_operations, build_user_story_operations
from .record_loader import load_user_stories
from .iteration_resolver import IterationResolver
from .models import RemoteSettings, Task, UserStory
from .errors import (
    ConfigurationError,
    ImporterError,
    RemoteError,
    ResponseShapeError,
    WorkItemHTTPError,
)

__version__ = "0.1.0"
