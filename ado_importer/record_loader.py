"""
Record Loader — Read the user stories to import from a JSON file.

Expected layout:

    [
        {
            "name": "Login page", "type": "User Story", "description": "...",
            "owner": "jane@example.com", "state": "New", "priority": 2,
            "area": "Web\\Team A", "path": "Web\\Sprint 1", "team": "Team A",
            "iteraction": null,
            "tasks": [
                {"name": "Build form", "type": "Task", "description": "...",
                 "owner": "bob@example.com", "state": "New", "priority": 2,
                 "estimate": 4}
            ]
        }
    ]

Any problem reading or parsing the file is fatal for the run and raised as
ConfigurationError.
"""

import json
from typing import List

from .errors import ConfigurationError
from .models import UserStory


def load_user_stories(filepath: str) -> List[UserStory]:
    """
    Load the JSON items file into a list of UserStory records.

    ARGS:
        filepath: Path to the JSON file

    RETURNS:
        User stories in file order, each holding its tasks
    """
    try:
        with open(filepath, "r", encoding="utf-8-sig") as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"failed to read items file in location {filepath}: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"failed to decode items file {filepath}: {e}") from e

    if not isinstance(raw, list):
        raise ConfigurationError(f"items file {filepath} must contain a JSON array of user stories")

    stories = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"user story #{index} in {filepath} is not an object")
        tasks = entry.get("tasks") or []
        if not isinstance(tasks, list) or not all(isinstance(t, dict) for t in tasks):
            raise ConfigurationError(f"tasks of user story #{index} in {filepath} must be a list of objects")
        try:
            stories.append(UserStory.from_dict(entry))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid user story #{index} in {filepath}: {e}") from e
    return stories
