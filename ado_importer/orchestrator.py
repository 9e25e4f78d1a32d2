"""
Import Orchestrator — Run coordination for the Azure DevOps batch import.

This module ties the other modules (record_loader, DevOpsClient,
BatchImporter) into a sequential 3-step workflow:

  Step 1: LOAD ITEMS
      Reads the JSON items file (ITEMS_PATH) into UserStory records.
      An unreadable or malformed file ends the run before any remote call.

  Step 2: CREATE WORK ITEMS
      BatchImporter creates each user story, then its tasks linked to the
      story id. Per-record failures are logged and the batch continues.

  Step 3: SUMMARY
      Counts of processed stories and created stories/tasks, plus one line
      per failed record.

Configuration:
    All settings are loaded from environment variables (typically via .env file).
    Required: DEVOPS_ORGANIZATION, DEVOPS_PROJECT, DEVOPS_PAT.
    See config/settings.py for defaults.

Typical usage:
    orchestrator = ImportOrchestrator(env_file="./.env")
    if orchestrator.validate_config():
        results = orchestrator.run()
        orchestrator.print_summary(results)
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .devops_client import DevOpsClient
from .errors import ConfigurationError
from .importer import BatchImporter
from .iteration_resolver import IterationResolver
from .models import RemoteSettings
from .record_loader import load_user_stories

from config import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


class ImportOrchestrator:
    """Orchestrates the user story / task import into Azure DevOps.

    Attributes:
        organization: Azure DevOps organization name.
        project: Azure DevOps project name.
        pat: Personal access token used as the Basic auth password.
        service_url: Azure DevOps base URL (default: "https://dev.azure.com").
        api_version: Work item tracking API version (default: "7.0").
        items_path: JSON file holding the user stories to import.
        app_name: Label printed in the run header.
        request_timeout: Seconds before a create call is abandoned.
        debug: Whether to enable verbose output (default: False).
    """

    def __init__(self, env_file: str = "./.env"):
        """Initialize the orchestrator by loading configuration from environment.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        # Azure DevOps connection (required)
        self.organization = os.getenv("DEVOPS_ORGANIZATION", "")
        self.project = os.getenv("DEVOPS_PROJECT", "")
        self.pat = os.getenv("DEVOPS_PAT", "")

        self.service_url = os.getenv("DEVOPS_SERVICE_URL", DEFAULT_SETTINGS["SERVICE_URL"])
        self.api_version = os.getenv("DEVOPS_API_VERSION", DEFAULT_SETTINGS["API_VERSION"])

        # Input and processing options
        self.items_path = os.getenv("ITEMS_PATH", DEFAULT_SETTINGS["ITEMS_PATH"])
        self.app_name = os.getenv("APP_NAME", "") or DEFAULT_SETTINGS["APP_NAME"]
        self.request_timeout = float(
            os.getenv("REQUEST_TIMEOUT", str(DEFAULT_SETTINGS["REQUEST_TIMEOUT"]))
        )
        self.debug = os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true"

        self.iteration_resolver = IterationResolver()

    @property
    def settings(self) -> RemoteSettings:
        return RemoteSettings(
            organization=self.organization,
            project=self.project,
            pat=self.pat,
            service_url=self.service_url,
            api_version=self.api_version,
        )

    def validate_config(self) -> bool:
        """Validate that all required configuration values are present.

        Returns:
            True if all required values are present, False otherwise.
            Prints specific error messages for each missing value.
        """
        errors = []
        if not self.organization:
            errors.append("DEVOPS_ORGANIZATION is required")
        if not self.project:
            errors.append("DEVOPS_PROJECT is required")
        if not self.pat:
            errors.append("DEVOPS_PAT is required")
        if not self.items_path:
            errors.append("ITEMS_PATH is required")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def run(self) -> Dict[str, Any]:
        """Execute the import.

        Returns:
            A dict containing:
                - started_at/completed_at: ISO timestamps
                - config: Organization, project and items path
                - success: True if the batch ran to completion (individual
                  records may still have failed, see summary)
                - summary: BatchResult counts and failures
                - error: Error message (if success=False)
        """
        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "config": {
                "organization": self.organization,
                "project": self.project,
                "items_path": self.items_path,
            },
            "success": False,
        }

        client = None
        try:
            # Step 1: Load the user stories from disk
            print(f"\n{'='*60}")
            print("STEP 1: LOAD ITEMS")
            print("="*60)
            user_stories = load_user_stories(self.items_path)
            task_count = sum(len(s.tasks) for s in user_stories)
            print(f"  User stories: {len(user_stories)}")
            print(f"  Tasks: {task_count}")

            # Step 2: Create the work items
            print(f"\n{'='*60}")
            print("STEP 2: CREATE WORK ITEMS")
            print("="*60)
            client = DevOpsClient(self.settings, timeout=self.request_timeout, debug=self.debug)
            importer = BatchImporter(client, self.iteration_resolver, debug=self.debug)
            batch = importer.run(user_stories)

            results["success"] = not batch.cancelled
            results["summary"] = batch.to_dict()

        except ConfigurationError as e:
            results["error"] = str(e)
            logger.error("Import aborted: %s", e)
            print(f"\n  ERROR: {e}")
        finally:
            if client is not None:
                client.close()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()
        return results

    def print_summary(self, results: Dict):
        """Print a human-readable execution summary.

        Args:
            results: The dict returned by run().
        """
        print(f"\n{'='*60}")
        print("IMPORT COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        summary = results.get("summary", {})
        if summary:
            print(f"Processed: {summary.get('stories_processed', 0)} user stories")
            print(
                f"Finish Job. Created: {summary.get('stories_created', 0)} US "
                f"and {summary.get('tasks_created', 0)} Tasks"
            )
            failures = summary.get("failures", [])
            if failures:
                print(f"Failures: {len(failures)}")
                for failure in failures:
                    owner = f" (user story: {failure['parent']})" if failure.get("parent") else ""
                    print(f"  - {failure['kind']} {failure['name']}{owner}: {failure['error']}")
            if summary.get("cancelled"):
                print("Run was cancelled before all records were processed")

        if results.get("error"):
            print(f"Error: {results['error']}")
