"""
Azure DevOps Client — Creates work items through the REST API.

Endpoint:
    POST {service_url}/{organization}/{project}/_apis/wit/workitems/${kind}?api-version=7.0
    Content-Type: application/json-patch+json
    Body: [{"op": "add", "path": "/fields/System.Title", "value": "..."}, ...]
    Response (200/201): {"id": 123, "rev": 1, "fields": {...}, ...}

Authentication is HTTP Basic with an empty username and the personal access
token (PAT) as password.

Each failure raises a RemoteError naming the step that failed:
  build_request   the operations could not be serialized
  send            transport error, timeout, or a non-success status
                  (WorkItemHTTPError)
  decode          the response body was not JSON, or had no usable "id"
                  (ResponseShapeError)

There is no retry and no deduplication: every successful call creates one new
work item.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .errors import RemoteError, ResponseShapeError, WorkItemHTTPError
from .models import RemoteSettings

logger = logging.getLogger(__name__)

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"
SUCCESS_STATUSES = (200, 201)


def _parse_work_item_id(body: Any) -> int:
    """Return the integer "id" of a work item response body."""
    value = body.get("id") if isinstance(body, dict) else None
    if isinstance(value, bool) or value is None:
        raise ResponseShapeError(f"response has no work item id: {body!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ResponseShapeError(f"work item id has unexpected type: {value!r}")


def _error_message(body: Any) -> Optional[str]:
    message = body.get("message") if isinstance(body, dict) else None
    if isinstance(message, str) and message:
        return message
    return None


class DevOpsClient:
    """Client for the Azure DevOps work item tracking API.

    Attributes:
        settings: Organization, project, PAT, service URL and API version.
        timeout: Seconds before a request is abandoned.
        debug: If True, print verbose request details.
    """

    def __init__(self, settings: RemoteSettings, timeout: float = 30, debug: bool = False):
        self.settings = settings
        self.timeout = timeout
        self.debug = debug
        self._session = requests.Session()
        self._session.auth = ("", settings.pat)

    def work_items_url(self, kind: str) -> str:
        """Return the create URL for a work item type, e.g. "User Story"."""
        s = self.settings
        return (
            f"{s.service_url.rstrip('/')}/{s.organization}/{s.project}"
            f"/_apis/wit/workitems/${quote(kind)}"
        )

    def create_item(self, kind: str, operations: List[Dict[str, Any]]) -> int:
        """Create one work item and return the id Azure DevOps assigned to it.

        Args:
            kind: Work item type ("User Story" or "Task").
            operations: JSON Patch operations built by the field mapper.

        Returns:
            The new work item id.

        Raises:
            ConfigurationError: If organization, project or PAT is empty.
                Raised before any network attempt.
            WorkItemHTTPError: If the status is not 200 or 201.
            ResponseShapeError: If the success body has no integer "id".
            RemoteError: For serialization, transport or decode failures.
        """
        self.settings.validate()

        try:
            payload = json.dumps(operations)
        except (TypeError, ValueError) as e:
            raise RemoteError(RemoteError.BUILD_REQUEST, f"failed to marshal payload: {e}") from e

        url = self.work_items_url(kind)
        logger.debug("Azure DevOps API URL: %s", url)
        if self.debug:
            print(f"  POST {url} ({len(operations)} operations)")

        try:
            response = self._session.post(
                url,
                params={"api-version": self.settings.api_version},
                data=payload,
                headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteError(RemoteError.SEND, f"failed to send request: {e}") from e

        if response.status_code not in SUCCESS_STATUSES:
            self._raise_for_error_response(response)

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteError(RemoteError.DECODE, f"failed to parse response: {e}") from e

        return _parse_work_item_id(body)

    def _raise_for_error_response(self, response: requests.Response):
        """Raise WorkItemHTTPError, chaining any error-body decode failure."""
        try:
            body = response.json()
        except ValueError as decode_error:
            raise WorkItemHTTPError(response.status_code, response.reason or "") from decode_error

        raise WorkItemHTTPError(response.status_code, response.reason or "", _error_message(body))

    def close(self):
        self._session.close()
