"""
Errors - Exception types raised by the importer.

Two families, handled at different levels:

  ConfigurationError  Missing settings or unusable input file. Fatal: the run
                      stops before any work item is created.
  RemoteError         A single create call failed (transport, HTTP status,
                      undecodable or unexpected response). Caught per record
                      by the BatchImporter so the rest of the batch continues.
"""

from typing import Optional


class ImporterError(Exception):
    """Base class for all importer errors."""


class ConfigurationError(ImporterError):
    """Raised when required configuration or input is missing or invalid."""


class RemoteError(ImporterError):
    """A create call against Azure DevOps failed.

    Attributes:
        step: Which part of the call failed: "build_request", "send" or "decode".
    """

    BUILD_REQUEST = "build_request"
    SEND = "send"
    DECODE = "decode"

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step


class WorkItemHTTPError(RemoteError):
    """Azure DevOps answered with a status other than 200/201.

    Attributes:
        status_code: The HTTP status code.
        reason: The HTTP reason phrase.
        message: The "message" field of the error body, or the raw status
            line when the body carried none or could not be decoded.
    """

    def __init__(self, status_code: int, reason: str, message: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.status_line = f"{status_code} {reason}".strip()
        self.message = message or self.status_line
        super().__init__(
            self.SEND,
            f"failed to create work item, status: {self.status_line} with message: {self.message}",
        )


class ResponseShapeError(RemoteError):
    """A success response did not carry a usable work item id."""

    def __init__(self, message: str):
        super().__init__(self.DECODE, message)
