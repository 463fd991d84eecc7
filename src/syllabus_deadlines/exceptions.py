from __future__ import annotations

from typing import Optional


class DeadlineExtractionError(Exception):
    """Base class for every failure of a single extraction run."""


class CredentialError(DeadlineExtractionError):
    """Raised when the API credential is missing or blank."""


class EmptySyllabusError(DeadlineExtractionError):
    """Raised when there is no syllabus text to extract from."""


class TransportError(DeadlineExtractionError):
    """Raised when the model API call cannot complete or reports a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedResponseError(DeadlineExtractionError):
    """Raised when the model output does not contain a JSON array.

    The offending text is kept on ``raw_text`` for logs and tests; it is never
    meant to be shown to the end user.
    """

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text
