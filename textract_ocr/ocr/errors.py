"""Error types raised by the Textract OCR utility.

A failed Textract call and a failed write of the response artifact are
reported as different exceptions so that callers can tell "extraction
failed" apart from "extraction succeeded but the output was lost".
"""

from pathlib import Path


class OcrError(Exception):
    """Base class for all errors raised by this package."""


class RemoteServiceError(OcrError):
    """The Textract call failed.

    Covers authorization failures, missing or unreadable objects,
    unsupported documents, throttling and network errors alike.

    Args:
        message: Human-readable message, usually the service's own.
        error_code: Service error code when the service returned one.
        request_id: Request id of the failed call, if known.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.request_id = request_id

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.insert(0, f"[{self.error_code}]")
        if self.request_id:
            parts.append(f"(request id: {self.request_id})")
        return " ".join(parts)


class PersistenceError(OcrError):
    """The response artifact could not be written.

    Args:
        message: Description of the underlying failure.
        path: Destination that could not be written.
    """

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return f"Could not write {self.path}: {self.message}"


class ResponseFormatError(OcrError):
    """A Textract response does not have the expected shape.

    Raised when a response (fresh from the service or loaded from a
    saved file) cannot be turned into an ``OcrResult``. The call itself
    may have succeeded, so the raw response is kept for saving.

    Args:
        message: Description of what is wrong with the response.
        response: The raw response, when one was received.
    """

    def __init__(self, message: str, response: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response
