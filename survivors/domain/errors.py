"""Submission error taxonomy.

Every error carries the HTTP status and the user-facing message the API layer
renders as ``{"error": message}``.
"""
from survivors.domain.enums import RateWindow


class SubmissionError(Exception):
    """Base for errors that terminate a request with a client-facing message."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MethodNotAllowed(SubmissionError):
    status_code = 405

    def __init__(self):
        super().__init__("Method not allowed")


class RateLimited(SubmissionError):
    status_code = 429

    _MESSAGES = {
        RateWindow.BURST: "Too many submissions. Wait 30 seconds.",
        RateWindow.DAILY: "Daily submission limit reached.",
    }

    def __init__(self, window: RateWindow):
        super().__init__(self._MESSAGES[window])
        self.window = window


class MissingBody(SubmissionError):
    def __init__(self):
        super().__init__("Missing request body")


class InvalidField(SubmissionError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class InvalidVictoryClaim(SubmissionError):
    def __init__(self):
        super().__init__("Invalid victory claim")


class ChecksumMismatch(SubmissionError):
    def __init__(self):
        super().__init__("Invalid checksum")


class StoreUnavailable(RuntimeError):
    """Wraps any failure of the backing key/sorted-set store."""
