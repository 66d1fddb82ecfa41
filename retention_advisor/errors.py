from typing import Optional


class RetentionAdvisorError(Exception):
    """Base class for all errors raised by retention_advisor."""


class InvalidRequestError(RetentionAdvisorError):
    """The caller broke the request contract (bad payload, empty dataset, bad index)."""


class ConfigurationError(RetentionAdvisorError):
    """A required setting (e.g. GOOGLE_API_KEY) is missing or malformed."""


class DatasetLoadError(RetentionAdvisorError):
    """A CSV dataset could not be read."""


class GenerationError(RetentionAdvisorError):
    """
    The text-generation service failed for this request.

    Carries every model attempted so far so the caller can
    show which alternatives were tried.
    """

    def __init__(self, message: str, attempts: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.attempts = list(attempts or [])

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "attempts": [attempt.to_dict() for attempt in self.attempts],
        }
