"""Exception hierarchy for table extraction.

Decode-level failures propagate to the caller; token-level anomalies are
raised only to be caught and skipped inside the pipeline.
"""


class TableWizardError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(TableWizardError):
    """Runtime settings failed validation."""


class DecodeUnavailable(TableWizardError):
    """The token source for a document (or one of its pages) cannot be read."""

    def __init__(self, message: str, page_number: int | None = None):
        super().__init__(message)
        self.page_number = page_number


class MalformedToken(TableWizardError):
    """A raw token is missing, or has unusable, positional fields."""
