"""Domain errors and failure typing."""


class FailureSummaryError(Exception):
    """Base class for errors raised to callers of this package."""

    error_code = "FAILURE_SUMMARY_ERROR"


class ConfigError(FailureSummaryError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class InputError(FailureSummaryError):
    """Raised when an attempt document cannot be read."""

    error_code = "INPUT_ERROR"


class SizeLimitError(Exception):
    """Raised when a workflow payload exceeds the orchestrator's size limit."""

    error_code = "SIZE_LIMIT_EXCEEDED"


class RemoteActivityError(Exception):
    """An error reported by a worker and rebuilt locally.

    Carries the remote error type name and the stack trace text captured where
    it was raised, since no local traceback exists for it.
    """

    error_code = "REMOTE_ACTIVITY_ERROR"

    def __init__(self, message: str = "", *, error_type: str | None = None, stacktrace: str | None = None) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.stacktrace = stacktrace


class RemoteSizeLimitError(RemoteActivityError, SizeLimitError):
    """Remote error whose type was reported as a size limit failure."""

    error_code = SizeLimitError.error_code
