"""Classification of errors raised inside the orchestration runtime."""

from __future__ import annotations

from attempt_failures.classify.chain import format_stacktrace
from attempt_failures.classify.metadata import job_and_attempt_metadata
from attempt_failures.common.models import FailureReason
from attempt_failures.common.time_utils import current_time_millis


def from_error(err: BaseException, job_id: int | None, attempt_number: int | None) -> FailureReason:
    """Build a failure reason with no origin from a raised error.

    The reason is stamped with the current time, not the time `err` was raised.
    """
    return FailureReason(
        internal_message=str(err),
        stacktrace=format_stacktrace(err),
        timestamp=current_time_millis(),
        metadata=job_and_attempt_metadata(job_id, attempt_number),
    )
