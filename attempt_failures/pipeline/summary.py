"""Attempt failure summaries."""

from __future__ import annotations

from typing import Iterable, MutableSequence

from attempt_failures.classify.metadata import job_and_attempt_metadata
from attempt_failures.common.config_loader import DEFAULT_MESSAGES, MessageCatalog
from attempt_failures.common.models import AttemptFailureSummary, FailureReason, FailureType
from attempt_failures.common.time_utils import current_time_millis
from attempt_failures.pipeline.ordering import ordered_failures


def failure_summary(failures: Iterable[FailureReason], partial_success: bool) -> AttemptFailureSummary:
    return AttemptFailureSummary(
        failures=tuple(ordered_failures(failures)),
        partial_success=partial_success,
    )


def cancellation_failure(
    job_id: int | None,
    attempt_number: int | None,
    *,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> FailureReason:
    return FailureReason(
        failure_type=FailureType.MANUAL_CANCELLATION,
        internal_message=messages.cancellation["internal_message"],
        external_message=messages.cancellation["external_message"],
        timestamp=current_time_millis(),
        metadata=job_and_attempt_metadata(job_id, attempt_number),
    )


def failure_summary_for_cancellation(
    job_id: int | None,
    attempt_number: int | None,
    failures: MutableSequence[FailureReason],
    partial_success: bool,
    *,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> AttemptFailureSummary:
    """Summarize a cancelled attempt.

    Appends a manual cancellation failure to `failures` in place before
    summarizing, so the caller's collection also records the cancellation.
    """
    failures.append(cancellation_failure(job_id, attempt_number, messages=messages))
    return failure_summary(failures, partial_success)
