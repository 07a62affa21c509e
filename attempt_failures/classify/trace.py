"""Classification of error trace messages emitted by connectors."""

from __future__ import annotations

import logging

from attempt_failures.classify.metadata import trace_message_metadata
from attempt_failures.common.models import FailureReason, FailureType, TraceMessage

logger = logging.getLogger(__name__)


def resolve_failure_type(raw: str | None) -> FailureType:
    # Missing and unrecognized values both fall back to a system error.
    if raw is None:
        return FailureType.SYSTEM_ERROR
    try:
        return FailureType(raw)
    except ValueError:
        logger.debug("unrecognized trace failure type %r, using %s", raw, FailureType.SYSTEM_ERROR.value)
        return FailureType.SYSTEM_ERROR


def from_trace(msg: TraceMessage, job_id: int | None, attempt_number: int | None) -> FailureReason:
    return FailureReason(
        internal_message=msg.error.internal_message,
        external_message=msg.error.message,
        stacktrace=msg.error.stack_trace,
        timestamp=int(msg.emitted_at),
        failure_type=resolve_failure_type(msg.error.failure_type),
        metadata=trace_message_metadata(job_id, attempt_number),
    )
