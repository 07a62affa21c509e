"""Tag classified failures with the connector command that was running."""

from __future__ import annotations

from dataclasses import replace

from attempt_failures.classify.metadata import with_connector_command
from attempt_failures.classify.throwable import from_error
from attempt_failures.classify.trace import from_trace
from attempt_failures.common.models import ConnectorCommand, FailureReason, TraceMessage


def classify(source: BaseException | TraceMessage, job_id: int | None, attempt_number: int | None) -> FailureReason:
    if isinstance(source, TraceMessage):
        return from_trace(source, job_id, attempt_number)
    return from_error(source, job_id, attempt_number)


def connector_command_failure(
    source: BaseException | TraceMessage,
    job_id: int | None,
    attempt_number: int | None,
    command: ConnectorCommand,
) -> FailureReason:
    reason = classify(source, job_id, attempt_number)
    return replace(reason, metadata=with_connector_command(reason.metadata, command))
