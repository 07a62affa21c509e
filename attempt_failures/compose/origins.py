"""Per-origin failure builders.

Each builder classifies its input, tags it with the connector command where one
applies, and overlays the origin and the message shown to users. Messages come
from a `MessageCatalog`; the built-in catalog is used unless one is passed.
"""

from __future__ import annotations

from dataclasses import replace

from attempt_failures.classify.chain import chain_contains
from attempt_failures.classify.throwable import from_error
from attempt_failures.classify.trace import from_trace
from attempt_failures.common.config_loader import DEFAULT_MESSAGES, MessageCatalog
from attempt_failures.common.errors import SizeLimitError
from attempt_failures.common.models import (
    ConnectorCommand,
    FailureOrigin,
    FailureReason,
    FailureType,
    TraceMessage,
)
from attempt_failures.compose.command import connector_command_failure


def source_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        connector_command_failure(err, job_id, attempt_number, ConnectorCommand.READ),
        failure_origin=FailureOrigin.SOURCE,
        external_message=messages.external("source"),
    )


def source_trace_failure(msg: TraceMessage, job_id: int | None, attempt_number: int | None) -> FailureReason:
    return replace(
        connector_command_failure(msg, job_id, attempt_number, ConnectorCommand.READ),
        failure_origin=FailureOrigin.SOURCE,
    )


def source_heartbeat_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        connector_command_failure(err, job_id, attempt_number, ConnectorCommand.READ),
        failure_origin=FailureOrigin.SOURCE,
        failure_type=FailureType.HEARTBEAT_TIMEOUT,
        external_message=messages.external("source_heartbeat"),
    )


def destination_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        connector_command_failure(err, job_id, attempt_number, ConnectorCommand.WRITE),
        failure_origin=FailureOrigin.DESTINATION,
        external_message=messages.external("destination"),
    )


def destination_trace_failure(msg: TraceMessage, job_id: int | None, attempt_number: int | None) -> FailureReason:
    return replace(
        connector_command_failure(msg, job_id, attempt_number, ConnectorCommand.WRITE),
        failure_origin=FailureOrigin.DESTINATION,
    )


def check_failure(
    err: BaseException,
    job_id: int | None,
    attempt_number: int | None,
    origin: FailureOrigin,
    *,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> FailureReason:
    """A failed connection check is always a non-retryable configuration error."""
    return replace(
        connector_command_failure(err, job_id, attempt_number, ConnectorCommand.CHECK),
        failure_origin=origin,
        failure_type=FailureType.CONFIG_ERROR,
        retryable=False,
        external_message=messages.check_message(origin.value),
    )


def replication_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        from_error(err, job_id, attempt_number),
        failure_origin=FailureOrigin.REPLICATION,
        external_message=messages.external("replication"),
    )


def persistence_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        from_error(err, job_id, attempt_number),
        failure_origin=FailureOrigin.PERSISTENCE,
        external_message=messages.external("persistence"),
    )


def normalization_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        from_error(err, job_id, attempt_number),
        failure_origin=FailureOrigin.NORMALIZATION,
        external_message=messages.external("normalization"),
    )


def normalization_trace_failure(msg: TraceMessage, job_id: int | None, attempt_number: int | None) -> FailureReason:
    return replace(
        from_trace(msg, job_id, attempt_number),
        failure_origin=FailureOrigin.NORMALIZATION,
        external_message=msg.error.message,
    )


def dbt_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        from_error(err, job_id, attempt_number),
        failure_origin=FailureOrigin.DBT,
        external_message=messages.external("dbt"),
    )


def unknown_origin_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    return replace(
        from_error(err, job_id, attempt_number),
        failure_origin=FailureOrigin.UNKNOWN,
        external_message=messages.external("unknown"),
    )


def platform_failure(
    err: BaseException, job_id: int | None, attempt_number: int | None, *, messages: MessageCatalog = DEFAULT_MESSAGES
) -> FailureReason:
    if chain_contains(err, SizeLimitError):
        external_message = messages.external("platform_size_limit")
    else:
        external_message = messages.external("platform")
    return replace(
        from_error(err, job_id, attempt_number),
        failure_origin=FailureOrigin.AIRBYTE_PLATFORM,
        external_message=external_message,
    )
