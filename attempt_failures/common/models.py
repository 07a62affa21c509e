"""Data models shared by the classifiers, composers and aggregator."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from attempt_failures.common.constants import (
    ATTEMPT_NUMBER_METADATA_KEY,
    CONNECTOR_COMMAND_METADATA_KEY,
    JOB_ID_METADATA_KEY,
    TRACE_MESSAGE_METADATA_KEY,
)

Scalar = Union[str, int, float, bool, None]

_KNOWN_METADATA_KEYS = {
    JOB_ID_METADATA_KEY,
    ATTEMPT_NUMBER_METADATA_KEY,
    TRACE_MESSAGE_METADATA_KEY,
    CONNECTOR_COMMAND_METADATA_KEY,
}


class FailureType(str, Enum):
    SYSTEM_ERROR = "system_error"
    CONFIG_ERROR = "config_error"
    MANUAL_CANCELLATION = "manual_cancellation"
    HEARTBEAT_TIMEOUT = "heartbeat_timeout"
    # Carried over from the connector error taxonomy.
    TRANSIENT_ERROR = "transient_error"
    REFRESH_SCHEMA = "refresh_schema"
    DESTINATION_TIMEOUT = "destination_timeout"


class FailureOrigin(str, Enum):
    SOURCE = "source"
    DESTINATION = "destination"
    REPLICATION = "replication"
    PERSISTENCE = "persistence"
    NORMALIZATION = "normalization"
    DBT = "dbt"
    AIRBYTE_PLATFORM = "airbyte_platform"
    UNKNOWN = "unknown"


class ConnectorCommand(str, Enum):
    SPEC = "spec"
    CHECK = "check"
    DISCOVER = "discover"
    WRITE = "write"
    READ = "read"


def _enum_or_none(enum_cls, value):
    if value is None:
        return None
    return enum_cls(value)


def _failure_type_or_default(value) -> FailureType | None:
    # Stored reasons may predate a failure type; unknown ones are system errors.
    if value is None:
        return None
    try:
        return FailureType(value)
    except ValueError:
        return FailureType.SYSTEM_ERROR


def _epoch_millis(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"emitted_at must be a number, got {value!r}")
    return value


@dataclass(frozen=True)
class Metadata:
    job_id: int | None = None
    attempt_number: int | None = None
    connector_command: ConnectorCommand | None = None
    from_trace_message: bool | None = None
    extra: Mapping[str, Scalar] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = dict(self.extra)
        if self.job_id is not None:
            out[JOB_ID_METADATA_KEY] = self.job_id
        if self.attempt_number is not None:
            out[ATTEMPT_NUMBER_METADATA_KEY] = self.attempt_number
        if self.from_trace_message is not None:
            out[TRACE_MESSAGE_METADATA_KEY] = self.from_trace_message
        if self.connector_command is not None:
            out[CONNECTOR_COMMAND_METADATA_KEY] = self.connector_command.value
        return out

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "Metadata":
        payload = payload or {}
        return cls(
            job_id=payload.get(JOB_ID_METADATA_KEY),
            attempt_number=payload.get(ATTEMPT_NUMBER_METADATA_KEY),
            connector_command=_enum_or_none(ConnectorCommand, payload.get(CONNECTOR_COMMAND_METADATA_KEY)),
            from_trace_message=payload.get(TRACE_MESSAGE_METADATA_KEY),
            extra={key: value for key, value in payload.items() if key not in _KNOWN_METADATA_KEYS},
        )


@dataclass(frozen=True)
class FailureReason:
    """One failure instance attributed to an origin.

    `external_message` is the only field meant for display. `internal_message`
    and `stacktrace` are diagnostics and are never sanitized.
    """

    timestamp: int
    metadata: Metadata
    internal_message: str | None = None
    external_message: str | None = None
    stacktrace: str | None = None
    failure_type: FailureType | None = None
    failure_origin: FailureOrigin | None = None
    retryable: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "timestamp": self.timestamp,
            "metadata": self.metadata.to_dict(),
        }
        optional = {
            "internalMessage": self.internal_message,
            "externalMessage": self.external_message,
            "stacktrace": self.stacktrace,
            "failureType": self.failure_type.value if self.failure_type else None,
            "failureOrigin": self.failure_origin.value if self.failure_origin else None,
            "retryable": self.retryable,
        }
        out.update({key: value for key, value in optional.items() if value is not None})
        return out

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FailureReason":
        return cls(
            timestamp=int(payload["timestamp"]),
            metadata=Metadata.from_dict(payload.get("metadata")),
            internal_message=payload.get("internalMessage"),
            external_message=payload.get("externalMessage"),
            stacktrace=payload.get("stacktrace"),
            failure_type=_failure_type_or_default(payload.get("failureType")),
            failure_origin=_enum_or_none(FailureOrigin, payload.get("failureOrigin")),
            retryable=payload.get("retryable"),
        )


@dataclass(frozen=True)
class AttemptFailureSummary:
    failures: tuple[FailureReason, ...]
    partial_success: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "failures": [failure.to_dict() for failure in self.failures],
            "partialSuccess": self.partial_success,
        }


@dataclass(frozen=True)
class TraceError:
    message: str | None = None
    internal_message: str | None = None
    stack_trace: str | None = None
    failure_type: str | None = None


@dataclass(frozen=True)
class TraceMessage:
    """Error trace emitted by a connector process on its own output channel."""

    error: TraceError
    emitted_at: float

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TraceMessage":
        error = payload.get("error") or {}
        failure_type = error.get("failure_type", error.get("failureType"))
        return cls(
            error=TraceError(
                message=error.get("message"),
                internal_message=error.get("internal_message", error.get("internalMessage")),
                stack_trace=error.get("stack_trace", error.get("stackTrace")),
                failure_type=None if failure_type is None else str(failure_type),
            ),
            emitted_at=_epoch_millis(payload["emitted_at"] if "emitted_at" in payload else payload["emittedAt"]),
        )
