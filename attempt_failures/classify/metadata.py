"""Job, attempt and connector command metadata for failure reasons."""

from __future__ import annotations

from dataclasses import replace

from attempt_failures.common.models import ConnectorCommand, Metadata


def job_and_attempt_metadata(job_id: int | None, attempt_number: int | None) -> Metadata:
    return Metadata(job_id=job_id, attempt_number=attempt_number)


def trace_message_metadata(job_id: int | None, attempt_number: int | None) -> Metadata:
    return Metadata(job_id=job_id, attempt_number=attempt_number, from_trace_message=True)


def with_connector_command(metadata: Metadata, command: ConnectorCommand) -> Metadata:
    return replace(metadata, connector_command=command)
