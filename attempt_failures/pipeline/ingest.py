"""Read attempt documents and classify the failures they report."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Mapping

from attempt_failures.common.config_loader import DEFAULT_MESSAGES, MessageCatalog
from attempt_failures.common.errors import InputError, RemoteActivityError, RemoteSizeLimitError
from attempt_failures.common.fs import read_json
from attempt_failures.common.models import AttemptFailureSummary, FailureOrigin, FailureReason, TraceMessage
from attempt_failures.compose import origins
from attempt_failures.compose.router import route_failure
from attempt_failures.pipeline.summary import failure_summary, failure_summary_for_cancellation

SIZE_LIMIT_ERROR_TYPES = {"SizeLimitError", "SizeLimitException"}

ERROR_COMPOSERS: dict[str, Callable[..., FailureReason]] = {
    "source": origins.source_failure,
    "source_heartbeat": origins.source_heartbeat_failure,
    "destination": origins.destination_failure,
    "replication": origins.replication_failure,
    "persistence": origins.persistence_failure,
    "normalization": origins.normalization_failure,
    "dbt": origins.dbt_failure,
    "unknown": origins.unknown_origin_failure,
    "platform": origins.platform_failure,
}
TRACE_COMPOSERS: dict[str, Callable[..., FailureReason]] = {
    "source": origins.source_trace_failure,
    "destination": origins.destination_trace_failure,
    "normalization": origins.normalization_trace_failure,
}


@dataclass(frozen=True)
class AttemptDocument:
    job_id: int | None
    attempt_number: int | None
    partial_success: bool
    cancelled: bool
    failures: list[dict]


def build_error(payload: Mapping[str, Any]) -> RemoteActivityError:
    """Rebuild a reported error and its causes as a linked exception chain."""
    if not isinstance(payload, Mapping):
        raise InputError("error payloads must be objects")
    links = []
    current: Mapping[str, Any] | None = payload
    while current is not None:
        if not isinstance(current, Mapping):
            raise InputError("error payloads must be objects")
        links.append(current)
        current = current.get("cause")

    error: RemoteActivityError | None = None
    for link in reversed(links):
        error_type = link.get("type")
        cls = RemoteSizeLimitError if error_type in SIZE_LIMIT_ERROR_TYPES else RemoteActivityError
        outer = cls(link.get("message") or "", error_type=error_type, stacktrace=link.get("stacktrace"))
        outer.__cause__ = error
        error = outer
    return error


def _require(entry: Mapping[str, Any], key: str, idx: int):
    if key not in entry:
        raise InputError(f"failures[{idx}] is missing '{key}'")
    return entry[key]


def _classify_error_entry(entry: Mapping[str, Any], idx: int, job_id, attempt_number, messages) -> FailureReason:
    origin = _require(entry, "origin", idx)
    err = build_error(_require(entry, "error", idx))
    if origin == "check":
        try:
            check_origin = FailureOrigin(entry.get("check_origin", FailureOrigin.SOURCE.value))
        except ValueError as exc:
            raise InputError(f"failures[{idx}] has an unknown check_origin") from exc
        return origins.check_failure(err, job_id, attempt_number, check_origin, messages=messages)
    composer = ERROR_COMPOSERS.get(origin)
    if composer is None:
        raise InputError(f"failures[{idx}] has an unknown error origin: {origin}")
    return composer(err, job_id, attempt_number, messages=messages)


def _classify_trace_entry(entry: Mapping[str, Any], idx: int, job_id, attempt_number) -> FailureReason:
    origin = _require(entry, "origin", idx)
    composer = TRACE_COMPOSERS.get(origin)
    if composer is None:
        raise InputError(f"failures[{idx}] has an unknown trace origin: {origin}")
    try:
        msg = TraceMessage.from_dict(_require(entry, "trace", idx))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InputError(f"failures[{idx}] has a malformed trace message") from exc
    return composer(msg, job_id, attempt_number)


def _classify_reason_entry(entry: Mapping[str, Any], idx: int) -> FailureReason:
    try:
        return FailureReason.from_dict(_require(entry, "reason", idx))
    except (KeyError, TypeError, ValueError) as exc:
        raise InputError(f"failures[{idx}] has a malformed failure reason") from exc


def classify_entries(
    entries: list[dict],
    job_id: int | None,
    attempt_number: int | None,
    *,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> list[FailureReason]:
    handlers = {
        "error": partial(_classify_error_entry, job_id=job_id, attempt_number=attempt_number, messages=messages),
        "trace": partial(_classify_trace_entry, job_id=job_id, attempt_number=attempt_number),
        "reason": _classify_reason_entry,
    }
    reasons: list[FailureReason] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise InputError(f"failures[{idx}] must be an object")
        kind = entry.get("kind")
        if kind == "activity":
            err = build_error(_require(entry, "error", idx))
            reasons.append(
                route_failure(entry.get("workflow"), entry.get("activity"), err, job_id, attempt_number, messages=messages)
            )
            continue
        handler = handlers.get(kind)
        if handler is None:
            raise InputError(f"failures[{idx}] has an unknown kind: {kind}")
        reasons.append(handler(entry, idx))
    return reasons


def parse_attempt_document(payload) -> AttemptDocument:
    if not isinstance(payload, Mapping):
        raise InputError("attempt document must be an object")
    failures = payload.get("failures", [])
    if not isinstance(failures, list):
        raise InputError("attempt document 'failures' must be a list")
    return AttemptDocument(
        job_id=payload.get("job_id"),
        attempt_number=payload.get("attempt_number"),
        partial_success=bool(payload.get("partial_success", False)),
        cancelled=bool(payload.get("cancelled", False)),
        failures=failures,
    )


def load_attempt_document(path: Path) -> AttemptDocument:
    if not path.exists():
        raise InputError(f"Missing attempt document: {path}")
    try:
        payload = read_json(path)
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in attempt document: {path}") from exc
    return parse_attempt_document(payload)


def summarize_document(doc: AttemptDocument, *, messages: MessageCatalog = DEFAULT_MESSAGES) -> AttemptFailureSummary:
    reasons = classify_entries(doc.failures, doc.job_id, doc.attempt_number, messages=messages)
    if doc.cancelled:
        return failure_summary_for_cancellation(
            doc.job_id, doc.attempt_number, reasons, doc.partial_success, messages=messages
        )
    return failure_summary(reasons, doc.partial_success)
