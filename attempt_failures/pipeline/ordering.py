"""Deterministic ordering of an attempt's failures."""

from __future__ import annotations

from typing import Iterable

from attempt_failures.common.models import FailureReason


def trace_rank(reason: FailureReason) -> int:
    # Connector-reported failures sort before platform-inferred ones.
    return 0 if reason.metadata.from_trace_message is True else 1


def ordering_key(reason: FailureReason) -> tuple[int, int]:
    return trace_rank(reason), reason.timestamp


def ordered_failures(failures: Iterable[FailureReason]) -> list[FailureReason]:
    """Trace-sourced failures first, then earliest first within each group.

    `sorted` is stable, so ties keep their input order.
    """
    return sorted(failures, key=ordering_key)
