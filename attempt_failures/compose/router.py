"""Attribute workflow activity failures to an origin."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from attempt_failures.common.config_loader import DEFAULT_MESSAGES, MessageCatalog
from attempt_failures.common.models import FailureReason
from attempt_failures.compose.origins import (
    dbt_failure,
    normalization_failure,
    persistence_failure,
    replication_failure,
    unknown_origin_failure,
)

logger = logging.getLogger(__name__)


class WorkflowKind(str, Enum):
    SYNC = "sync"


class ActivityKind(str, Enum):
    REPLICATE = "replicate"
    PERSIST = "persist"
    NORMALIZE = "normalize"
    DBT_RUN = "dbt_run"


Composer = Callable[..., FailureReason]

ROUTES: dict[tuple[WorkflowKind, ActivityKind], Composer] = {
    (WorkflowKind.SYNC, ActivityKind.REPLICATE): replication_failure,
    (WorkflowKind.SYNC, ActivityKind.PERSIST): persistence_failure,
    (WorkflowKind.SYNC, ActivityKind.NORMALIZE): normalization_failure,
    (WorkflowKind.SYNC, ActivityKind.DBT_RUN): dbt_failure,
}


def _parse_kind(enum_cls, value, names: dict[str, str]):
    """Map a runtime workflow/activity name to its kind, or None if unknown."""
    if value is None or isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if names.get(member.value) == value:
            return member
    return None


def parse_workflow_kind(value: str | WorkflowKind | None, messages: MessageCatalog = DEFAULT_MESSAGES) -> WorkflowKind | None:
    return _parse_kind(WorkflowKind, value, dict(messages.workflow_names))


def parse_activity_kind(value: str | ActivityKind | None, messages: MessageCatalog = DEFAULT_MESSAGES) -> ActivityKind | None:
    return _parse_kind(ActivityKind, value, dict(messages.activity_names))


def route_failure(
    workflow_kind: str | WorkflowKind | None,
    activity_kind: str | ActivityKind | None,
    err: BaseException,
    job_id: int | None,
    attempt_number: int | None,
    *,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> FailureReason:
    key = (parse_workflow_kind(workflow_kind, messages), parse_activity_kind(activity_kind, messages))
    composer = ROUTES.get(key)
    if composer is None:
        logger.debug("no origin for workflow %r activity %r, using unknown", workflow_kind, activity_kind)
        composer = unknown_origin_failure
    return composer(err, job_id, attempt_number, messages=messages)
