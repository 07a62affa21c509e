import pytest

from attempt_failures.common.config_loader import DEFAULT_MESSAGES, MessageCatalog
from attempt_failures.common.models import FailureOrigin
from attempt_failures.compose.router import (
    ActivityKind,
    WorkflowKind,
    parse_activity_kind,
    parse_workflow_kind,
    route_failure,
)


@pytest.mark.parametrize(
    "activity, origin",
    [
        ("Replicate", FailureOrigin.REPLICATION),
        ("Persist", FailureOrigin.PERSISTENCE),
        ("Normalize", FailureOrigin.NORMALIZATION),
        ("Run", FailureOrigin.DBT),
        ("Unknown", FailureOrigin.UNKNOWN),
    ],
)
def test_route_failure_by_activity(activity, origin):
    reason = route_failure("SyncWorkflow", activity, RuntimeError("x"), 1, 1)
    assert reason.failure_origin == origin


def test_route_failure_unknown_workflow_is_unknown_origin():
    reason = route_failure("ConnectionManagerWorkflow", "Replicate", RuntimeError("x"), 1, 1)
    assert reason.failure_origin == FailureOrigin.UNKNOWN
    assert reason.external_message == "An unknown failure occurred"


def test_route_failure_accepts_kinds_and_none():
    assert route_failure(WorkflowKind.SYNC, ActivityKind.PERSIST, RuntimeError(), 1, 1).failure_origin == FailureOrigin.PERSISTENCE
    assert route_failure(None, None, RuntimeError(), 1, 1).failure_origin == FailureOrigin.UNKNOWN


def test_parse_kinds_are_exact_matches():
    assert parse_workflow_kind("SyncWorkflow") == WorkflowKind.SYNC
    assert parse_workflow_kind("syncworkflow") is None
    assert parse_activity_kind("Run") == ActivityKind.DBT_RUN
    assert parse_activity_kind("run") is None


def test_route_failure_uses_configured_names():
    catalog = MessageCatalog(
        external_messages=DEFAULT_MESSAGES.external_messages,
        cancellation=DEFAULT_MESSAGES.cancellation,
        workflow_names={"sync": "SyncWorkflowV2"},
        activity_names={**DEFAULT_MESSAGES.activity_names, "replicate": "ReplicateV2"},
    )
    reason = route_failure("SyncWorkflowV2", "ReplicateV2", RuntimeError(), 1, 1, messages=catalog)
    assert reason.failure_origin == FailureOrigin.REPLICATION
    assert route_failure("SyncWorkflow", "Replicate", RuntimeError(), 1, 1, messages=catalog).failure_origin == FailureOrigin.UNKNOWN


def test_route_failure_ignores_catalog_names_without_a_kind():
    catalog = MessageCatalog(
        external_messages=DEFAULT_MESSAGES.external_messages,
        cancellation=DEFAULT_MESSAGES.cancellation,
        workflow_names={**DEFAULT_MESSAGES.workflow_names, "connection_manager": "ConnectionManagerWorkflow"},
        activity_names={**DEFAULT_MESSAGES.activity_names, "check": "CheckConnection"},
    )

    assert parse_workflow_kind("ConnectionManagerWorkflow", catalog) is None
    assert parse_activity_kind("CheckConnection", catalog) is None
    reason = route_failure("ConnectionManagerWorkflow", "Replicate", RuntimeError(), 1, 1, messages=catalog)
    assert reason.failure_origin == FailureOrigin.UNKNOWN
    reason = route_failure("SyncWorkflow", "CheckConnection", RuntimeError(), 1, 1, messages=catalog)
    assert reason.failure_origin == FailureOrigin.UNKNOWN
    assert route_failure("SyncWorkflow", "Replicate", RuntimeError(), 1, 1, messages=catalog).failure_origin == FailureOrigin.REPLICATION
