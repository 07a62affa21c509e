import pytest

from attempt_failures.common.models import (
    AttemptFailureSummary,
    ConnectorCommand,
    FailureOrigin,
    FailureReason,
    FailureType,
    Metadata,
    TraceMessage,
)


def test_metadata_to_dict_uses_wire_keys():
    metadata = Metadata(job_id=7, attempt_number=2, connector_command=ConnectorCommand.READ, from_trace_message=True)
    assert metadata.to_dict() == {
        "jobId": 7,
        "attemptNumber": 2,
        "connector_command": "read",
        "from_trace_message": True,
    }


def test_metadata_keeps_unknown_keys():
    payload = {"jobId": 7, "attemptNumber": 2, "workspace": "ws-1", "streams": 4}
    metadata = Metadata.from_dict(payload)
    assert metadata.job_id == 7
    assert metadata.extra == {"workspace": "ws-1", "streams": 4}
    assert metadata.to_dict() == payload


def test_failure_reason_dict_omits_absent_fields():
    reason = FailureReason(timestamp=5, metadata=Metadata(job_id=1, attempt_number=0))
    assert reason.to_dict() == {"timestamp": 5, "metadata": {"jobId": 1, "attemptNumber": 0}}


def test_failure_reason_from_dict():
    reason = FailureReason.from_dict(
        {
            "timestamp": 5,
            "failureOrigin": "destination",
            "failureType": "config_error",
            "externalMessage": "bad config",
            "retryable": False,
            "metadata": {"jobId": 1, "connector_command": "write"},
        }
    )
    assert reason.failure_origin == FailureOrigin.DESTINATION
    assert reason.failure_type == FailureType.CONFIG_ERROR
    assert reason.retryable is False
    assert reason.metadata.connector_command == ConnectorCommand.WRITE


def test_failure_reason_from_dict_rejects_unknown_origin():
    with pytest.raises(ValueError):
        FailureReason.from_dict({"timestamp": 1, "failureOrigin": "mainframe"})


def test_failure_reason_is_immutable():
    reason = FailureReason(timestamp=5, metadata=Metadata())
    with pytest.raises(AttributeError):
        reason.timestamp = 6


def test_summary_to_dict():
    reason = FailureReason(timestamp=5, metadata=Metadata(), failure_type=FailureType.SYSTEM_ERROR)
    summary = AttemptFailureSummary(failures=(reason,), partial_success=True)
    assert summary.to_dict() == {
        "failures": [{"timestamp": 5, "metadata": {}, "failureType": "system_error"}],
        "partialSuccess": True,
    }


def test_trace_message_from_protocol_dict():
    msg = TraceMessage.from_dict(
        {
            "type": "ERROR",
            "emitted_at": 1700000000000.0,
            "error": {
                "message": "Invalid API key",
                "internal_message": "401",
                "stack_trace": "...",
                "failure_type": "config_error",
            },
        }
    )
    assert msg.emitted_at == 1700000000000.0
    assert msg.error.failure_type == "config_error"
    assert msg.error.internal_message == "401"


def test_trace_message_from_camel_case_dict():
    msg = TraceMessage.from_dict({"emittedAt": 10, "error": {"message": "m", "failureType": None}})
    assert msg.emitted_at == 10
    assert msg.error.failure_type is None
    assert msg.error.stack_trace is None


def test_failure_reason_from_dict_unknown_type_is_system_error():
    reason = FailureReason.from_dict({"timestamp": 1, "failureType": "transient_db_error"})
    assert reason.failure_type == FailureType.SYSTEM_ERROR
    assert FailureReason.from_dict({"timestamp": 1}).failure_type is None


@pytest.mark.parametrize("emitted_at", [None, "soon", True, float("nan")])
def test_trace_message_rejects_non_numeric_emitted_at(emitted_at):
    with pytest.raises(ValueError):
        TraceMessage.from_dict({"emitted_at": emitted_at, "error": {"message": "m"}})
