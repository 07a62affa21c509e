"""Application constants."""

JOB_ID_METADATA_KEY = "jobId"
ATTEMPT_NUMBER_METADATA_KEY = "attemptNumber"
TRACE_MESSAGE_METADATA_KEY = "from_trace_message"
CONNECTOR_COMMAND_METADATA_KEY = "connector_command"

MESSAGES_FILENAME = "messages.yml"
DEFAULT_CONFIG_DIR = "./config"

EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "job_id",
    "attempt",
    "event",
    "status",
    "failure_origin",
    "failure_type",
    "failure_count",
    "error_code",
    "message",
)
