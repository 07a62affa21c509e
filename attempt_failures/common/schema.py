"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from attempt_failures.common.errors import ConfigError

EXTERNAL_MESSAGE_KEYS = {
    "source",
    "source_heartbeat",
    "destination",
    "check",
    "replication",
    "persistence",
    "normalization",
    "dbt",
    "unknown",
    "platform",
    "platform_size_limit",
}
CANCELLATION_KEYS = {"internal_message", "external_message"}
WORKFLOW_NAME_KEYS = {"sync"}
ACTIVITY_NAME_KEYS = {"replicate", "persist", "normalize", "dbt_run"}


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_string_values(obj: dict, ctx: str) -> None:
    for key, value in obj.items():
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{ctx}.{key} must be a non-empty string")


def validate_messages_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "messages config")
    sections = {
        "external_messages": EXTERNAL_MESSAGE_KEYS,
        "cancellation": CANCELLATION_KEYS,
        "workflow_names": WORKFLOW_NAME_KEYS,
        "activity_names": ACTIVITY_NAME_KEYS,
    }
    _assert_required_keys(cfg, set(sections), "messages config")
    _assert_no_unknown_keys(cfg, set(sections), "messages config", allow_unknown)

    for section, keys in sections.items():
        _assert_mapping(cfg[section], section)
        _assert_required_keys(cfg[section], keys, section)
        _assert_no_unknown_keys(cfg[section], keys, section, allow_unknown)
        _assert_string_values(cfg[section], section)

    if "{origin}" not in cfg["external_messages"]["check"]:
        raise ConfigError("external_messages.check must contain an {origin} placeholder")

    return cfg
