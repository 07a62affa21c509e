"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from attempt_failures.common.constants import MESSAGES_FILENAME
from attempt_failures.common.errors import ConfigError
from attempt_failures.common.fs import read_yaml
from attempt_failures.common.schema import validate_messages_config


@dataclass(frozen=True)
class MessageCatalog:
    external_messages: Mapping[str, str]
    cancellation: Mapping[str, str]
    workflow_names: Mapping[str, str]
    activity_names: Mapping[str, str]

    def external(self, key: str) -> str:
        return self.external_messages[key]

    def check_message(self, origin: str) -> str:
        return self.external_messages["check"].format(origin=origin)

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "MessageCatalog":
        return cls(
            external_messages=dict(cfg["external_messages"]),
            cancellation=dict(cfg["cancellation"]),
            workflow_names=dict(cfg["workflow_names"]),
            activity_names=dict(cfg["activity_names"]),
        )


DEFAULT_MESSAGES = MessageCatalog(
    external_messages={
        "source": "Something went wrong within the source connector",
        "source_heartbeat": "The source is unresponsive",
        "destination": "Something went wrong within the destination connector",
        "check": (
            "Checking {origin} connection failed - please review this connection's "
            "configuration to prevent future syncs from failing"
        ),
        "replication": "Something went wrong during replication",
        "persistence": "Something went wrong during state persistence",
        "normalization": "Something went wrong during normalization",
        "dbt": "Something went wrong during dbt",
        "unknown": "An unknown failure occurred",
        "platform": "Something went wrong within the airbyte platform",
        "platform_size_limit": (
            "Size limit exceeded, please check your configuration, "
            "this is often related to a high number of streams."
        ),
    },
    cancellation={
        "internal_message": "Setting attempt to FAILED because the job was cancelled",
        "external_message": "This attempt was cancelled",
    },
    workflow_names={"sync": "SyncWorkflow"},
    activity_names={
        "replicate": "Replicate",
        "persist": "Persist",
        "normalize": "Normalize",
        "dbt_run": "Run",
    },
)


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_message_catalog(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> MessageCatalog:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / MESSAGES_FILENAME
    cfg = _load_yaml_with_overlay(config_dir / MESSAGES_FILENAME, overlay_path)
    return MessageCatalog.from_config(validate_messages_config(cfg, allow_unknown=allow_unknown))
