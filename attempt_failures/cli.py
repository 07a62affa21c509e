"""CLI entrypoint for attempt failure summaries."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from attempt_failures.common.config_loader import DEFAULT_MESSAGES, load_message_catalog
from attempt_failures.common.constants import (
    DEFAULT_CONFIG_DIR,
    EXIT_HARD_FAIL,
    EXIT_PARTIAL,
    EXIT_SUCCESS,
    MESSAGES_FILENAME,
)
from attempt_failures.common.errors import FailureSummaryError
from attempt_failures.common.fs import write_json
from attempt_failures.common.ids import generate_run_id
from attempt_failures.common.logging import build_logger, log_event
from attempt_failures.pipeline.ingest import load_attempt_document, summarize_document


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=["summarize"])
    parser.add_argument("--input", required=True)
    parser.add_argument("--output", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default=None)
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def _load_messages(args: argparse.Namespace):
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    if args.config_dir is None and overlay_config_dir is None:
        default_dir = Path(DEFAULT_CONFIG_DIR)
        if not (default_dir / MESSAGES_FILENAME).exists():
            return DEFAULT_MESSAGES
    config_dir = Path(args.config_dir or DEFAULT_CONFIG_DIR)
    return load_message_catalog(config_dir, overlay_config_dir=overlay_config_dir)


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    log_dir = Path(args.log_dir) if args.log_dir else None
    logger = build_logger(run_id, log_dir=log_dir, level=args.log_level)

    try:
        messages = _load_messages(args)
        doc = load_attempt_document(Path(args.input))
        summary = summarize_document(doc, messages=messages)
    except FailureSummaryError as exc:
        log_event(
            logger,
            f"could not summarize {args.input}: {exc}",
            run_id=run_id,
            event="SUMMARY_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL

    for reason in summary.failures:
        log_event(
            logger,
            reason.external_message or "failure without external message",
            run_id=run_id,
            job_id=doc.job_id,
            attempt=doc.attempt_number,
            event="FAILURE",
            status="error",
            failure_origin=reason.failure_origin.value if reason.failure_origin else None,
            failure_type=reason.failure_type.value if reason.failure_type else None,
        )

    payload = summary.to_dict()
    if args.output:
        write_json(Path(args.output), payload)
    else:
        sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n")

    log_event(
        logger,
        "summary written",
        run_id=run_id,
        job_id=doc.job_id,
        attempt=doc.attempt_number,
        event="SUMMARY_END",
        status="ok",
        failure_count=len(summary.failures),
    )
    if summary.failures:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except FailureSummaryError:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
