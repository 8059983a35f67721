from __future__ import annotations

import argparse
import logging
import sys

from taskfan.config import ConfigError, RunSettings, build_settings, load_settings
from taskfan.executor import ExecutionError, Executor, RemoteOperation
from taskfan.output import OutputError, render_results
from taskfan.tasks import InputError, read_tasks, unique_task_ids

from .args import build_parser

logger = logging.getLogger(__name__)

_OVERRIDES = ("endpoint", "settle_seconds", "timeout_seconds", "max_workers")


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        _configure_logging(args)
        return cmd_run(args)

    except (ConfigError, InputError) as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except (ExecutionError, OutputError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    settings = _resolve_settings(args)
    tasks = read_tasks(args.input)
    ids = unique_task_ids(tasks)

    logger.info("Processing %d unique tasks concurrently...", len(ids))

    executor = Executor(_build_operation(settings), max_workers=settings.max_workers)
    records = executor.run(ids)

    # Render fully before touching stdout so a failure leaves it empty.
    document = render_results(records)
    try:
        sys.stdout.write(document)
        sys.stdout.flush()
    except OSError as exc:
        raise OutputError(f"Cannot write results: {exc}") from exc

    return 0


def _resolve_settings(args: argparse.Namespace) -> RunSettings:
    settings = load_settings(args.config) if args.config else RunSettings()
    overrides = {
        key: getattr(args, key)
        for key in _OVERRIDES
        if getattr(args, key) is not None
    }
    return build_settings(overrides, base=settings, source="command line")


def _build_operation(settings: RunSettings) -> RemoteOperation:
    return RemoteOperation(
        settings.endpoint,
        timeout_seconds=settings.timeout_seconds,
        settle_seconds=settings.settle_seconds,
    )


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    logging.getLogger("taskfan").setLevel(level)
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if args.verbose else logging.WARNING)
