from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskfan",
        description="Run one remote call per unique task id and print a CSV report.",
    )

    parser.add_argument(
        "input",
        help="Path to the tasks CSV (columns: task_id, task_type)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional settings file (.yml/.yaml, .toml, .json)",
    )

    # overrides for the settings file
    parser.add_argument("--endpoint", default=None, help="URL each task calls")
    parser.add_argument(
        "--settle-seconds",
        type=float,
        default=None,
        help="Delay after a successful call before the task completes",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout_seconds",
        type=float,
        default=None,
        help="Network timeout of a single call, in seconds (default: none)",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Cap on simultaneous tasks (default: no cap)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors to stderr",
    )

    return parser
