import csv
from pathlib import Path
from typing import Iterable

from .types import InputError, InputTask

REQUIRED_COLUMNS = ("task_id", "task_type")
MAX_TASK_ID = 2**64 - 1


def read_tasks(path: str | Path) -> list[InputTask]:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise InputError(f"Input file not found: {pure_path}")

    if not pure_path.is_file():
        raise InputError(f"Input path is not a file: {pure_path}")

    try:
        with pure_path.open(newline="", encoding="utf-8-sig") as fh:
            return _parse_rows(pure_path, csv.DictReader(fh))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise InputError(f"{pure_path}: cannot read input: {exc}") from exc


def unique_task_ids(tasks: Iterable[InputTask]) -> set[int]:
    return {task.task_id for task in tasks}


def _parse_rows(path: Path, reader: csv.DictReader) -> list[InputTask]:
    # An empty file has no header and no rows.
    if reader.fieldnames is None:
        return []

    missing = [col for col in REQUIRED_COLUMNS if col not in reader.fieldnames]
    if missing:
        raise InputError(f"{path}: missing column(s): {', '.join(missing)}")

    tasks = []
    for row in reader:
        line = reader.line_num
        if None in row:
            raise InputError(
                f"{path}:{line}: expected {len(reader.fieldnames)} fields, got more"
            )

        for col in REQUIRED_COLUMNS:
            if row.get(col) is None:
                raise InputError(f"{path}:{line}: missing value for '{col}'")

        task_id = _parse_task_id(path, line, row["task_id"])
        tasks.append(InputTask(task_id, row["task_type"]))

    return tasks


def _parse_task_id(path: Path, line: int, raw: str) -> int:
    if len(raw) < 1:
        raise InputError(f"{path}:{line}: task_id can't be empty")

    # Same grammar as an unsigned 64-bit parse: optional "+", then digits only.
    text = raw.removeprefix("+")
    if not (text.isascii() and text.isdigit()):
        raise InputError(
            f"{path}:{line}: task_id must be an unsigned integer, got {raw!r}"
        )

    task_id = int(text)
    if task_id > MAX_TASK_ID:
        raise InputError(f"{path}:{line}: task_id out of range: {text}")

    return task_id
