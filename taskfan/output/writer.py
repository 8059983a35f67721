import csv
import io
from typing import IO, Iterable

from taskfan.executor.types import OutcomeRecord, TaskStatus

from .types import OutputError

FIELDNAMES = ("task_id", "final_status", "error_info")

# Output labels are part of the file format, not derived from member names.
STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.FAILED: "Failed",
}


def write_results(records: Iterable[OutcomeRecord], stream: IO[str]) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    try:
        writer.writerow(FIELDNAMES)
        for record in records:
            writer.writerow(_to_row(record))
    except (OSError, ValueError, csv.Error) as exc:
        raise OutputError(f"Cannot write results: {exc}") from exc


def render_results(records: Iterable[OutcomeRecord]) -> str:
    buffer = io.StringIO()
    write_results(records, buffer)
    return buffer.getvalue()


def _to_row(record: OutcomeRecord) -> tuple[int, str, str]:
    try:
        label = STATUS_LABELS[record.status]
    except KeyError:
        raise OutputError(
            f"Task {record.task_id}: no output label for status {record.status}"
        ) from None

    return record.task_id, label, record.error_info
