from __future__ import annotations

import logging
from concurrent.futures import wait
from typing import Iterable

from .types import JoinError, OutcomeRecord, TaskHandle, TaskStatus

logger = logging.getLogger(__name__)


def collect(handles: Iterable[TaskHandle]) -> list[OutcomeRecord]:
    pending = list(handles)
    # Join all before looking at any result.
    wait(pending)

    records: list[OutcomeRecord] = []
    for handle in pending:
        try:
            task_id, outcome = handle.result()
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            raise JoinError(exc) from exc

        record = OutcomeRecord.from_outcome(task_id, outcome)
        if record.status is TaskStatus.FAILED:
            logger.warning("Task %d failed: %s", task_id, record.error_info)
        records.append(record)

    return records
