from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable

from .types import DispatchError, ExecutionOutcome, TaskHandle

logger = logging.getLogger(__name__)

Operation = Callable[[int], ExecutionOutcome]


class Dispatcher:
    def __init__(self, operation: Operation, *, max_workers: int | None = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self.operation = operation
        self.max_workers = max_workers
        self._pools: list[ThreadPoolExecutor] = []

    def dispatch(self, ids: Iterable[int]) -> list[TaskHandle]:
        batch = list(ids)
        if not batch:
            return []

        workers = len(batch)
        if self.max_workers is not None:
            workers = min(workers, self.max_workers)

        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="taskfan")
        self._pools.append(pool)
        logger.debug("Dispatching %d tasks on %d workers", len(batch), workers)

        handles: list[TaskHandle] = []
        for task_id in batch:
            try:
                handles.append(pool.submit(self._run_one, task_id))
            except RuntimeError as exc:
                raise DispatchError(
                    f"Cannot start execution for task {task_id}: {exc}"
                ) from exc

        return handles

    def _run_one(self, task_id: int) -> tuple[int, ExecutionOutcome]:
        return task_id, self.operation(task_id)

    def close(self) -> None:
        for pool in self._pools:
            pool.shutdown(wait=True)
        self._pools.clear()

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
