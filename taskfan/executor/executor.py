from __future__ import annotations

from typing import Iterable

from .aggregator import collect
from .dispatcher import Dispatcher, Operation
from .types import OutcomeRecord


class Executor:
    def __init__(self, operation: Operation, *, max_workers: int | None = None):
        self.operation = operation
        self.max_workers = max_workers

    def run(self, ids: Iterable[int]) -> list[OutcomeRecord]:
        with Dispatcher(self.operation, max_workers=self.max_workers) as dispatcher:
            handles = dispatcher.dispatch(ids)
            return collect(handles)
