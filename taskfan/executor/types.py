from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class Failure:
    message: str

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("A failure must carry a diagnostic message")


ExecutionOutcome = Success | Failure

# One running execution: resolves to the task id paired with its outcome.
TaskHandle = Future[tuple[int, ExecutionOutcome]]


class TaskStatus(Enum):
    COMPLETED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class OutcomeRecord:
    task_id: int
    status: TaskStatus
    error_info: str = ""

    def __post_init__(self) -> None:
        if self.status is TaskStatus.COMPLETED and self.error_info:
            raise ValueError(f"Task {self.task_id}: completed task with error info")
        if self.status is TaskStatus.FAILED and not self.error_info:
            raise ValueError(f"Task {self.task_id}: failed task without error info")

    @classmethod
    def from_outcome(cls, task_id: int, outcome: ExecutionOutcome) -> OutcomeRecord:
        match outcome:
            case Success():
                return cls(task_id, TaskStatus.COMPLETED, "")
            case Failure(message=message):
                return cls(task_id, TaskStatus.FAILED, message)
            case _:
                raise TypeError(f"Unexpected outcome for task {task_id}: {outcome!r}")


class ExecutionError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class DispatchError(ExecutionError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class JoinError(ExecutionError):
    def __init__(self, cause: BaseException):
        super().__init__(f"Task execution error: {cause}")
        self.cause = cause
