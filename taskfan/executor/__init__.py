from .aggregator import collect
from .dispatcher import Dispatcher
from .executor import Executor
from .remote import RemoteOperation
from .types import (
    DispatchError,
    ExecutionError,
    ExecutionOutcome,
    Failure,
    JoinError,
    OutcomeRecord,
    Success,
    TaskStatus,
)

__all__ = [
    "collect",
    "Dispatcher",
    "Executor",
    "RemoteOperation",
    "ExecutionOutcome",
    "Success",
    "Failure",
    "OutcomeRecord",
    "TaskStatus",
    "ExecutionError",
    "DispatchError",
    "JoinError",
]
