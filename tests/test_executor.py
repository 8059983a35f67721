# tests/test_executor.py
from __future__ import annotations

import threading
import time
from concurrent.futures import Future

import pytest

from taskfan.executor import dispatcher as dispatcher_module
from taskfan.executor.aggregator import collect
from taskfan.executor.dispatcher import Dispatcher
from taskfan.executor.executor import Executor
from taskfan.executor.types import (
    DispatchError,
    ExecutionOutcome,
    Failure,
    JoinError,
    OutcomeRecord,
    Success,
    TaskStatus,
)


def _ok(task_id: int) -> ExecutionOutcome:
    return Success()


def _done(task_id: int, outcome: ExecutionOutcome) -> Future:
    fut: Future = Future()
    fut.set_result((task_id, outcome))
    return fut


# -------------------------
# Data model
# -------------------------


def test_outcome_record_from_success() -> None:
    record = OutcomeRecord.from_outcome(4, Success())

    assert record == OutcomeRecord(4, TaskStatus.COMPLETED, "")


def test_outcome_record_from_failure_keeps_message() -> None:
    record = OutcomeRecord.from_outcome(4, Failure("HTTP request failed: boom"))

    assert record.status is TaskStatus.FAILED
    assert record.error_info == "HTTP request failed: boom"


def test_failure_requires_message() -> None:
    with pytest.raises(ValueError):
        Failure("")


def test_record_status_and_error_info_are_coupled() -> None:
    with pytest.raises(ValueError):
        OutcomeRecord(1, TaskStatus.COMPLETED, "unexpected")
    with pytest.raises(ValueError):
        OutcomeRecord(1, TaskStatus.FAILED, "")


# -------------------------
# Dispatcher
# -------------------------


def test_dispatch_empty_set_yields_no_handles() -> None:
    calls: list[int] = []

    with Dispatcher(lambda tid: calls.append(tid) or Success()) as dispatcher:
        handles = dispatcher.dispatch(set())

    assert handles == []
    assert calls == []


def test_dispatch_pairs_outcome_with_task_id() -> None:
    with Dispatcher(_ok) as dispatcher:
        handles = dispatcher.dispatch({10, 20, 30})
        results = {fut.result() for fut in handles}

    assert results == {(10, Success()), (20, Success()), (30, Success())}


def test_all_tasks_run_at_the_same_time() -> None:
    ids = set(range(8))
    # Only passes if every execution is in flight simultaneously.
    barrier = threading.Barrier(len(ids), timeout=5)

    def op(task_id: int) -> ExecutionOutcome:
        barrier.wait()
        return Success()

    records = Executor(op).run(ids)

    assert {r.task_id for r in records} == ids
    assert all(r.status is TaskStatus.COMPLETED for r in records)


def test_max_workers_caps_simultaneous_tasks() -> None:
    lock = threading.Lock()
    active = 0
    peak = 0

    def op(task_id: int) -> ExecutionOutcome:
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.05)
        with lock:
            active -= 1
        return Success()

    records = Executor(op, max_workers=2).run(set(range(6)))

    assert len(records) == 6
    assert peak <= 2


def test_invalid_max_workers_rejected() -> None:
    with pytest.raises(ValueError):
        Dispatcher(_ok, max_workers=0)


def test_launch_failure_is_dispatch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(self, fn, *args, **kwargs):
        raise RuntimeError("can't start new thread")

    monkeypatch.setattr(dispatcher_module.ThreadPoolExecutor, "submit", refuse)

    with Dispatcher(_ok) as dispatcher:
        with pytest.raises(DispatchError, match="can't start new thread"):
            dispatcher.dispatch({1, 2})


# -------------------------
# Aggregator
# -------------------------


def test_collect_follows_handle_order() -> None:
    handles = [
        _done(3, Success()),
        _done(1, Failure("HTTP request returned status: 500 Internal Server Error")),
        _done(2, Success()),
    ]

    records = collect(handles)

    assert [r.task_id for r in records] == [3, 1, 2]
    assert [r.status for r in records] == [
        TaskStatus.COMPLETED,
        TaskStatus.FAILED,
        TaskStatus.COMPLETED,
    ]


def test_collect_waits_for_every_handle() -> None:
    def op(task_id: int) -> ExecutionOutcome:
        time.sleep(task_id / 100)
        return Success()

    with Dispatcher(op) as dispatcher:
        handles = dispatcher.dispatch({1, 5, 10})
        records = collect(handles)

        assert all(fut.done() for fut in handles)

    assert len(records) == 3


def test_crashed_execution_is_join_error() -> None:
    bad: Future = Future()
    bad.set_exception(RuntimeError("worker died"))

    with pytest.raises(JoinError, match="Task execution error: worker died"):
        collect([_done(1, Success()), bad])


def test_non_exception_crash_is_join_error() -> None:
    bad: Future = Future()
    bad.set_exception(SystemExit(3))

    with pytest.raises(JoinError):
        collect([bad])


def test_keyboard_interrupt_is_not_wrapped() -> None:
    bad: Future = Future()
    bad.set_exception(KeyboardInterrupt())

    with pytest.raises(KeyboardInterrupt):
        collect([bad])


# -------------------------
# Executor
# -------------------------


def test_one_failure_does_not_affect_siblings() -> None:
    def op(task_id: int) -> ExecutionOutcome:
        if task_id == 2:
            return Failure("HTTP request failed: connection reset")
        return Success()

    records = Executor(op).run({1, 2, 3})
    by_id = {r.task_id: r for r in records}

    assert sorted(by_id) == [1, 2, 3]
    assert by_id[2].status is TaskStatus.FAILED
    assert by_id[2].error_info == "HTTP request failed: connection reset"
    assert by_id[1] == OutcomeRecord(1, TaskStatus.COMPLETED, "")
    assert by_id[3] == OutcomeRecord(3, TaskStatus.COMPLETED, "")


def test_crash_aborts_run_but_every_task_still_runs() -> None:
    lock = threading.Lock()
    seen: set[int] = set()

    def op(task_id: int) -> ExecutionOutcome:
        with lock:
            seen.add(task_id)
        if task_id == 1:
            raise RuntimeError("boom")
        time.sleep(0.02)
        return Success()

    with pytest.raises(JoinError):
        Executor(op).run({1, 2, 3, 4})

    assert seen == {1, 2, 3, 4}


def test_each_task_runs_exactly_once() -> None:
    lock = threading.Lock()
    calls: list[int] = []

    def op(task_id: int) -> ExecutionOutcome:
        with lock:
            calls.append(task_id)
        return Failure("HTTP request failed: nope")

    records = Executor(op).run({1, 2, 3})

    assert sorted(calls) == [1, 2, 3]
    assert len(records) == 3
    assert all(r.error_info != "" for r in records)
