from __future__ import annotations

import threading

from hr_workflow.core.enums import RequestKind, RequestStatus
from hr_workflow.core.exceptions import InvalidTransitionError
from hr_workflow.requests.memory_request_repository import InMemoryRequestRepository
from hr_workflow.requests.service import RequestLifecycle
from hr_workflow.requests.state_machine import RequestStateMachine


def test_state_machine_table():
    assert RequestStateMachine.can_transition(RequestStatus.PENDING, RequestStatus.APPROVED)
    assert RequestStateMachine.can_transition(RequestStatus.PENDING, RequestStatus.REJECTED)
    assert not RequestStateMachine.can_transition(RequestStatus.APPROVED, RequestStatus.REJECTED)
    assert RequestStateMachine.is_terminal(RequestStatus.REJECTED)
    assert not RequestStateMachine.is_terminal(RequestStatus.PENDING)


def test_concurrent_decisions_only_one_wins(employees, admin, manager):
    lifecycle = RequestLifecycle(InMemoryRequestRepository(), employees)
    record = lifecycle.submit(
        "EMP01",
        RequestKind.LEAVE,
        {"leave_type": "Sick Leave", "start_date": "2026-02-01", "end_date": "2026-02-01", "reason": "fever"},
    )

    barrier = threading.Barrier(8)
    wins: list[RequestStatus] = []
    losses: list[Exception] = []
    lock = threading.Lock()

    def worker(i: int) -> None:
        outcome = RequestStatus.APPROVED if i % 2 else RequestStatus.REJECTED
        principal = admin if i % 2 else manager
        barrier.wait()
        try:
            decided = lifecycle.decide(record.request_id, outcome, principal)
        except InvalidTransitionError as exc:
            with lock:
                losses.append(exc)
        else:
            with lock:
                wins.append(decided.status)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(wins) == 1
    assert len(losses) == 7
    assert lifecycle.get(record.request_id).status == wins[0]
