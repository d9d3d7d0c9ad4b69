import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from coursehub_web.utils.view_tasks import ViewTaskGroup, cancel_request_tasks, view_tasks


def test_only_the_newest_ticket_is_delivered():
    group = ViewTaskGroup(max_workers=1)
    applied = []

    first = group.issue('courses')
    second = group.issue('courses')

    assert not group.deliver(first, ['stale'], applied.append)
    assert group.deliver(second, ['fresh'], applied.append)
    assert applied == [['fresh']]
    group.cancel()


def test_keys_are_independent():
    with ViewTaskGroup(max_workers=1) as group:
        courses = group.issue('courses')
        quizzes = group.issue('quizzes')
        assert group.is_current(courses)
        assert group.is_current(quizzes)


def test_nothing_is_delivered_after_cancel():
    group = ViewTaskGroup(max_workers=1)
    ticket = group.issue('courses')
    applied = []

    group.cancel()

    assert group.cancelled
    assert not group.deliver(ticket, ['late'], applied.append)
    assert applied == []


def test_submit_and_deliver():
    applied = []
    with ViewTaskGroup(max_workers=2) as group:
        pending = group.submit('sum', sum, [1, 2, 3])
        assert pending.deliver_to(applied.append, timeout=5)
    assert applied == [6]


def test_superseded_fetch_is_dropped():
    release = threading.Event()
    applied = []

    def slow():
        release.wait(5)
        return 'slow'

    with ViewTaskGroup(max_workers=2) as group:
        old = group.submit('page', slow)
        new = group.submit('page', lambda: 'fast')
        assert new.deliver_to(applied.append, timeout=5)
        release.set()
        assert not old.deliver_to(applied.append, timeout=5)

    assert applied == ['fast']


def test_fetch_errors_propagate():
    def boom():
        raise RuntimeError('down')

    with ViewTaskGroup(max_workers=1) as group:
        pending = group.submit('x', boom)
        with pytest.raises(RuntimeError):
            pending.deliver_to(lambda value: None, timeout=5)


def test_leaving_the_block_cancels_queued_work():
    executor = ThreadPoolExecutor(max_workers=1)
    gate = threading.Event()
    try:
        with ViewTaskGroup(executor=executor) as group:
            group.submit('busy', gate.wait, 5)
            queued = group.submit('queued', lambda: 'never')
        assert queued.future.cancelled()
    finally:
        gate.set()
        executor.shutdown(wait=True)


def test_request_groups_cancelled_on_teardown(app):
    with app.test_request_context('/'):
        group = view_tasks(max_workers=1)
        cancel_request_tasks()
        assert group.cancelled
