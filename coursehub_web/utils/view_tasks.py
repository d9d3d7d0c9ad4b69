"""Fetches owned by a single view instance.

A :class:`ViewTaskGroup` hands out a ticket for every fetch. Each ticket
carries a sequence number that grows per key, and a result is only delivered
when its ticket is still the newest one for that key and the group has not
been cancelled. Leaving the ``with`` block (or the request teardown) cancels
whatever is still pending.
"""
import itertools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional

from flask import copy_current_request_context, g, has_request_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTicket:
    key: Hashable
    sequence: int


class ViewTaskGroup:
    def __init__(self, max_workers: int = 4, executor: Optional[ThreadPoolExecutor] = None):
        self._sequence = itertools.count(1)
        self._latest: Dict[Hashable, int] = {}
        self._lock = threading.Lock()
        self._cancelled = False
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers)
        self._futures: List[Future] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()
        return False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def issue(self, key: Hashable) -> FetchTicket:
        """Start a new generation for ``key``; older tickets for it become stale."""
        with self._lock:
            ticket = FetchTicket(key, next(self._sequence))
            self._latest[key] = ticket.sequence
        return ticket

    def is_current(self, ticket: FetchTicket) -> bool:
        with self._lock:
            return not self._cancelled and self._latest.get(ticket.key) == ticket.sequence

    def deliver(self, ticket: FetchTicket, value: Any, apply: Callable[[Any], None]) -> bool:
        """Apply ``value`` unless the ticket went stale or the group was cancelled."""
        if not self.is_current(ticket):
            logger.debug("Dropping stale result for %r (#%s)", ticket.key, ticket.sequence)
            return False
        apply(value)
        return True

    def submit(self, key: Hashable, fn: Callable, *args, **kwargs) -> 'PendingFetch':
        """Run ``fn`` in the background under a fresh ticket for ``key``."""
        ticket = self.issue(key)
        if has_request_context():
            fn = copy_current_request_context(fn)
        future = self._executor.submit(fn, *args, **kwargs)
        with self._lock:
            self._futures.append(future)
        return PendingFetch(self, ticket, future)

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            futures, self._futures = self._futures, []
        for future in futures:
            future.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False)


class PendingFetch:
    """A submitted fetch and the ticket it was issued under."""

    def __init__(self, group: ViewTaskGroup, ticket: FetchTicket, future: Future):
        self.group = group
        self.ticket = ticket
        self.future = future

    def deliver_to(self, apply: Callable[[Any], None], timeout: Optional[float] = None) -> bool:
        """Wait for the result and apply it if still current. Exceptions from the fetch propagate."""
        value = self.future.result(timeout=timeout)
        return self.group.deliver(self.ticket, value, apply)


def view_tasks(max_workers: int = 4) -> ViewTaskGroup:
    """Task group tied to the current request; cancelled on teardown."""
    group = ViewTaskGroup(max_workers=max_workers)
    g.setdefault('view_task_groups', []).append(group)
    return group


def cancel_request_tasks(_exc=None) -> None:
    for group in g.pop('view_task_groups', []):
        group.cancel()
