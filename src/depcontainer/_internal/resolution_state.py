from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from depcontainer.exceptions import InfiniteRecursionError

if TYPE_CHECKING:
    from collections.abc import Hashable

    from depcontainer.providers import PostConstruction, Registration
    from depcontainer.service_key import ServiceKey


@dataclass(frozen=True, slots=True)
class PendingPostConstruction:
    """A post-construction callback waiting for the end of the current wave."""

    service_key: ServiceKey
    registration: Registration
    callback: PostConstruction


@dataclass
class ResolutionState:
    """Per-container bookkeeping for one logical thread of resolution.

    ``stack`` holds the keys whose constructors are running, ``depth`` counts
    the constructions in flight and ``queue`` collects post-construction
    callbacks until ``depth`` drops back to zero. ``running`` is the callback
    currently executing during a drain.
    """

    stack: list[ServiceKey] = field(default_factory=list)
    depth: int = 0
    queue: deque[PendingPostConstruction] = field(default_factory=deque)
    draining: bool = False
    running: PendingPostConstruction | None = None
    _slots_in_flight: set[Hashable] = field(default_factory=set, init=False, repr=False)

    @contextmanager
    def constructing(self, service_key: ServiceKey) -> Iterator[None]:
        """Track a constructor call for ``service_key``.

        Raises:
            InfiniteRecursionError: If the same slot is already being constructed.

        """
        if service_key.slot in self._slots_in_flight:
            raise InfiniteRecursionError(service_key, list(self.stack))

        self.depth += 1
        self.stack.append(service_key)
        self._slots_in_flight.add(service_key.slot)
        try:
            yield
        finally:
            self._slots_in_flight.discard(self.stack.pop().slot)
            self.depth -= 1

    @property
    def is_outermost(self) -> bool:
        """Return true when no construction is in flight and no drain is running."""
        return self.depth == 0 and not self.draining

    def enqueue(self, pending: PendingPostConstruction) -> None:
        self.queue.append(pending)

    @contextmanager
    def draining_queue(self) -> Iterator[deque[PendingPostConstruction]]:
        """Mark the queue as being drained; anything left over is dropped on exit."""
        self.draining = True
        try:
            yield self.queue
        finally:
            self.draining = False
            self.running = None
            self.queue.clear()

    def discard_queue(self) -> int:
        dropped = len(self.queue)
        self.queue.clear()
        return dropped
