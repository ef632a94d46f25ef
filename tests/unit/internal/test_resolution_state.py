from __future__ import annotations

import pytest

from depcontainer._internal.resolution_state import PendingPostConstruction, ResolutionState
from depcontainer.exceptions import InfiniteRecursionError
from depcontainer.providers import Lifetime, Registration
from depcontainer.service_key import ServiceKey


class _Service:
    pass


def _pending(key: str) -> PendingPostConstruction:
    service_key = ServiceKey(_Service, key)
    registration = Registration(
        service_key=service_key,
        lifetime=Lifetime.LAZY_SINGLETON,
        constructor=lambda _: _Service(),
    )
    return PendingPostConstruction(service_key=service_key, registration=registration, callback=lambda _: None)


def test_constructing_tracks_stack_and_depth() -> None:
    state = ResolutionState()
    outer, inner = ServiceKey(_Service, "outer"), ServiceKey(_Service, "inner")

    with state.constructing(outer):
        assert state.stack == [outer]
        assert state.depth == 1
        with state.constructing(inner):
            assert state.stack == [outer, inner]
            assert state.depth == 2
        assert state.stack == [outer]

    assert state.stack == []
    assert state.depth == 0
    assert state.is_outermost


def test_constructing_unwinds_on_error() -> None:
    state = ResolutionState()

    with pytest.raises(RuntimeError), state.constructing(ServiceKey(_Service)):
        raise RuntimeError

    assert state.stack == []
    assert state.depth == 0


def test_constructing_same_slot_twice_raises_without_pushing() -> None:
    state = ResolutionState()
    service_key = ServiceKey(_Service)

    with state.constructing(service_key):
        with pytest.raises(InfiniteRecursionError) as exc_info, state.constructing(service_key):
            pass  # pragma: no cover

        assert state.stack == [service_key]
        assert state.depth == 1

    assert exc_info.value.stack == [service_key]


def test_keys_with_same_slot_are_treated_as_recursion() -> None:
    state = ResolutionState()

    with state.constructing(ServiceKey(_Service, "shared")), pytest.raises(InfiniteRecursionError):
        with state.constructing(ServiceKey(int, "shared")):
            pass  # pragma: no cover


def test_draining_queue_clears_leftovers_and_resets_flag() -> None:
    state = ResolutionState()
    state.enqueue(_pending("a"))
    state.enqueue(_pending("b"))

    with pytest.raises(RuntimeError), state.draining_queue() as queue:
        assert not state.is_outermost
        state.running = queue.popleft()
        raise RuntimeError

    assert not state.draining
    assert state.running is None
    assert len(state.queue) == 0


def test_discard_queue_returns_dropped_count() -> None:
    state = ResolutionState()
    state.enqueue(_pending("a"))

    assert state.discard_queue() == 1
    assert state.discard_queue() == 0
