"""A presenter and a view wired through one container.

The view owns the presenter; the presenter only observes the view through a
weak ``delegate`` reference assigned in ``post_construction``. A typed
``Dependencies`` facade exposes each collaborator as a property backed by
``resolve``.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol

from depcontainer import Container


class Store:
    def __init__(self, clock: Callable[[], datetime]) -> None:
        self._clock = clock
        self.date_instantiated = clock()

    @property
    def date_now(self) -> datetime:
        return self._clock()


@dataclass(frozen=True)
class RootViewModel:
    date_instantiated: str
    date_now: str


class RootPresenterDelegate(Protocol):
    def root_presenter_did_update(self, presenter: RootPresenter, view_model: RootViewModel) -> None: ...


def format_date(value: datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value:%b} {value.day}, {value.year} at {hour}:{value:%M:%S} {suffix}"


class RootPresenter:
    def __init__(self, store: Store) -> None:
        self._store = store
        self._delegate: weakref.ref[RootPresenterDelegate] | None = None
        self.view_model = self._make_view_model()

    @property
    def delegate(self) -> RootPresenterDelegate | None:
        return self._delegate() if self._delegate is not None else None

    @delegate.setter
    def delegate(self, value: RootPresenterDelegate) -> None:
        self._delegate = weakref.ref(value)

    def refresh_button_tapped(self) -> None:
        self.view_model = self._make_view_model()
        if self.delegate is not None:
            self.delegate.root_presenter_did_update(self, self.view_model)

    def _make_view_model(self) -> RootViewModel:
        return RootViewModel(
            date_instantiated=format_date(self._store.date_instantiated),
            date_now=format_date(self._store.date_now),
        )


class RootView:
    def __init__(self, presenter: RootPresenter) -> None:
        self.presenter = presenter
        self.label = self._render(presenter.view_model)

    def root_presenter_did_update(self, presenter: RootPresenter, view_model: RootViewModel) -> None:
        self.label = self._render(view_model)

    @staticmethod
    def _render(view_model: RootViewModel) -> str:
        return f"started {view_model.date_instantiated} | now {view_model.date_now}"


class Dependencies:
    def __init__(self, clock: Callable[[], datetime]) -> None:
        self._container = Container()
        self._container.register(Store, lambda _: Store(clock))
        self._container.register(
            RootPresenter,
            lambda c: RootPresenter(c.resolve(Store)),
            post_construction=self._wire_presenter,
        )
        self._container.register(RootView, lambda c: RootView(c.resolve(RootPresenter)))

    @staticmethod
    def _wire_presenter(container: Container) -> None:
        container.resolve(RootPresenter).delegate = container.resolve(RootView)

    @property
    def store(self) -> Store:
        return self._container.resolve(Store)

    @property
    def root_presenter(self) -> RootPresenter:
        return self._container.resolve(RootPresenter)

    @property
    def root_view(self) -> RootView:
        return self._container.resolve(RootView)


def ticking_clock(start: datetime, step: timedelta) -> Callable[[], datetime]:
    current = start - step

    def clock() -> datetime:
        nonlocal current
        current += step
        return current

    return clock


def main() -> None:
    dependencies = Dependencies(
        ticking_clock(datetime(2020, 4, 22, 9, 30, tzinfo=timezone.utc), timedelta(seconds=5)),
    )

    presenter = dependencies.root_presenter
    view = dependencies.root_view
    print(f"delegate_is_view={presenter.delegate is view}")  # => delegate_is_view=True
    print(view.label)  # => started Apr 22, 2020 at 9:30:00 AM | now Apr 22, 2020 at 9:30:05 AM

    presenter.refresh_button_tapped()
    print(view.label)  # => started Apr 22, 2020 at 9:30:00 AM | now Apr 22, 2020 at 9:30:10 AM
    print(f"same_store={dependencies.store is dependencies.store}")  # => same_store=True


if __name__ == "__main__":
    main()
