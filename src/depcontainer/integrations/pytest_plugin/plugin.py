from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Any, Literal

import pytest

from depcontainer.container import Container
from depcontainer.exceptions import DependencyNotRegisteredError
from depcontainer.providers import Constructor, Lifetime, PostConstruction
from depcontainer.service_key import ServiceKey


class ContainerOverride:
    """Register test-only replacements and remove them again on teardown.

    Every key touched through the override is deregistered by ``reset``, so a
    container shared across tests never keeps a replacement alive.
    """

    def __init__(self, container: Container) -> None:
        self._container = container
        self._service_keys: list[ServiceKey] = []

    @property
    def container(self) -> Container:
        return self._container

    def __call__(
        self,
        provides: Any,
        constructor: Constructor[Any],
        *,
        key: Hashable | None = None,
        lifetime: Lifetime | None = None,
        post_construction: PostConstruction | None = None,
    ) -> None:
        self._container.register(
            provides,
            constructor,
            key=key,
            lifetime=lifetime,
            post_construction=post_construction,
        )
        self._service_keys.append(ServiceKey.from_dependency(provides, key))

    def instance(
        self,
        instance: Any,
        *,
        provides: Any | Literal["infer"] = "infer",
        key: Hashable | None = None,
    ) -> None:
        self._container.add_instance(instance, provides=provides, key=key)
        dependency = type(instance) if isinstance(provides, str) and provides == "infer" else provides
        self._service_keys.append(ServiceKey.from_dependency(dependency, key))

    def reset(self) -> None:
        while self._service_keys:
            self._container.deregister(self._service_keys.pop())


@pytest.fixture()
def depcontainer_container() -> Container:
    """Create a per-test container.

    The fixture is function-scoped, so registrations and resolution state are
    isolated between tests unless users override the fixture scope.

    Returns:
        A new ``Container`` instance.

    """
    return Container()


@pytest.fixture()
def depcontainer_override(depcontainer_container: Container) -> Iterator[ContainerOverride]:
    """Yield a ``ContainerOverride`` bound to ``depcontainer_container``.

    Yields:
        An override helper whose registrations are deregistered at teardown.

    """
    override = ContainerOverride(depcontainer_container)
    try:
        yield override
    finally:
        override.reset()


def assert_dependency_registered(container: Container, provides: Any, *, key: Hashable | None = None) -> None:
    """Fail the test unless the key resolves without error."""
    __tracebackhide__ = True
    try:
        container.resolve(provides, key=key)
    except Exception as exc:  # noqa: BLE001
        pytest.fail(f"Expected {ServiceKey.from_dependency(provides, key).describe()!r} to resolve, got {exc!r}")


def assert_dependency_missing(container: Container, provides: Any, *, key: Hashable | None = None) -> None:
    """Fail the test unless resolving the key raises ``DependencyNotRegisteredError``."""
    __tracebackhide__ = True
    service_key = ServiceKey.from_dependency(provides, key)
    with pytest.raises(DependencyNotRegisteredError) as exc_info:
        container.resolve(service_key)
    assert exc_info.value.service_key == service_key
