from __future__ import annotations

import pytest

from depcontainer import Container, DependencyNotRegisteredError, Lifetime
from depcontainer.integrations.pytest_plugin import (
    ContainerOverride,
    assert_dependency_missing,
    assert_dependency_registered,
)


class _Service:
    pass


class _FakeService(_Service):
    pass


def test_public_depcontainer_container_fixture_is_available(depcontainer_container: Container) -> None:
    assert isinstance(depcontainer_container, Container)
    assert not depcontainer_container.is_registered(_Service)


def test_override_fixture_registers_into_container_fixture(
    depcontainer_container: Container,
    depcontainer_override: ContainerOverride,
) -> None:
    depcontainer_override(_Service, lambda _: _FakeService(), lifetime=Lifetime.TRANSIENT)

    assert depcontainer_override.container is depcontainer_container
    assert isinstance(depcontainer_container.resolve(_Service), _FakeService)


def test_override_reset_deregisters_every_touched_key() -> None:
    container = Container()
    override = ContainerOverride(container)
    fake = _FakeService()

    override(_Service, lambda _: _FakeService(), key="a")
    override.instance(fake, provides=_Service, key="b")
    override.instance(fake)
    override.reset()

    assert not container.is_registered(_Service, key="a")
    assert not container.is_registered(_Service, key="b")
    assert not container.is_registered(_FakeService)


def test_assert_dependency_registered_fails_for_missing_dependency() -> None:
    with pytest.raises(pytest.fail.Exception, match="to resolve"):
        assert_dependency_registered(Container(), _Service)


def test_assert_dependency_missing_fails_for_registered_dependency() -> None:
    container = Container()
    container.register(_Service, lambda _: _Service())

    with pytest.raises(pytest.fail.Exception):
        assert_dependency_missing(container, _Service)


def test_assert_dependency_missing_passes_for_missing_dependency() -> None:
    assert_dependency_missing(Container(), _Service, key="missing")


def test_plugin_fixtures_in_isolated_session(pytester: pytest.Pytester) -> None:
    pytester.makeconftest('pytest_plugins = ["depcontainer.integrations.pytest_plugin.plugin"]')
    pytester.makepyfile(
        """
        from depcontainer import Container


        class Service:
            pass


        def test_override(depcontainer_override):
            depcontainer_override(Service, lambda _: Service())
            assert isinstance(depcontainer_override.container.resolve(Service), Service)


        def test_fresh_container(depcontainer_container):
            assert not depcontainer_container.is_registered(Service)
        """,
    )

    result = pytester.runpytest("-p", "no:depcontainer")

    result.assert_outcomes(passed=2)


def test_missing_dependency_error_is_raised_by_plain_resolve(depcontainer_container: Container) -> None:
    with pytest.raises(DependencyNotRegisteredError):
        depcontainer_container.resolve(_Service)
