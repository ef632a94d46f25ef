"""Shared pytest fixtures for depcontainer tests."""

import pytest

from depcontainer.container import Container
from depcontainer.providers import Lifetime

pytest_plugins = ["pytester", "depcontainer.integrations.pytest_plugin.plugin"]


@pytest.fixture()
def container() -> Container:
    """Container with the default lazy singleton lifetime."""
    return Container()


@pytest.fixture()
def container_transient() -> Container:
    """Container with transient as default lifetime."""
    return Container(default_lifetime=Lifetime.TRANSIENT)
