from depcontainer.integrations.pytest_plugin.plugin import (
    ContainerOverride,
    assert_dependency_missing,
    assert_dependency_registered,
    depcontainer_container,
    depcontainer_override,
)

__all__ = [
    "ContainerOverride",
    "assert_dependency_missing",
    "assert_dependency_registered",
    "depcontainer_container",
    "depcontainer_override",
]
