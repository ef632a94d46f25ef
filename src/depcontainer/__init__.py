from depcontainer.container import Container
from depcontainer.exceptions import (
    DepContainerError,
    DepContainerInvalidKeyError,
    DepContainerInvalidRegistrationError,
    DependencyNotRegisteredError,
    DependencyTypeMismatchError,
    InfiniteRecursionError,
)
from depcontainer.markers import Component
from depcontainer.providers import Constructor, Lifetime, PostConstruction
from depcontainer.service_key import ServiceKey

__all__ = [
    "Component",
    "Constructor",
    "Container",
    "DepContainerError",
    "DepContainerInvalidKeyError",
    "DepContainerInvalidRegistrationError",
    "DependencyNotRegisteredError",
    "DependencyTypeMismatchError",
    "InfiniteRecursionError",
    "Lifetime",
    "PostConstruction",
    "ServiceKey",
]
