from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar

from depcontainer.service_key import ServiceKey

if TYPE_CHECKING:
    from depcontainer.container import Container

T = TypeVar("T")


class Lifetime(str, Enum):
    """Defines how long a constructed dependency is kept by the container."""

    TRANSIENT = "transient"
    """The constructor runs on every ``resolve`` call."""

    LAZY_SINGLETON = "lazy_singleton"
    """The constructor runs on the first ``resolve`` call and the value is cached."""


Constructor: TypeAlias = "Callable[[Container], T]"
"""Builds a dependency. Receives the container to resolve what it needs."""

PostConstruction: TypeAlias = "Callable[[Container], None]"
"""Runs after every construction of the current wave, used to wire back-references."""


@dataclass(frozen=True, slots=True)
class Registration:
    """An unconstructed registry entry."""

    service_key: ServiceKey
    lifetime: Lifetime
    constructor: Callable[[Container], Any]
    post_construction: Callable[[Container], None] | None = None


@dataclass(frozen=True, slots=True)
class InitializedEntry:
    """A constructed lazy singleton, returned verbatim until deregistered."""

    service_key: ServiceKey
    instance: Any
    registration: Registration | None = None
    """The registration the value was built from, ``None`` for ``add_instance`` values."""


RegistryEntry: TypeAlias = Registration | InitializedEntry
