from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin

from depcontainer._internal.type_checks import is_runtime_class, qualified_name
from depcontainer.exceptions import DepContainerInvalidKeyError
from depcontainer.markers import Component


@dataclass(frozen=True, slots=True)
class ServiceKey:
    """Identify a registration slot in a container.

    A key pairs the declared class with an optional discriminator. The class
    object itself is the type identity, so two classes that share a name but
    live in different modules never collide.

    The registry slot is the discriminator when one is given, otherwise the
    class. Keys that share a discriminator therefore share a slot even when
    their classes differ; resolving such a slot with the wrong class is a
    ``DependencyTypeMismatchError``.
    """

    dependency: Any
    """The declared or requested class."""

    key: Hashable | None = None
    """Optional discriminator naming the slot."""

    def __post_init__(self) -> None:
        try:
            hash(self.key)
        except TypeError as exc:
            msg = f"Key for {qualified_name(self.dependency)} must be hashable; got {self.key!r}."
            raise DepContainerInvalidKeyError(msg) from exc

    @property
    def slot(self) -> Hashable:
        return self.dependency if self.key is None else self.key

    def describe(self) -> str:
        """Return a readable name for messages: the key, or the class path."""
        if self.key is not None:
            return str(self.key)
        return qualified_name(self.dependency)

    @classmethod
    def from_dependency(cls, dependency: Any, key: Hashable | None = None) -> ServiceKey:
        """Normalize a class, an ``Annotated`` alias or a ``ServiceKey``.

        Args:
            dependency: Class, ``Annotated[cls, Component(...)]`` alias, or an
                existing ``ServiceKey``.
            key: Optional discriminator for plain classes.

        Raises:
            DepContainerInvalidKeyError: If the discriminator is given
                twice or is unhashable, or ``dependency`` is not a class.

        """
        if isinstance(dependency, ServiceKey):
            if key is not None and key != dependency.key:
                msg = f"ServiceKey {dependency!r} already carries a key; got key={key!r} as well."
                raise DepContainerInvalidKeyError(msg)
            return dependency

        if get_origin(dependency) is Annotated:
            inner, *metadata = get_args(dependency)
            components = [item for item in metadata if isinstance(item, Component)]
            if len(components) > 1:
                msg = f"{dependency!r} carries more than one Component marker."
                raise DepContainerInvalidKeyError(msg)
            if components:
                if key is not None:
                    msg = f"{dependency!r} already names a component; got key={key!r} as well."
                    raise DepContainerInvalidKeyError(msg)
                key = components[0].value
            dependency = inner

        if not is_runtime_class(dependency):
            msg = f"Dependency must be a class, Annotated alias or ServiceKey; got {dependency!r}."
            raise DepContainerInvalidKeyError(msg)

        return cls(dependency=dependency, key=key)
