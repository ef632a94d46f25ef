from __future__ import annotations

from typing import TYPE_CHECKING, Any

from depcontainer._internal.type_checks import qualified_name

if TYPE_CHECKING:
    from depcontainer.service_key import ServiceKey


class DepContainerError(Exception):
    """Represent a base class for all depcontainer-specific failures.

    Catch this type when you want to handle any container error path without
    matching each concrete exception class individually. Errors raised by user
    constructors and post-construction callbacks are never wrapped in it.
    """


class DepContainerInvalidRegistrationError(DepContainerError):
    """Signal invalid arguments passed to a registration API.

    Raised by ``Container.register`` when the constructor or
    post-construction callback is not callable or when ``lifetime`` is not a
    ``Lifetime`` member, and by ``Container(default_lifetime=...)`` for an
    invalid default.
    """


class DepContainerInvalidKeyError(DepContainerError):
    """Signal a dependency key that cannot name a registration slot.

    Raised by every container API that accepts a dependency when the value is
    not a class, an ``Annotated[cls, Component(...)]`` alias or a
    ``ServiceKey``, or when a discriminator is supplied twice.
    """


class DependencyNotRegisteredError(DepContainerError):
    """Signal that a dependency key has no registration.

    Raised by ``Container.resolve`` when nothing has been registered under the
    requested slot, or after the slot was removed with ``deregister``.

    Typical fix is calling ``container.register(...)`` for the key during
    application wiring.
    """

    def __init__(self, service_key: ServiceKey) -> None:
        self.service_key = service_key
        super().__init__(
            f"Error attempting to resolve dependency for key {service_key.describe()!r}, "
            "but no dependency has been registered. Perhaps you forgot to call `register`?",
        )


class DependencyTypeMismatchError(DepContainerError):
    """Signal that a slot holds a dependency of a different declared type.

    Raised by ``Container.resolve`` when the requested type is not the type the
    slot was registered with. This happens when two registrations share an
    explicit key but disagree on the type.

    Typical fix is checking the ``register`` call against the ``resolve`` call
    so that both name the same type for the key.
    """

    def __init__(self, service_key: ServiceKey, expected_type: Any, registered_type: Any) -> None:
        self.service_key = service_key
        self.expected_type = expected_type
        self.registered_type = registered_type
        super().__init__(
            f"Error attempting to resolve dependency for key {service_key.describe()!r}, "
            f"the type registered ({qualified_name(registered_type)}) did not match the type "
            f"expected ({qualified_name(expected_type)}). Please check your call to `register` "
            "against your call to `resolve` to ensure the types match.",
        )


class InfiniteRecursionError(DepContainerError):
    """Signal a constructor that requests a key already under construction.

    Raised by ``Container.resolve`` when a constructor, directly or through
    other constructors, resolves the key it is building. Deferring the
    back-reference to ``post_construction`` does not help here; the
    registration graph itself is wrong.

    Typical fix is moving the reciprocal ``resolve`` call out of the
    constructor and into a ``post_construction`` callback.
    """

    def __init__(self, service_key: ServiceKey, stack: list[ServiceKey]) -> None:
        self.service_key = service_key
        self.stack = stack
        chain = " -> ".join(key.describe() for key in (*stack, service_key))
        super().__init__(f"Infinite recursion detected while constructing dependencies: {chain}")

