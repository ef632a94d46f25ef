from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any, Literal, TypeVar, cast, overload

from depcontainer._internal.resolution_state import PendingPostConstruction, ResolutionState
from depcontainer.exceptions import (
    DepContainerInvalidRegistrationError,
    DependencyNotRegisteredError,
    DependencyTypeMismatchError,
    InfiniteRecursionError,
)
from depcontainer.providers import InitializedEntry, Lifetime, Registration, RegistryEntry
from depcontainer.service_key import ServiceKey

if TYPE_CHECKING:
    from depcontainer.providers import Constructor, PostConstruction

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container:
    """Register constructors explicitly and resolve them lazily.

    Dependency keys are classes, optionally qualified by a discriminator
    (``key="..."`` or ``Annotated[cls, Component("...")]``) so several
    instances of one class can live side by side.

    Constructors receive the container and may call ``resolve`` for whatever
    they need while building. When two objects need each other, each
    constructor takes only what it needs to exist and leaves the back-reference
    to a ``post_construction`` callback. Those callbacks are queued and run in
    registration order once the outermost ``resolve`` call of the wave has
    finished constructing, so every cycle member is built exactly once.

    A container is meant to be used from a single logical thread. Resolution
    state lives on the instance, so separate containers never interfere.
    """

    def __init__(self, default_lifetime: Lifetime = Lifetime.LAZY_SINGLETON) -> None:
        """Initialize an empty container.

        Args:
            default_lifetime: Lifetime used by ``register`` calls that omit
                ``lifetime``.

        Raises:
            DepContainerInvalidRegistrationError: If ``default_lifetime`` is not
                a ``Lifetime`` member.

        """
        self._default_lifetime = _validate_lifetime(default_lifetime)
        self._entries: dict[Hashable, RegistryEntry] = {}
        self._resolution_state = ResolutionState()

    @property
    def default_lifetime(self) -> Lifetime:
        return self._default_lifetime

    # region Registration

    def register(
        self,
        provides: Any,
        constructor: Constructor[T],
        *,
        key: Hashable | None = None,
        lifetime: Lifetime | None = None,
        post_construction: PostConstruction | None = None,
    ) -> None:
        """Register a constructor for a dependency key.

        Re-registering a key replaces the previous registration and drops any
        value already cached for it, so the next ``resolve`` constructs again.

        Args:
            provides: Class or ``Annotated[cls, Component(...)]`` alias the
                constructor produces.
            constructor: Callable receiving the container and returning the
                instance.
            key: Optional discriminator for registering several instances of
                the same class.
            lifetime: ``Lifetime.LAZY_SINGLETON`` caches the first value,
                ``Lifetime.TRANSIENT`` constructs on every call. Defaults to the
                container's ``default_lifetime``.
            post_construction: Optional callable receiving the container, run
                after the outermost construction of the wave completes. Use it
                to assign circular back-references.
                With ``Lifetime.TRANSIENT`` the callback runs for every new
                instance, so it must not construct another instance of its own
                registration, directly or through other keys.

        Raises:
            DepContainerInvalidRegistrationError: If a callable argument is not
                callable or ``lifetime`` is invalid.
            DepContainerInvalidKeyError: If ``provides``/``key`` do not form a
                valid key.
            InfiniteRecursionError: At resolution time, if a transient's
                post-construction callback constructs its own registration again.

        Examples:
            .. code-block:: python

                container.register(
                    Child,
                    lambda c: Child(grandchild=c.resolve(Grandchild)),
                    post_construction=lambda c: setattr(
                        c.resolve(Child), "parent", c.resolve(Parent)
                    ),
                )

        """
        service_key = ServiceKey.from_dependency(provides, key)
        if not callable(constructor):
            msg = f"register() constructor for {service_key.describe()!r} must be callable."
            raise DepContainerInvalidRegistrationError(msg)
        if post_construction is not None and not callable(post_construction):
            msg = f"register() post_construction for {service_key.describe()!r} must be callable."
            raise DepContainerInvalidRegistrationError(msg)
        resolved_lifetime = self._default_lifetime if lifetime is None else _validate_lifetime(lifetime)

        replaced = self._entries.get(service_key.slot)
        self._entries[service_key.slot] = Registration(
            service_key=service_key,
            lifetime=resolved_lifetime,
            constructor=constructor,
            post_construction=post_construction,
        )
        logger.debug(
            "Registered %s with lifetime %s%s",
            service_key.describe(),
            resolved_lifetime.value,
            " (replacing previous entry)" if replaced is not None else "",
        )

    def add_instance(
        self,
        instance: Any,
        *,
        provides: Any | Literal["infer"] = "infer",
        key: Hashable | None = None,
    ) -> None:
        """Register an already constructed value.

        The value behaves like a lazy singleton that has been resolved: it is
        returned verbatim until the key is deregistered or registered again.

        Args:
            instance: Value returned on resolution.
            provides: Class to bind. ``"infer"`` binds ``type(instance)``.
            key: Optional discriminator.

        """
        dependency = type(instance) if isinstance(provides, str) and provides == "infer" else provides
        service_key = ServiceKey.from_dependency(dependency, key)
        self._entries[service_key.slot] = InitializedEntry(service_key=service_key, instance=instance)
        logger.debug("Registered instance for %s", service_key.describe())

    def deregister(self, provides: Any, *, key: Hashable | None = None) -> None:
        """Remove whatever is registered or cached under a key.

        Removing a key that holds nothing is a no-op. Post-construction
        callbacks still queued for the removed registration are skipped.

        Args:
            provides: Class, ``Annotated`` alias, or an explicit ``ServiceKey``.
            key: Optional discriminator.

        """
        service_key = ServiceKey.from_dependency(provides, key)
        if self._entries.pop(service_key.slot, None) is not None:
            logger.debug("Deregistered %s", service_key.describe())

    def is_registered(self, provides: Any, *, key: Hashable | None = None) -> bool:
        """Return whether the key's slot holds a registration or a cached value."""
        service_key = ServiceKey.from_dependency(provides, key)
        return service_key.slot in self._entries

    # endregion Registration

    # region Resolution

    @overload
    def resolve(self, dependency: type[T], *, key: Hashable | None = None) -> T: ...

    @overload
    def resolve(self, dependency: Any, *, key: Hashable | None = None) -> Any: ...

    def resolve(self, dependency: Any, *, key: Hashable | None = None) -> Any:
        """Resolve a dependency, constructing it when needed.

        Args:
            dependency: Class, ``Annotated`` alias, or an explicit ``ServiceKey``.
            key: Optional discriminator.

        Returns:
            The cached value for initialized lazy singletons, otherwise a newly
            constructed one.

        Raises:
            DependencyNotRegisteredError: If nothing is registered under the key.
            DependencyTypeMismatchError: If the key's slot was registered with a
                different class.
            InfiniteRecursionError: If a constructor requests a key that is
                already being constructed.

        Notes:
            Errors raised by constructors and post-construction callbacks
            propagate unchanged. Values cached before such an error stay cached.

        """
        service_key = ServiceKey.from_dependency(dependency, key)
        entry = self._entries.get(service_key.slot)
        if entry is None:
            raise DependencyNotRegisteredError(service_key)

        registered_type = entry.service_key.dependency
        if registered_type is not service_key.dependency:
            raise DependencyTypeMismatchError(service_key, service_key.dependency, registered_type)

        if isinstance(entry, InitializedEntry):
            return entry.instance

        return self._construct(entry)

    def _construct(self, registration: Registration) -> Any:
        state = self._resolution_state
        service_key = registration.service_key

        try:
            with state.constructing(service_key):
                logger.debug("Constructing %s (depth %d)", service_key.describe(), state.depth)
                instance = registration.constructor(self)
                if registration.lifetime is Lifetime.LAZY_SINGLETON:
                    self._entries[service_key.slot] = InitializedEntry(
                        service_key=service_key,
                        instance=instance,
                        registration=registration,
                    )
        except BaseException:
            if state.is_outermost and state.queue:
                dropped = state.discard_queue()
                logger.warning(
                    "Construction of %s failed; discarded %d pending post-construction callback(s)",
                    service_key.describe(),
                    dropped,
                )
            raise

        if registration.post_construction is not None:
            running = state.running
            if running is not None and running.registration is registration:
                raise InfiniteRecursionError(service_key, [running.service_key])
            state.enqueue(
                PendingPostConstruction(
                    service_key=service_key,
                    registration=registration,
                    callback=registration.post_construction,
                ),
            )

        if state.is_outermost:
            self._drain_post_construction_queue()

        return instance

    def _drain_post_construction_queue(self) -> None:
        state = self._resolution_state
        if not state.queue:
            return

        with state.draining_queue() as queue:
            while queue:
                pending = queue.popleft()
                if not self._is_current_registration(pending):
                    logger.debug(
                        "Skipping post-construction of %s; its registration was removed or replaced",
                        pending.service_key.describe(),
                    )
                    continue
                state.running = pending
                pending.callback(self)

    def _is_current_registration(self, pending: PendingPostConstruction) -> bool:
        entry = self._entries.get(pending.service_key.slot)
        if isinstance(entry, InitializedEntry):
            return entry.registration is pending.registration
        return entry is pending.registration

    # endregion Resolution


def _validate_lifetime(lifetime: object) -> Lifetime:
    if not isinstance(lifetime, Lifetime):
        msg = f"lifetime must be a Lifetime member; got {lifetime!r}."
        raise DepContainerInvalidRegistrationError(msg)
    return cast("Lifetime", lifetime)
