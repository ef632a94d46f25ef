from typing import Any, NamedTuple


class Component(NamedTuple):
    """Differentiate multiple registrations of the same type.

    Attach ``Component`` metadata to ``typing.Annotated`` to address a named
    registration slot. ``Annotated[Person, Component("Prince Charles")]`` is
    equivalent to passing ``Person`` together with ``key="Prince Charles"``.

    Examples:
        .. code-block:: python

            from typing import Annotated, TypeAlias


            class Person: ...


            Charles: TypeAlias = Annotated[Person, Component("Prince Charles")]

            container.register(Charles, lambda _: Person())
            charles = container.resolve(Charles)

    """

    value: Any
