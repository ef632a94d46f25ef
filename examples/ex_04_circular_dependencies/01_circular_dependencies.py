"""Circular dependencies between different types.

``Parent`` owns a ``Child`` which owns a ``Grandchild``. The reverse edges are
weak and assigned by ``post_construction`` callbacks, which only run after the
outermost ``resolve`` call has finished constructing. Every object is built
once, whichever type is requested first.
"""

from __future__ import annotations

import weakref
from typing import TypeVar

from depcontainer import Container

T = TypeVar("T")


class Grandchild:
    def __init__(self) -> None:
        self.child_ref: weakref.ref[Child] | None = None


class Child:
    def __init__(self, grandchild: Grandchild) -> None:
        self.grandchild = grandchild
        self.parent_ref: weakref.ref[Parent] | None = None


class Parent:
    def __init__(self, child: Child) -> None:
        self.child = child
        self.grandchild_ref: weakref.ref[Grandchild] | None = None


def build_container(log: list[str]) -> Container:
    def constructed(name: str, value: T) -> T:
        log.append(name)
        return value

    def wire_parent(c: Container) -> None:
        c.resolve(Parent).grandchild_ref = weakref.ref(c.resolve(Grandchild))

    def wire_child(c: Container) -> None:
        c.resolve(Child).parent_ref = weakref.ref(c.resolve(Parent))

    def wire_grandchild(c: Container) -> None:
        c.resolve(Grandchild).child_ref = weakref.ref(c.resolve(Child))

    container = Container()
    container.register(
        Parent,
        lambda c: constructed("Parent", Parent(c.resolve(Child))),
        post_construction=wire_parent,
    )
    container.register(
        Child,
        lambda c: constructed("Child", Child(c.resolve(Grandchild))),
        post_construction=wire_child,
    )
    container.register(
        Grandchild,
        lambda _: constructed("Grandchild", Grandchild()),
        post_construction=wire_grandchild,
    )
    return container


def main() -> None:
    log: list[str] = []
    container = build_container(log)

    grandchild = container.resolve(Grandchild)
    child = grandchild.child_ref()
    parent = child.parent_ref()

    print(f"construction_order={log}")  # => construction_order=['Grandchild', 'Child', 'Parent']
    print(f"cycle_closed={parent.grandchild_ref() is grandchild}")  # => cycle_closed=True
    print(f"parent_owns_child={parent.child is child}")  # => parent_owns_child=True

    container.resolve(Parent)
    container.resolve(Child)
    print(f"constructed_once={len(log) == 3}")  # => constructed_once=True


if __name__ == "__main__":
    main()
