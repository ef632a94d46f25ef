"""Named keys: several instances of one class, wired as a family tree.

Each person is registered under a key. Children are owned by their parent and
built in the constructor; the parent back-reference is weak and assigned in
``post_construction``. Resolving in any order yields the same tree.
"""

from __future__ import annotations

import weakref
from typing import Annotated

from depcontainer import Component, Container, PostConstruction


class Person:
    def __init__(self, name: str, children: list[Person] | None = None) -> None:
        self.name = name
        self.children = children or []
        self._parent: weakref.ref[Person] | None = None

    @property
    def parent(self) -> Person | None:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value: Person) -> None:
        self._parent = weakref.ref(value)


Charles = Annotated[Person, Component("Charles")]


def link_parent(child: str, parent: str) -> PostConstruction:
    def post_construction(c: Container) -> None:
        c.resolve(Person, key=child).parent = c.resolve(Person, key=parent)

    return post_construction


def build_family() -> Container:
    container = Container()
    container.register(
        Person,
        lambda c: Person("Elizabeth", [c.resolve(Charles)]),
        key="Elizabeth",
    )
    container.register(
        Charles,
        lambda c: Person("Charles", [c.resolve(Person, key="William"), c.resolve(Person, key="Harry")]),
        post_construction=link_parent("Charles", "Elizabeth"),
    )
    for name in ("William", "Harry"):
        container.register(
            Person,
            lambda _, name=name: Person(name),
            key=name,
            post_construction=link_parent(name, "Charles"),
        )
    return container


def main() -> None:
    container = build_family()

    harry = container.resolve(Person, key="Harry")
    print(f"harry_parent={harry.parent.name}")  # => harry_parent=Charles
    print(f"charles_parent={harry.parent.parent.name}")  # => charles_parent=Elizabeth

    elizabeth = container.resolve(Person, key="Elizabeth")
    names = [child.name for child in elizabeth.children[0].children]
    print(f"grandchildren={names}")  # => grandchildren=['William', 'Harry']
    print(f"same_harry={elizabeth.children[0].children[1] is harry}")  # => same_harry=True


if __name__ == "__main__":
    main()
