"""Error classes raised by the container.

Missing registrations, type mismatches on a shared key and constructors that
request the key they are building all raise subclasses of
``DepContainerError``.
"""

from __future__ import annotations

from depcontainer import (
    Container,
    DepContainerError,
    DependencyNotRegisteredError,
    DependencyTypeMismatchError,
    InfiniteRecursionError,
)


class Service:
    pass


class Node:
    pass


def main() -> None:
    container = Container()

    try:
        container.resolve(Service)
    except DependencyNotRegisteredError as error:
        print(f"missing={error.service_key.describe()}")  # => missing=__main__.Service

    container.register(str, lambda _: "not a service", key="shared")
    try:
        container.resolve(Service, key="shared")
    except DependencyTypeMismatchError as error:
        print(f"mismatch={error.registered_type.__name__}->{error.expected_type.__name__}")  # => mismatch=str->Service

    container.register(Node, lambda c: c.resolve(Node, key="b"), key="a")
    container.register(Node, lambda c: c.resolve(Node, key="a"), key="b")
    try:
        container.resolve(Node, key="a")
    except InfiniteRecursionError as error:
        print(f"stack={[key.describe() for key in error.stack]}")  # => stack=['a', 'b']

    container.deregister(Service)
    try:
        container.resolve(Service)
    except DepContainerError as error:
        print(f"base_class={type(error).__name__}")  # => base_class=DependencyNotRegisteredError


if __name__ == "__main__":
    main()
