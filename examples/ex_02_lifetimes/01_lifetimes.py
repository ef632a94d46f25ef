"""Lifetimes: ``LAZY_SINGLETON`` and ``TRANSIENT``.

A lazy singleton is constructed on first use and cached. A transient
registration is constructed again on every ``resolve``. Registering a key
again drops the cached value.
"""

from __future__ import annotations

from itertools import count

from depcontainer import Container, Lifetime


class RequestId:
    def __init__(self, value: int) -> None:
        self.value = value


class Config:
    pass


def main() -> None:
    container = Container()
    ids = count(1)

    container.register(RequestId, lambda _: RequestId(next(ids)), lifetime=Lifetime.TRANSIENT)
    first = container.resolve(RequestId)
    second = container.resolve(RequestId)
    print(f"transient_values={first.value},{second.value}")  # => transient_values=1,2

    container.register(Config, lambda _: Config())
    config = container.resolve(Config)
    print(f"singleton_same={container.resolve(Config) is config}")  # => singleton_same=True

    container.register(Config, lambda _: Config())
    print(f"reregistered_new={container.resolve(Config) is not config}")  # => reregistered_new=True

    transient_container = Container(default_lifetime=Lifetime.TRANSIENT)
    transient_container.register(Config, lambda _: Config())
    fresh = transient_container.resolve(Config) is not transient_container.resolve(Config)
    print(f"default_transient_new={fresh}")  # => default_transient_new=True


if __name__ == "__main__":
    main()
