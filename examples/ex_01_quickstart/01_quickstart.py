"""Quickstart: register constructors and resolve them lazily.

Constructors receive the container and resolve what they need. Nothing is
built until the first ``resolve`` call.
"""

from __future__ import annotations

from depcontainer import Container


class Database:
    def __init__(self, url: str) -> None:
        self.url = url


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    def describe(self) -> str:
        return f"users@{self.database.url}"


def main() -> None:
    built: list[str] = []

    def build_database(_: Container) -> Database:
        built.append("database")
        return Database(url="sqlite:///:memory:")

    container = Container()
    container.register(Database, build_database)
    container.register(UserRepository, lambda c: UserRepository(c.resolve(Database)))

    print(f"built_before_resolve={built}")  # => built_before_resolve=[]

    repository = container.resolve(UserRepository)
    print(repository.describe())  # => users@sqlite:///:memory:
    print(f"built_after_resolve={built}")  # => built_after_resolve=['database']
    print(f"same_repository={container.resolve(UserRepository) is repository}")  # => same_repository=True


if __name__ == "__main__":
    main()
