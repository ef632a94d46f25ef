from __future__ import annotations

import types
from typing import Any, TypeGuard


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class usable as a type identity.

    Args:
        candidate: Value being checked before it is used as a declared type.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def qualified_name(value: Any) -> str:
    """Return ``module.QualName`` for classes and ``repr`` for anything else."""
    module = getattr(value, "__module__", None)
    qualname = getattr(value, "__qualname__", None)
    if module is None or qualname is None:
        return repr(value)
    if module == "builtins":
        return qualname
    return f"{module}.{qualname}"


__all__ = ["is_runtime_class", "qualified_name"]
