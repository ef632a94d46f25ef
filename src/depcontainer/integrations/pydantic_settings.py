from __future__ import annotations

import importlib
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

from depcontainer._internal.type_checks import is_runtime_class
from depcontainer.exceptions import DepContainerInvalidRegistrationError
from depcontainer.providers import Lifetime

if TYPE_CHECKING:
    from depcontainer.container import Container


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


SETTINGS_BASE: type[Any] | None = _load_base_settings("pydantic_settings")


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a ``pydantic_settings.BaseSettings`` model.

    If ``pydantic-settings`` is not installed, this function returns ``False``
    for every candidate.

    Args:
        candidate: Object to test.

    """
    if SETTINGS_BASE is None or not is_runtime_class(candidate):
        return False
    try:
        return issubclass(candidate, SETTINGS_BASE)
    except TypeError:
        return False


def register_settings(
    container: Container,
    settings_type: type[Any],
    *,
    key: Hashable | None = None,
) -> None:
    """Register a settings model as a lazy singleton read from the environment.

    The model is instantiated with no arguments on first resolution, so values
    come from environment variables and ``.env`` files according to its
    ``model_config``.

    Args:
        container: Container to register into.
        settings_type: ``BaseSettings`` subclass.
        key: Optional discriminator, for several instances of one model.

    Raises:
        DepContainerInvalidRegistrationError: If ``settings_type`` is not a
            ``BaseSettings`` subclass.

    Examples:
        .. code-block:: python

            class AppSettings(BaseSettings):
                api_url: str = "https://api.example.com"


            register_settings(container, AppSettings)
            settings = container.resolve(AppSettings)

    """
    if not is_pydantic_settings_subclass(settings_type):
        msg = f"register_settings() expects a pydantic_settings.BaseSettings subclass; got {settings_type!r}."
        raise DepContainerInvalidRegistrationError(msg)

    container.register(
        settings_type,
        lambda _: settings_type(),
        key=key,
        lifetime=Lifetime.LAZY_SINGLETON,
    )


__all__ = [
    "SETTINGS_BASE",
    "is_pydantic_settings_subclass",
    "register_settings",
]
