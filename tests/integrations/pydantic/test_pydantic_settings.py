from __future__ import annotations

import pytest

from depcontainer import Container, DepContainerInvalidRegistrationError
from depcontainer.integrations.pydantic_settings import (
    _load_base_settings,
    is_pydantic_settings_subclass,
    register_settings,
)

pydantic_settings = pytest.importorskip("pydantic_settings")


class AppSettings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_prefix="DEPCONTAINER_TEST_")

    api_url: str = "https://api.example.com"
    retries: int = 3


def test_load_base_settings_returns_none_for_missing_module() -> None:
    assert _load_base_settings("missing.module") is None


def test_is_pydantic_settings_subclass() -> None:
    assert is_pydantic_settings_subclass(AppSettings)
    assert not is_pydantic_settings_subclass(object)
    assert not is_pydantic_settings_subclass(AppSettings())
    assert not is_pydantic_settings_subclass(list[int])


def test_register_settings_reads_environment_once(
    container: Container,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("DEPCONTAINER_TEST_RETRIES", "7")
    register_settings(container, AppSettings)

    settings = container.resolve(AppSettings)
    monkeypatch.setenv("DEPCONTAINER_TEST_RETRIES", "9")

    assert settings.retries == 7
    assert settings.api_url == "https://api.example.com"
    assert container.resolve(AppSettings) is settings


def test_register_settings_with_key(container: Container) -> None:
    register_settings(container, AppSettings, key="primary")

    assert container.resolve(AppSettings, key="primary") is container.resolve(AppSettings, key="primary")
    assert not container.is_registered(AppSettings)


def test_settings_are_available_to_other_constructors(container: Container) -> None:
    class Client:
        def __init__(self, base_url: str) -> None:
            self.base_url = base_url

    register_settings(container, AppSettings)
    container.register(Client, lambda c: Client(c.resolve(AppSettings).api_url))

    assert container.resolve(Client).base_url == "https://api.example.com"


def test_register_settings_rejects_plain_classes(container: Container) -> None:
    with pytest.raises(DepContainerInvalidRegistrationError):
        register_settings(container, object)
