"""Tests for configuring client defaults from Config."""

from __future__ import annotations

import pytest

from flyhttp.client.adapters.httpx_adapter import HttpxTransportAdapter
from flyhttp.client.auto_configuration import configure_client
from flyhttp.client.interceptor import (
    UnhandledErrorPolicy,
    get_default_transport,
    get_unhandled_error_policy,
    set_default_transport,
)
from flyhttp.client.properties import ClientProperties
from flyhttp.client.request_config import get_default_request_config
from flyhttp.core.config import Config


class TestClientProperties:
    def test_defaults(self) -> None:
        props = Config({}).bind(ClientProperties)
        assert props.base_url == ""
        assert props.timeout is None
        assert props.unhandled_error is UnhandledErrorPolicy.DROP

    def test_binds_kebab_case_keys(self) -> None:
        config = Config(
            {
                "flyhttp": {
                    "client": {
                        "base-url": "https://api.example.com",
                        "timeout": "2.5",
                        "headers": {"X-Api-Key": "k"},
                        "unhandled-error": "raise",
                    }
                }
            }
        )
        props = config.bind(ClientProperties)
        assert props.base_url == "https://api.example.com"
        assert props.timeout == 2.5
        assert props.headers == {"X-Api-Key": "k"}
        assert props.unhandled_error is UnhandledErrorPolicy.RAISE

    def test_environment_overrides_file_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLYHTTP_CLIENT_BASE_URL", "https://env.example")
        monkeypatch.setenv("FLYHTTP_CLIENT_TIMEOUT", "2.5")
        config = Config({"flyhttp": {"client": {"base-url": "https://file.example", "headers": {"A": "1"}}}})

        props = config.bind(ClientProperties)

        assert props.base_url == "https://env.example"
        assert props.timeout == 2.5
        assert props.headers == {"A": "1"}

    def test_environment_applies_without_file_section(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLYHTTP_CLIENT_UNHANDLED_ERROR", "raise")
        props = Config({}).bind(ClientProperties)
        assert props.unhandled_error is UnhandledErrorPolicy.RAISE

    def test_negative_timeout_fails_fast(self) -> None:
        config = Config({"flyhttp": {"client": {"timeout": -1}}})
        with pytest.raises(ValueError, match="Configuration validation failed for 'ClientProperties'"):
            config.bind(ClientProperties)


class TestConfigureClient:
    def test_installs_process_defaults(self) -> None:
        config = Config(
            {
                "flyhttp": {
                    "client": {
                        "base-url": "https://api.example.com",
                        "params": {"api_key": "k"},
                        "unhandled-error": "raise",
                        "transport-timeout": 5,
                    }
                }
            }
        )

        defaults = configure_client(config)

        assert get_default_request_config() is defaults
        assert defaults.base_url == "https://api.example.com"
        assert dict(defaults.params) == {"api_key": "k"}
        assert get_unhandled_error_policy() is UnhandledErrorPolicy.RAISE
        transport = get_default_transport()
        assert isinstance(transport, HttpxTransportAdapter)

    def test_keeps_installed_default_transport(self) -> None:
        installed = HttpxTransportAdapter()
        set_default_transport(installed)
        configure_client(Config({}))
        assert get_default_transport() is installed

    def test_explicit_transport_becomes_default(self) -> None:
        set_default_transport(HttpxTransportAdapter())
        explicit = HttpxTransportAdapter()
        configure_client(Config({}), transport=explicit)
        assert get_default_transport() is explicit

    def test_configures_logging_port_first(self) -> None:
        class RecordingLoggingPort:
            def __init__(self) -> None:
                self.configured_with: list[Config] = []

            def configure(self, config: Config) -> None:
                self.configured_with.append(config)

            def get_logger(self, name: str):
                return None

            def set_level(self, name: str, level: str) -> None: ...

        port = RecordingLoggingPort()
        config = Config({})
        configure_client(config, logging_port=port)
        assert port.configured_with == [config]
