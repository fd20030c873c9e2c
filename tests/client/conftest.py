"""Shared fixtures for client tests."""

from __future__ import annotations

import pytest

from flyhttp.client.interceptor import UnhandledErrorPolicy, set_default_transport, set_unhandled_error_policy
from flyhttp.client.request_config import reset_request_config


@pytest.fixture(autouse=True)
def _reset_client_state():
    reset_request_config()
    set_default_transport(None)
    set_unhandled_error_policy(UnhandledErrorPolicy.DROP)
    yield
    reset_request_config()
    set_default_transport(None)
    set_unhandled_error_policy(UnhandledErrorPolicy.DROP)
