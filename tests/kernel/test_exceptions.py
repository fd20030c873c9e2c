"""Tests for the flyhttp exception hierarchy."""

import pytest

from flyhttp.kernel.exceptions import (
    ConfigurationException,
    FlyHttpException,
    HttpStatusException,
    InfrastructureException,
    InvalidAnnotationException,
    InvalidRequestConfigException,
    MetadataConflictException,
    TransportException,
    TransportTimeoutException,
)


class TestFlyHttpException:
    def test_message_code_and_context(self):
        exc = FlyHttpException("failed", code="X_001", context={"url": "/a"})
        assert str(exc) == "failed"
        assert exc.code == "X_001"
        assert exc.context == {"url": "/a"}

    def test_context_defaults_to_empty_dict(self):
        assert FlyHttpException("failed").context == {}


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_cls",
        [InvalidAnnotationException, MetadataConflictException, InvalidRequestConfigException],
    )
    def test_configuration_errors(self, exc_cls):
        assert issubclass(exc_cls, ConfigurationException)
        assert issubclass(exc_cls, FlyHttpException)

    @pytest.mark.parametrize("exc_cls", [HttpStatusException, TransportTimeoutException])
    def test_transport_errors(self, exc_cls):
        assert issubclass(exc_cls, TransportException)
        assert issubclass(exc_cls, InfrastructureException)

    def test_http_status_carries_response(self):
        exc = HttpStatusException("GET /a returned 503", status_code=503, data={"retry": True})
        assert exc.status_code == 503
        assert exc.data == {"retry": True}
        assert exc.code is None
