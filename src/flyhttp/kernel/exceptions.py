"""Unified exception hierarchy for flyhttp.

All library exceptions inherit from FlyHttpException, enabling unified
error handling across modules.

Categories:
- ConfigurationException: Invalid annotations, metadata or request defaults
- InfrastructureException: Transport and network failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyHttpException(Exception):
    """Base exception for all flyhttp errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "TRANSPORT_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(FlyHttpException):
    """Declarative client definitions or defaults are malformed."""


class InvalidAnnotationException(ConfigurationException):
    """A tagging decorator was applied with an invalid value or more than once."""


class MetadataConflictException(ConfigurationException):
    """Metadata for a method was registered twice."""


class InvalidRequestConfigException(ConfigurationException):
    """Default request configuration received an unknown or malformed key."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyHttpException):
    """Infrastructure failures: network, transport."""


class TransportException(InfrastructureException):
    """The HTTP transport failed to complete a request."""


class HttpStatusException(TransportException):
    """The server answered with a non-2xx status.

    Args:
        message: Human-readable error description.
        status_code: HTTP status returned by the server.
        data: Decoded response body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        data: object = None,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
        self.status_code = status_code
        self.data = data


class TransportTimeoutException(TransportException):
    """The request exceeded its allowed time limit."""
