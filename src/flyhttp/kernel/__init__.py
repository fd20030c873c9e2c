"""flyhttp Kernel — Foundation layer with zero external dependencies."""

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
from flyhttp.kernel.lifecycle import Lifecycle

__all__ = [
    # Lifecycle
    "Lifecycle",
    # Base
    "FlyHttpException",
    # Configuration
    "ConfigurationException",
    "InvalidAnnotationException",
    "InvalidRequestConfigException",
    "MetadataConflictException",
    # Infrastructure
    "InfrastructureException",
    "TransportException",
    "HttpStatusException",
    "TransportTimeoutException",
]
