"""flyhttp Client — declarative HTTP method interception."""

from flyhttp.client.annotations import error_arg, headers, params, params_arg, response_arg
from flyhttp.client.declarative import create_method_decorator, delete, get, head, http_client, patch, post, put
from flyhttp.client.descriptor import RequestDescriptor, build_descriptor
from flyhttp.client.interceptor import (
    Exchange,
    UnhandledErrorPolicy,
    intercept,
    perform_exchange,
    set_default_transport,
    set_unhandled_error_policy,
)
from flyhttp.client.metadata import MetadataRegistry, MethodMetadata, default_registry
from flyhttp.client.ports.outbound import HttpTransportPort, TransportResponse
from flyhttp.client.request_config import (
    RequestDefaults,
    get_default_request_config,
    reset_request_config,
    set_request_config,
)

__all__ = [
    "Exchange",
    "HttpTransportPort",
    "MetadataRegistry",
    "MethodMetadata",
    "RequestDefaults",
    "RequestDescriptor",
    "TransportResponse",
    "UnhandledErrorPolicy",
    "build_descriptor",
    "create_method_decorator",
    "default_registry",
    "delete",
    "error_arg",
    "get",
    "get_default_request_config",
    "head",
    "headers",
    "http_client",
    "intercept",
    "params",
    "params_arg",
    "patch",
    "perform_exchange",
    "post",
    "put",
    "reset_request_config",
    "response_arg",
    "set_default_transport",
    "set_request_config",
    "set_unhandled_error_policy",
]
