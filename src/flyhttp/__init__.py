"""flyhttp — declarative HTTP calls intercepted at the method boundary."""

from flyhttp.client import (
    UnhandledErrorPolicy,
    create_method_decorator,
    delete,
    error_arg,
    get,
    head,
    headers,
    http_client,
    params,
    params_arg,
    patch,
    post,
    put,
    response_arg,
    set_request_config,
)

__version__ = "0.1.0"

__all__ = [
    "UnhandledErrorPolicy",
    "create_method_decorator",
    "delete",
    "error_arg",
    "get",
    "head",
    "headers",
    "http_client",
    "params",
    "params_arg",
    "patch",
    "post",
    "put",
    "response_arg",
    "set_request_config",
]
