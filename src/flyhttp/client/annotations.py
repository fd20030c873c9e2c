# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tagging decorators that declare request metadata on client methods.

The decorators only record values on the function object; they may be
stacked above or below the HTTP verb decorator.  The values are moved into a
:class:`~flyhttp.client.metadata.MetadataRegistry` when the owning class is
registered.

Usage::

    @http_client(base_url="https://api.example.com")
    class UserClient:
        @get("/users/{user_id}")
        @headers({"Accept": "application/json"})
        @params(expand="profile")
        @params_arg(0)
        @response_arg("user")
        @error_arg("error")
        async def fetch_user(self, user_id, user=None, error=None):
            return user, error
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from flyhttp.client.metadata import ANNOTATIONS_ATTR, HeaderValue
from flyhttp.kernel.exceptions import InvalidAnnotationException

F = TypeVar("F", bound=Callable[..., Any])

ArgumentMarker = int | str


def _annotate(field_name: str, value: Any) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        existing: dict[str, Any] = dict(getattr(func, ANNOTATIONS_ATTR, None) or {})
        if field_name in existing:
            raise InvalidAnnotationException(
                f"'{field_name}' is declared more than once on {func.__qualname__}",
                code="DUPLICATE_ANNOTATION",
                context={"method": func.__qualname__, "field": field_name},
            )
        existing[field_name] = value
        # A fresh dict each time: functools.wraps shares __dict__ values with
        # the wrapped function.
        setattr(func, ANNOTATIONS_ATTR, existing)
        return func

    return decorator


def _mapping_from(
    kind: str, mapping: Mapping[str, Any] | None, extra: dict[str, Any]
) -> dict[str, Any]:
    if mapping is not None and not isinstance(mapping, Mapping):
        raise InvalidAnnotationException(
            f"@{kind} expects a mapping, got {type(mapping).__name__}",
            code="INVALID_ANNOTATION",
        )
    return {**(mapping or {}), **extra}


def headers(mapping: Mapping[str, HeaderValue] | None = None, **values: HeaderValue) -> Callable[[F], F]:
    """Declare static request headers; they override default headers."""
    merged = _mapping_from("headers", mapping, values)
    for name, value in merged.items():
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise InvalidAnnotationException(
                f"Header '{name}' must be a string or number, got {type(value).__name__}",
                code="INVALID_HEADER",
                context={"header": name},
            )
    return _annotate("headers", merged)


def params(mapping: Mapping[str, Any] | None = None, **values: Any) -> Callable[[F], F]:
    """Declare static request parameters; runtime parameters override them."""
    return _annotate("static_params", _mapping_from("params", mapping, values))


def _marker(kind: str, field_name: str, marker: ArgumentMarker) -> Callable[[F], F]:
    if isinstance(marker, bool) or not isinstance(marker, (int, str)):
        raise InvalidAnnotationException(
            f"@{kind} expects a parameter index or name, got {marker!r}",
            code="INVALID_ANNOTATION",
        )
    return _annotate(field_name, marker)


def params_arg(marker: ArgumentMarker) -> Callable[[F], F]:
    """Take runtime request parameters from the argument at *marker*.

    The argument only contributes when it is a mapping at call time.
    """
    return _marker("params_arg", "params_arg_index", marker)


def response_arg(marker: ArgumentMarker) -> Callable[[F], F]:
    """Inject the decoded response payload into the argument at *marker*."""
    return _marker("response_arg", "response_arg_index", marker)


def error_arg(marker: ArgumentMarker) -> Callable[[F], F]:
    """Inject the transport failure into the argument at *marker*."""
    return _marker("error_arg", "error_arg_index", marker)
