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
"""Declarative HTTP client — @http_client with @get/@post etc."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from flyhttp.client.interceptor import (
    CLIENT_SETTINGS_ATTR,
    ClientSettings,
    UnhandledErrorPolicy,
    intercept,
)
from flyhttp.client.metadata import MetadataRegistry, default_registry
from flyhttp.client.ports.outbound import HttpTransportPort

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


def http_client(
    base_url: str | None = None,
    *,
    headers: Mapping[str, Any] | None = None,
    transport: HttpTransportPort | None = None,
    unhandled_error: UnhandledErrorPolicy | str | None = None,
    registry: MetadataRegistry | None = None,
) -> Callable[[type[T]], type[T]]:
    """Register a class as a declarative HTTP client.

    Collects the metadata declared on its methods into *registry* and
    records class-wide settings layered over the process defaults.

    Args:
        base_url: Base URL for all requests; overrides the default base URL.
        headers: Headers for every method of the class; method headers win.
        transport: Transport used by the class instead of the default one.
        unhandled_error: Policy for failures with no error argument declared.
        registry: Metadata table; defaults to the process-wide registry.
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(
            cls,
            CLIENT_SETTINGS_ATTR,
            ClientSettings(
                base_url=base_url,
                headers=dict(headers) if headers else None,
                transport=transport,
                unhandled_error=UnhandledErrorPolicy(unhandled_error) if unhandled_error is not None else None,
                registry=registry,
            ),
        )
        (registry or default_registry).collect(cls)
        return cls

    return decorator


def create_method_decorator(method: str, **options: Any) -> Callable[[str], Callable[[F], F]]:
    """Build a decorator factory for one HTTP verb.

    *options* are forwarded to :func:`~flyhttp.client.interceptor.intercept`
    (``registry``, ``defaults``, ``transport``, ``unhandled_error``).

    Usage::

        purge = create_method_decorator("PURGE")

        class CacheClient:
            @purge("/cache/{key}")
            async def evict(self, key): ...
    """
    verb = method.upper()

    def method_decorator(url: str) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            return intercept(func, verb, url, **options)  # type: ignore[return-value]

        return decorator

    return method_decorator


get = create_method_decorator("GET")
post = create_method_decorator("POST")
put = create_method_decorator("PUT")
delete = create_method_decorator("DELETE")
patch = create_method_decorator("PATCH")
head = create_method_decorator("HEAD")
