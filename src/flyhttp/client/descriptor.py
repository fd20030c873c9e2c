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
"""Transport-agnostic request descriptors and the algorithm that builds them."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from flyhttp.client.request_config import RequestDefaults

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

# {name} anywhere, :name only right after a slash so ports stay intact.
_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}|(?<=/):([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything a transport needs to send one request."""

    url: str
    method: str
    base_url: str = ""
    headers: dict[str, Any] = field(default_factory=dict)
    query_params: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] | None = None
    timeout: float | None = None
    options: dict[str, Any] = field(default_factory=dict)


def uses_body(method: str) -> bool:
    """Return True when *method* carries its parameters in the request body."""
    return method.upper() in BODY_METHODS


def expand_url(
    template: str,
    request_params: Mapping[str, Any],
    path_args: Mapping[str, Any] | None = None,
) -> str:
    """Substitute ``{name}`` / ``:name`` placeholders in *template*.

    Values come from the call arguments in *path_args* first, then from
    *request_params*, which is only read.  Unknown placeholders are left
    as-is.
    """
    path_args = path_args or {}

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        if name in path_args:
            value = path_args[name]
        elif name in request_params:
            value = request_params[name]
        else:
            return match.group(0)
        return quote(str(value), safe="")

    return _PLACEHOLDER_RE.sub(_replace, template)


def build_descriptor(
    defaults: RequestDefaults,
    static_params: Mapping[str, Any] | None,
    runtime_arg: Any,
    method: str,
    *,
    url: str,
    headers: Mapping[str, Any] | None = None,
    path_args: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Merge defaults, static params and the runtime argument into a descriptor.

    Layers, later wins on key collision:

    1. *defaults* (headers, default query params, timeout, options).
    2. *static_params*, overridden by *runtime_arg* when it is a mapping.
       ``POST``/``PUT``/``PATCH`` put the result in the body, every other
       method in the query string.
    3. *headers* declared on the method.

    *url* and *method* always come from the decorator, never from call
    arguments; call arguments only fill the URL template's placeholders.
    """
    method = method.upper()
    runtime_params = runtime_arg if isinstance(runtime_arg, Mapping) else {}
    request_params: dict[str, Any] = {**(static_params or {}), **runtime_params}

    expanded = expand_url(url, request_params, path_args)

    query_params = dict(defaults.params)
    body: dict[str, Any] | None = None
    if uses_body(method):
        body = request_params
    else:
        query_params.update(request_params)

    merged_headers = dict(defaults.headers)
    if headers:
        merged_headers.update(headers)

    return RequestDescriptor(
        url=expanded,
        method=method,
        base_url=defaults.base_url,
        headers=merged_headers,
        query_params=query_params,
        body=body,
        timeout=defaults.timeout,
        options=dict(defaults.options),
    )
