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
"""Default request configuration shared by every declarative client call."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from flyhttp.kernel.exceptions import InvalidRequestConfigException

_MAPPING_FIELDS = ("headers", "params", "options")

# Set by the transport from the descriptor itself.
RESERVED_OPTIONS = frozenset({"method", "url", "headers", "params", "json", "timeout"})


@dataclass(frozen=True)
class RequestDefaults:
    """Immutable base layer merged under every request.

    Attributes:
        base_url: Prefix for relative request URLs.
        headers: Headers sent with every request.
        params: Query parameters sent with every request.
        timeout: Request timeout in seconds; ``None`` leaves it to the transport.
        options: Extra keyword options passed through to the transport.
    """

    base_url: str = ""
    headers: Mapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    timeout: float | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in _MAPPING_FIELDS:
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name) or {})))
        clashing = sorted(RESERVED_OPTIONS.intersection(self.options))
        if clashing:
            raise InvalidRequestConfigException(
                f"Transport options cannot set {', '.join(clashing)}; use the dedicated fields",
                code="RESERVED_OPTION",
                context={"keys": clashing},
            )

    def merged(self, **partial: Any) -> RequestDefaults:
        """Return a new snapshot with *partial* layered on top.

        Mapping fields are merged key by key (later wins); other fields are
        replaced.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(partial) - known)
        if unknown:
            raise InvalidRequestConfigException(
                f"Unknown request config keys: {', '.join(unknown)}",
                code="UNKNOWN_CONFIG_KEY",
                context={"keys": unknown},
            )

        changes: dict[str, Any] = {}
        for name, value in partial.items():
            if name in _MAPPING_FIELDS:
                if value is None:
                    continue
                if not isinstance(value, Mapping):
                    raise InvalidRequestConfigException(
                        f"Request config '{name}' must be a mapping, got {type(value).__name__}",
                        code="INVALID_CONFIG_VALUE",
                        context={"key": name},
                    )
                changes[name] = {**getattr(self, name), **value}
            else:
                changes[name] = value
        return replace(self, **changes)


class _DefaultsHolder:
    """Holds the process-wide snapshot; writers swap it whole."""

    def __init__(self) -> None:
        self._current = RequestDefaults()
        self._lock = threading.Lock()

    def get(self) -> RequestDefaults:
        return self._current

    def update(self, partial: dict[str, Any]) -> RequestDefaults:
        with self._lock:
            self._current = self._current.merged(**partial)
            return self._current

    def replace(self, defaults: RequestDefaults) -> None:
        with self._lock:
            self._current = defaults


_holder = _DefaultsHolder()


def get_default_request_config() -> RequestDefaults:
    """Return the current process-wide request defaults."""
    return _holder.get()


def set_request_config(**partial: Any) -> RequestDefaults:
    """Layer *partial* over the process-wide defaults.

    Intended for application start-up.  Requests already in flight keep the
    snapshot they started with.
    """
    return _holder.update(partial)


def install_request_config(defaults: RequestDefaults) -> None:
    """Replace the process-wide defaults with *defaults*."""
    _holder.replace(defaults)


def reset_request_config() -> None:
    _holder.replace(RequestDefaults())
