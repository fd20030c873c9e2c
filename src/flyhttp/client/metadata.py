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
"""Per-method request metadata and the registry that holds it.

Metadata is collected once, when a client class is registered, into an
explicit table keyed by ``(owner class, method name)``.  The interceptor
only ever reads from this table.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any

import structlog

from flyhttp.kernel.exceptions import InvalidAnnotationException, MetadataConflictException

logger = structlog.get_logger("flyhttp.client")

ANNOTATIONS_ATTR = "__flyhttp_annotations__"

HeaderValue = str | int | float


@dataclass(frozen=True)
class MethodMetadata:
    """Declared request metadata for one client method.

    ``None`` means the field was never set.  Argument indexes count from the
    first parameter after the receiver, so ``0`` is a real index.
    """

    headers: Mapping[str, HeaderValue] | None = None
    static_params: Mapping[str, Any] | None = None
    params_arg_index: int | None = None
    response_arg_index: int | None = None
    error_arg_index: int | None = None

    def __post_init__(self) -> None:
        for name in ("headers", "static_params"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


EMPTY_METADATA = MethodMetadata()

_INDEX_FIELDS = ("params_arg_index", "response_arg_index", "error_arg_index")


class MetadataRegistry:
    """Table of :class:`MethodMetadata` keyed by ``(owner, method_name)``.

    Entries are immutable once registered.  Reads never fail: a method with
    no entry gets an empty :class:`MethodMetadata`.
    """

    def __init__(self) -> None:
        self._table: dict[tuple[type, str], MethodMetadata] = {}
        self._collected: set[type] = set()
        self._lock = threading.RLock()

    def register(self, owner: type, method_name: str, metadata: MethodMetadata) -> None:
        """Register *metadata* for ``owner.method_name``."""
        key = (owner, method_name)
        with self._lock:
            if key in self._table:
                raise MetadataConflictException(
                    f"Metadata for {owner.__qualname__}.{method_name} is already registered",
                    code="METADATA_CONFLICT",
                    context={"owner": owner.__qualname__, "method": method_name},
                )
            self._table[key] = metadata

    def get_metadata(self, owner: type, method_name: str) -> MethodMetadata:
        return self._table.get((owner, method_name), EMPTY_METADATA)

    def contains(self, owner: type, method_name: str) -> bool:
        return (owner, method_name) in self._table

    def is_collected(self, owner: type) -> bool:
        return owner in self._collected

    def collect(self, owner: type) -> int:
        """Register metadata for every annotated function defined on *owner*.

        Runs once per class; later calls are no-ops.  Returns the number of
        methods registered by this call.
        """
        with self._lock:
            if owner in self._collected:
                return 0

            count = 0
            for name, attr in vars(owner).items():
                annotations = getattr(attr, ANNOTATIONS_ATTR, None)
                if not annotations:
                    continue
                self.register(owner, name, _metadata_from_annotations(owner, name, attr, annotations))
                count += 1
            # Marked only once every entry is readable.
            self._collected.add(owner)

        logger.debug("client_metadata_collected", owner=owner.__qualname__, methods=count)
        return count


def _metadata_from_annotations(
    owner: type, name: str, func: Any, annotations: Mapping[str, Any]
) -> MethodMetadata:
    values = dict(annotations)
    for field_name in _INDEX_FIELDS:
        marker = values.get(field_name)
        if isinstance(marker, str):
            values[field_name] = _resolve_parameter_index(owner, name, func, marker)
    return MethodMetadata(**values)


def _resolve_parameter_index(owner: type, name: str, func: Any, parameter: str) -> int:
    """Translate a parameter name into its position after the receiver."""
    positional = [
        p.name
        for p in inspect.signature(func).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ][1:]
    if parameter not in positional:
        raise InvalidAnnotationException(
            f"{owner.__qualname__}.{name} has no positional parameter named '{parameter}'",
            code="UNKNOWN_PARAMETER",
            context={"owner": owner.__qualname__, "method": name, "parameter": parameter},
        )
    return positional.index(parameter)


default_registry = MetadataRegistry()
