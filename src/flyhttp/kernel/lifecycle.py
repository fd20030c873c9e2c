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
"""Unified lifecycle protocol for transport adapters.

Adapters that own connections or other external resources implement this
protocol so the host application can open them at startup and release them
at shutdown.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Lifecycle(Protocol):
    """Standard lifecycle for transport adapters."""

    async def start(self) -> None:
        """Initialize connections.

        Called during application startup. If the connection fails, raise an
        exception so the failure surfaces before the first request.
        """
        ...

    async def stop(self) -> None:
        """Release connections and clean up resources."""
        ...
