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
"""Configuration properties for declarative clients."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from flyhttp.client.interceptor import UnhandledErrorPolicy
from flyhttp.client.request_config import RequestDefaults
from flyhttp.core.config import config_properties


@config_properties(prefix="flyhttp.client")
class ClientProperties(BaseModel):
    """Settings under ``flyhttp.client``.

    Example ``flyhttp.yaml``::

        flyhttp:
          client:
            base-url: https://api.example.com
            timeout: 10
            headers:
              Accept: application/json
            unhandled-error: drop
    """

    base_url: str = ""
    headers: dict[str, str | int | float] = Field(default_factory=dict)
    params: dict[str, Any] = Field(default_factory=dict)
    timeout: float | None = Field(default=None, ge=0)
    options: dict[str, Any] = Field(default_factory=dict)
    unhandled_error: UnhandledErrorPolicy = UnhandledErrorPolicy.DROP

    def to_request_defaults(self) -> RequestDefaults:
        return RequestDefaults(
            base_url=self.base_url,
            headers=self.headers,
            params=self.params,
            timeout=self.timeout,
            options=self.options,
        )
