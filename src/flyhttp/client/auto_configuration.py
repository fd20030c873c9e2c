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
"""Client subsystem configuration from a :class:`Config`."""

from __future__ import annotations

from datetime import timedelta

import structlog

from flyhttp.client.adapters.httpx_adapter import HttpxTransportAdapter
from flyhttp.client.interceptor import has_default_transport, set_default_transport, set_unhandled_error_policy
from flyhttp.client.ports.outbound import HttpTransportPort
from flyhttp.client.properties import ClientProperties
from flyhttp.client.request_config import RequestDefaults, install_request_config
from flyhttp.core.config import Config
from flyhttp.logging.port import LoggingPort

logger = structlog.get_logger("flyhttp.client")


def configure_client(
    config: Config,
    *,
    logging_port: LoggingPort | None = None,
    transport: HttpTransportPort | None = None,
) -> RequestDefaults:
    """Install process-wide client defaults from ``flyhttp.client`` settings.

    Call once during application start-up, before any client method runs.
    When *logging_port* is given it is configured from the same *config*
    first, e.g. ``configure_client(config, logging_port=StructlogAdapter())``.

    *transport* becomes the default transport.  Without it, an httpx
    transport is installed only if no default transport is set yet.
    """
    if logging_port is not None:
        logging_port.configure(config)

    properties = config.bind(ClientProperties)
    defaults = properties.to_request_defaults()
    install_request_config(defaults)
    set_unhandled_error_policy(properties.unhandled_error)

    if transport is not None:
        set_default_transport(transport)
    elif not has_default_transport():
        timeout_s = float(config.get("flyhttp.client.transport-timeout", 30))
        set_default_transport(HttpxTransportAdapter(timeout=timedelta(seconds=timeout_s)))

    logger.info(
        "http_client_configured",
        base_url=defaults.base_url,
        timeout=defaults.timeout,
        unhandled_error=properties.unhandled_error.value,
    )
    return defaults
