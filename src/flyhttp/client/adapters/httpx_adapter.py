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
"""httpx-based HTTP transport adapter."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import httpx
import structlog

from flyhttp.client.descriptor import RequestDescriptor
from flyhttp.client.ports.outbound import TransportResponse
from flyhttp.kernel.exceptions import (
    HttpStatusException,
    TransportException,
    TransportTimeoutException,
)

logger = structlog.get_logger("flyhttp.client")


def join_url(base_url: str, url: str) -> str:
    """Prefix *url* with *base_url* unless *url* is already absolute."""
    if not base_url or url.startswith(("http://", "https://")):
        return url
    if not url:
        return base_url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when declared, text otherwise."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class HttpxTransportAdapter:
    """HTTP transport backed by httpx.AsyncClient.

    With no *client*, each request runs on a short-lived ``AsyncClient`` so
    the adapter is safe to share across event loops.  An injected client is
    reused and closed by :meth:`stop`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: timedelta = timedelta(seconds=30),
    ) -> None:
        self._client = client
        self._timeout = timeout

    async def execute(self, descriptor: RequestDescriptor) -> TransportResponse:
        if self._client is not None:
            return await self._send(self._client, descriptor)
        async with httpx.AsyncClient() as client:
            return await self._send(client, descriptor)

    async def _send(self, client: httpx.AsyncClient, descriptor: RequestDescriptor) -> TransportResponse:
        url = join_url(descriptor.base_url, descriptor.url)
        timeout = descriptor.timeout if descriptor.timeout is not None else self._timeout.total_seconds()

        kwargs: dict[str, Any] = dict(descriptor.options)
        if descriptor.query_params:
            kwargs["params"] = descriptor.query_params
        if descriptor.body is not None:
            kwargs["json"] = descriptor.body

        try:
            response = await client.request(
                descriptor.method,
                url,
                headers={k: str(v) for k, v in descriptor.headers.items()},
                timeout=timeout,
                **kwargs,
            )
        except httpx.TimeoutException as exc:
            raise TransportTimeoutException(
                f"{descriptor.method} {url} timed out",
                code="TRANSPORT_TIMEOUT",
                context={"method": descriptor.method, "url": url},
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportException(
                f"{descriptor.method} {url} failed: {exc}",
                code="TRANSPORT_ERROR",
                context={"method": descriptor.method, "url": url},
            ) from exc

        data = decode_body(response)
        if not response.is_success:
            raise HttpStatusException(
                f"{descriptor.method} {url} returned {response.status_code}",
                status_code=response.status_code,
                data=data,
                code="HTTP_STATUS",
                context={"method": descriptor.method, "url": url},
            )

        logger.debug(
            "http_response_received",
            method=descriptor.method,
            url=url,
            status=response.status_code,
        )
        return TransportResponse(
            status_code=response.status_code,
            data=data,
            headers=dict(response.headers),
        )

    async def start(self) -> None:
        """No-op -- httpx client is ready after construction."""

    async def stop(self) -> None:
        """Close the underlying HTTP client."""
        await self.close()

    async def close(self) -> None:
        """Close the injected HTTP client, if any."""
        if self._client is not None:
            await self._client.aclose()
