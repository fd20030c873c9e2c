"""Outbound port: HTTP transport interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from flyhttp.client.descriptor import RequestDescriptor


@dataclass(frozen=True)
class TransportResponse:
    """A successful response with its body already decoded."""

    status_code: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class HttpTransportPort(Protocol):
    """Abstract HTTP transport.

    ``execute`` sends exactly one request and either returns the response or
    raises; retries and timeouts are the transport's own policy.
    """

    async def execute(self, descriptor: RequestDescriptor) -> TransportResponse: ...
