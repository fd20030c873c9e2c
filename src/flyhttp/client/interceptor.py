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
"""Method interceptor — turns an annotated client method into an HTTP call.

One invocation walks through these steps, always in order:

1. resolve the method's metadata from the registry,
2. build a fresh :class:`RequestDescriptor`,
3. send it through the transport (the only suspension point),
4. inject the response payload or the failure into the argument list,
5. call the original method with the (possibly rebound) arguments.

The original method runs exactly once per call, whether the request
succeeded or not.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from flyhttp.client.descriptor import RequestDescriptor, build_descriptor
from flyhttp.client.metadata import MetadataRegistry, MethodMetadata, default_registry
from flyhttp.client.ports.outbound import HttpTransportPort, TransportResponse
from flyhttp.client.request_config import RequestDefaults, get_default_request_config
from flyhttp.kernel.exceptions import TransportException

logger = structlog.get_logger("flyhttp.client")

CLIENT_SETTINGS_ATTR = "__flyhttp_client__"


class UnhandledErrorPolicy(str, Enum):
    """What to do with a failed request when no error argument is declared."""

    DROP = "drop"
    RAISE = "raise"


@dataclass(frozen=True)
class ClientSettings:
    """Class-level settings recorded by ``@http_client``."""

    base_url: str | None = None
    headers: Mapping[str, Any] | None = None
    transport: HttpTransportPort | None = None
    unhandled_error: UnhandledErrorPolicy | None = None
    registry: MetadataRegistry | None = None

    def apply(self, defaults: RequestDefaults) -> RequestDefaults:
        partial: dict[str, Any] = {}
        if self.base_url is not None:
            partial["base_url"] = self.base_url
        if self.headers:
            partial["headers"] = self.headers
        return defaults.merged(**partial) if partial else defaults


@dataclass(frozen=True)
class Exchange:
    """Outcome of one request: either a response or an error."""

    descriptor: RequestDescriptor
    response: Any = None
    payload: Any = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def extract_payload(response: Any) -> Any:
    """Return the decoded body of a transport response."""
    if isinstance(response, TransportResponse):
        return response.data
    json_method = getattr(response, "json", None)
    if callable(json_method):
        return json_method()
    return response


async def perform_exchange(transport: HttpTransportPort, descriptor: RequestDescriptor) -> Exchange:
    """Send *descriptor* once and capture the outcome as data.

    A response whose payload cannot be decoded counts as a failure.
    """
    response = None
    try:
        response = await transport.execute(descriptor)
        payload = extract_payload(response)
    except Exception as exc:
        return Exchange(descriptor=descriptor, response=response, error=exc)
    return Exchange(descriptor=descriptor, response=response, payload=payload)


_default_transport: HttpTransportPort | None = None
_default_policy = UnhandledErrorPolicy.DROP


def get_default_transport() -> HttpTransportPort:
    global _default_transport
    if _default_transport is None:
        from flyhttp.client.adapters.httpx_adapter import HttpxTransportAdapter

        _default_transport = HttpxTransportAdapter()
    return _default_transport


def set_default_transport(transport: HttpTransportPort | None) -> None:
    """Set the transport used by clients that do not name one (None resets)."""
    global _default_transport
    _default_transport = transport


def has_default_transport() -> bool:
    """Whether a default transport is already installed."""
    return _default_transport is not None


def get_unhandled_error_policy() -> UnhandledErrorPolicy:
    return _default_policy


def set_unhandled_error_policy(policy: UnhandledErrorPolicy | str) -> None:
    global _default_policy
    _default_policy = UnhandledErrorPolicy(policy)


def _is_valid_index(index: int | None, args: list[Any]) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(args)


def _owner_of(cls: type, name: str, wrapper: Callable[..., Any]) -> type:
    """Find the class in *cls*'s MRO that defines *wrapper* as *name*."""
    fallback: type | None = None
    for klass in cls.__mro__:
        attr = vars(klass).get(name)
        if attr is wrapper:
            return klass
        if attr is not None and fallback is None:
            fallback = klass
    return fallback or cls


def intercept(
    func: Callable[..., Any],
    method: str,
    url: str,
    *,
    registry: MetadataRegistry | None = None,
    defaults: RequestDefaults | None = None,
    transport: HttpTransportPort | None = None,
    unhandled_error: UnhandledErrorPolicy | str | None = None,
) -> Callable[..., Any]:
    """Wrap *func* so each call performs ``method url`` before running it.

    Args:
        func: The original method; its first parameter is the receiver.
        method: HTTP verb.
        url: URL template; ``{name}`` and ``:name`` placeholders are filled
            from same-named call arguments, then from request params.
        registry: Metadata table; defaults to the process-wide registry.
        defaults: Request defaults snapshot; when omitted the process-wide
            snapshot current at call time is used.
        transport: Transport override for this method.
        unhandled_error: Policy for failures with no error argument declared.
    """
    method = method.upper()
    policy_override = UnhandledErrorPolicy(unhandled_error) if unhandled_error is not None else None
    signature = inspect.signature(func)
    receiver_param = next(iter(signature.parameters), None)
    name = func.__name__

    @functools.wraps(func)
    async def interceptor(*call_args: Any, **call_kwargs: Any) -> Any:
        bound = signature.bind(*call_args, **call_kwargs)
        bound.apply_defaults()
        receiver, *args = bound.args
        kwargs = dict(bound.kwargs)
        path_args = {k: v for k, v in bound.arguments.items() if k != receiver_param}

        owner = _owner_of(type(receiver), name, interceptor)
        settings: ClientSettings = getattr(owner, CLIENT_SETTINGS_ATTR, None) or ClientSettings()
        table = registry or settings.registry or default_registry
        if not table.is_collected(owner):
            table.collect(owner)
        metadata = table.get_metadata(owner, name)

        base = settings.apply(defaults if defaults is not None else get_default_request_config())
        runtime_arg = args[metadata.params_arg_index] if _is_valid_index(metadata.params_arg_index, args) else None
        descriptor = build_descriptor(
            base,
            metadata.static_params,
            runtime_arg,
            method,
            url=url,
            headers=metadata.headers,
            path_args=path_args,
        )

        logger.debug("http_request_dispatched", method=descriptor.method, url=descriptor.url, target=func.__qualname__)
        exchange = await perform_exchange(transport or settings.transport or get_default_transport(), descriptor)

        policy = policy_override or settings.unhandled_error or get_unhandled_error_policy()
        _inject(exchange, metadata, args, policy, func.__qualname__)

        result = func(receiver, *args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    interceptor.__flyhttp_http_method__ = method  # type: ignore[attr-defined]
    interceptor.__flyhttp_http_path__ = url  # type: ignore[attr-defined]
    return interceptor


def _inject(
    exchange: Exchange,
    metadata: MethodMetadata,
    args: list[Any],
    policy: UnhandledErrorPolicy,
    target: str,
) -> None:
    descriptor = exchange.descriptor
    if exchange.succeeded:
        if _is_valid_index(metadata.response_arg_index, args):
            args[metadata.response_arg_index] = exchange.payload  # type: ignore[index]
            logger.debug("http_response_injected", target=target, index=metadata.response_arg_index)
        return

    error = exchange.error
    if _is_valid_index(metadata.error_arg_index, args):
        args[metadata.error_arg_index] = error  # type: ignore[index]
        logger.debug("http_error_injected", target=target, index=metadata.error_arg_index, error=repr(error))
        return

    if policy is UnhandledErrorPolicy.RAISE:
        if isinstance(error, TransportException):
            raise error
        raise TransportException(
            f"{descriptor.method} {descriptor.url} failed: {error}",
            code="UNHANDLED_TRANSPORT_ERROR",
            context={"method": descriptor.method, "url": descriptor.url, "target": target},
        ) from error

    logger.warning(
        "http_request_failed_unhandled",
        method=descriptor.method,
        url=descriptor.url,
        target=target,
        error=repr(error),
    )
