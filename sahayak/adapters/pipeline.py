from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from sahayak.core.classifier import classify_exception, classify_response
from sahayak.core.errors import ErrorKind, malformed_output
from sahayak.core.extraction import extract_payload, joined_text
from sahayak.core.invoker import ModelInvoker
from sahayak.core.parsing import RequiredKeys, parse_structured
from sahayak.core.types import ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def use_case(name: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                error = classify_exception(exc)
                if error.kind is ErrorKind.UNKNOWN:
                    logger.exception("Unexpected failure in %s", name)
                else:
                    logger.warning("%s failed (%s): %s", name, error.kind.value, error.message)
                if error is exc:
                    raise
                raise error from exc

        return wrapper

    return decorator


async def call_model(
    invoker: ModelInvoker,
    request: ProviderRequest,
    fallback: str,
) -> ProviderResponse:
    response = await invoker.invoke(request)
    if not response.ok:
        raise classify_response(response, fallback)
    return response


async def generate_text(
    invoker: ModelInvoker,
    request: ProviderRequest,
    fallback: str,
) -> str:
    response = await call_model(invoker, request, fallback)
    text = joined_text(response.parts)
    if text is None:
        raise malformed_output("the reply contained no text")
    return text


async def generate_structured(
    invoker: ModelInvoker,
    request: ProviderRequest,
    required: RequiredKeys,
    fallback: str,
) -> dict[str, Any]:
    text = await generate_text(invoker, request, fallback)
    return parse_structured(extract_payload(text), required)
