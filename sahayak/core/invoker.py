from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import ClassifiedError, ErrorKind, malformed_output, missing_credentials
from .providers import ProviderProfile
from .types import ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)


class ModelInvoker:
    def __init__(
        self,
        profile: ProviderProfile,
        api_key: str,
        *,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.profile = profile
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def invoke(self, request: ProviderRequest) -> ProviderResponse:
        if not self._api_key:
            raise missing_credentials(self.profile.credential_variable)

        profile = self.profile
        model = request.model or profile.default_model
        payload = profile.encode(request, model)

        logger.debug("Calling %s model %s", profile.name, model)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    profile.url(model),
                    json=payload,
                    headers=profile.headers(self._api_key),
                    params=profile.params(self._api_key),
                )
        except httpx.HTTPError as exc:
            raise ClassifiedError(
                kind=ErrorKind.UPSTREAM_ERROR,
                message=f"Could not reach the AI provider: {exc}",
            ) from exc

        body = _decode_body(response)

        if not response.is_success:
            logger.warning(
                "%s returned status %s: %s", profile.name, response.status_code, body
            )
            return ProviderResponse(status_code=response.status_code, body=body)

        if not isinstance(body, dict):
            raise malformed_output("the provider did not return a JSON object")

        try:
            parts = profile.decode_parts(body)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise malformed_output(
                f"missing message content ({exc.__class__.__name__}: {exc})"
            ) from exc

        return ProviderResponse(status_code=response.status_code, body=body, parts=parts)


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"message": response.text}
