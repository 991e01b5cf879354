"""Chat completions against an Azure OpenAI deployment.

``ChatCompletionClient.complete`` issues a single non-streaming request:

    POST {endpoint}/openai/deployments/{deployment}/chat/completions?api-version=...

The response body is always decoded before the status code is looked at, so
a non-JSON error page surfaces as ``DecodeError`` rather than
``UpstreamStatusError``.
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .config import REQUEST_TIMEOUT_SECONDS, AzureChatConfig
from .errors import (
    DecodeError,
    EmptyCompletionError,
    NoCompletionError,
    RequestConstructionError,
    UpstreamStatusError,
)
from .models import ChatCompletionRequest, ChatCompletionResponse
from .utils import extract_error_message, is_success, run_bounded, status_line

logger = logging.getLogger(__name__)


def completions_url(config: AzureChatConfig) -> httpx.URL:
    """Join the deployment path onto the endpoint, keeping any base path and query."""
    try:
        url = httpx.URL(config.endpoint)
    except (httpx.InvalidURL, TypeError) as exc:
        raise RequestConstructionError(f"invalid Azure OpenAI endpoint: {exc}") from exc
    base = url.raw_path.decode("ascii").split("?", 1)[0].rstrip("/")
    deployment = quote(config.deployment, safe="/")
    path = f"{base}/openai/deployments/{deployment}/chat/completions"
    try:
        return url.copy_with(path=path).copy_set_param("api-version", config.api_version)
    except (httpx.InvalidURL, TypeError) as exc:
        raise RequestConstructionError(
            f"invalid Azure OpenAI deployment {config.deployment!r}: {exc}"
        ) from exc


class ChatCompletionClient:
    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def complete(
        self,
        config: AzureChatConfig,
        system_prompt: str,
        user_prompt: str,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> str:
        """Return the trimmed content of the first choice."""
        url = completions_url(config)
        try:
            body = ChatCompletionRequest.from_prompts(system_prompt, user_prompt).model_dump_json()
        except ValueError as exc:
            raise RequestConstructionError(f"failed to build Azure OpenAI request: {exc}") from exc
        headers = {
            "Content-Type": "application/json",
            "api-key": config.api_key.get_secret_value(),
        }

        logger.debug("POST %s (deployment=%s)", url, config.deployment)
        resp = await run_bounded(
            self._post(url, headers, body),
            timeout=self.timeout,
            cancel=cancel,
            label="azure openai",
        )

        try:
            decoded = ChatCompletionResponse.model_validate_json(resp.content)
        except ValidationError as exc:
            raise DecodeError(f"failed to decode Azure OpenAI response ({status_line(resp)}): {exc}") from exc

        if not is_success(resp):
            msg = extract_error_message(decoded.error, resp.text)
            logger.warning("azure openai returned %s", status_line(resp))
            raise UpstreamStatusError(
                f"azure openai returned {status_line(resp)}: {msg}",
                status_code=resp.status_code,
                status=status_line(resp),
                detail=msg,
            )

        if not decoded.choices:
            raise NoCompletionError("azure openai returned no choices")

        content = (decoded.choices[0].message.content or "").strip()
        if not content:
            raise EmptyCompletionError("azure openai returned empty content")
        return content

    async def _post(self, url: httpx.URL, headers: dict, body: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.post(url, headers=headers, content=body)
