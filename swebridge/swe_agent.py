"""Job submission to the SWE Agent REST API (``POST {endpoint}/run``).

The agent is handed a GitHub issue and asked to open a pull request for it.
We return the job handle and do not poll it.
"""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .config import REQUEST_TIMEOUT_SECONDS, AgentConfig
from .errors import DecodeError, RequestConstructionError, UpstreamStatusError
from .models import AgentRunRequest, AgentRunResult
from .utils import is_success, run_bounded, status_line

logger = logging.getLogger(__name__)


def run_url(config: AgentConfig) -> str:
    endpoint = config.endpoint
    if endpoint.endswith("/"):
        endpoint = endpoint[:-1]
    return endpoint + "/run"


class AgentJobClient:
    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def submit(
        self,
        config: AgentConfig,
        owner: str,
        repo: str,
        issue_number: int,
        *,
        cancel: Optional[asyncio.Event] = None,
    ) -> AgentRunResult:
        try:
            body = AgentRunRequest.for_issue(config, owner, repo, issue_number).model_dump_json()
            url = httpx.URL(run_url(config))
        except (ValueError, TypeError, httpx.InvalidURL) as exc:
            raise RequestConstructionError(f"failed to build SWE Agent request: {exc}") from exc

        logger.debug("POST %s for %s/%s#%s", url, owner, repo, issue_number)
        resp = await run_bounded(
            self._post(url, body),
            timeout=self.timeout,
            cancel=cancel,
            label="SWE Agent",
        )

        if not is_success(resp):
            # Body is passed through verbatim, no error-envelope extraction.
            logger.warning("SWE Agent returned %s", status_line(resp))
            raise UpstreamStatusError(
                f"SWE Agent returned {status_line(resp)}: {resp.text}",
                status_code=resp.status_code,
                status=status_line(resp),
                detail=resp.text,
            )

        try:
            result = AgentRunResult.model_validate_json(resp.content)
        except ValidationError as exc:
            raise DecodeError(f"failed to decode SWE Agent response: {exc}") from exc
        logger.debug("SWE Agent accepted job %s (%s)", result.job_id, result.status)
        return result

    async def _post(self, url: httpx.URL, body: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.post(url, headers={"Content-Type": "application/json"}, content=body)
