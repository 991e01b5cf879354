"""
Server-side entrypoint (FastAPI).

- Exposes `/health`, `/completions` and `/agent/runs` HTTP endpoints.
- Resolves Azure OpenAI / SWE Agent configuration from the environment on
  every request and hands it to the clients in `swebridge`.
- Maps `swebridge` error kinds to HTTP statuses; all outbound HTTP logic lives
  in the package, this file only handles request/response wiring.
"""
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from swebridge import (
    AgentJobClient,
    AgentRunResult,
    BridgeError,
    ChatCompletionClient,
    ConfigurationError,
    RequestConstructionError,
    TransportError,
    agent_config_from_env,
    azure_chat_config_from_env,
)

load_dotenv()

app = FastAPI(title="SWE Bridge", version="0.1.0")


def get_chat_client() -> ChatCompletionClient:
    return ChatCompletionClient()


def get_agent_client() -> AgentJobClient:
    return AgentJobClient()


def _http_error(e: BridgeError) -> HTTPException:
    if isinstance(e, (ConfigurationError, RequestConstructionError)):
        return HTTPException(500, str(e))
    if isinstance(e, TransportError):
        return HTTPException(504, str(e))
    # Upstream status, decode and semantic failures.
    return HTTPException(502, str(e))


@app.get("/health")
async def health() -> dict:
    return {"ok": True}


class CompletionRequest(BaseModel):
    system_prompt: str
    user_prompt: str


class CompletionResponse(BaseModel):
    content: str


@app.post("/completions", response_model=CompletionResponse)
async def completions(
    req: CompletionRequest, client: ChatCompletionClient = Depends(get_chat_client)
) -> CompletionResponse:
    try:
        cfg = azure_chat_config_from_env()
        content = await client.complete(cfg, req.system_prompt, req.user_prompt)
    except BridgeError as e:
        raise _http_error(e)
    return CompletionResponse(content=content)


class AgentRunBody(BaseModel):
    repo: str = Field(..., description="owner/repo")
    issue_number: int = Field(..., ge=1)


@app.post("/agent/runs", response_model=AgentRunResult)
async def agent_runs(
    req: AgentRunBody, client: AgentJobClient = Depends(get_agent_client)
) -> AgentRunResult:
    if "/" not in req.repo:
        raise HTTPException(400, "repo must be in 'owner/repo' format")
    owner, repo = req.repo.split("/", 1)
    try:
        cfg = agent_config_from_env()
        return await client.submit(cfg, owner, repo, req.issue_number)
    except BridgeError as e:
        raise _http_error(e)
