"""Wire models for the two external services.

This module defines:

- The chat-completion request/response shapes for the Azure OpenAI
  deployment endpoint (``ChatCompletionRequest``, ``ChatCompletionResponse``).
  The response shape also carries the optional ``error`` envelope Azure sends
  on failures.

- The SWE Agent ``/run`` request (``AgentRunRequest``) and the job handle it
  returns (``AgentRunResult``). The handle is opaque to us: ``status`` is
  passed back to the caller without interpretation.

Request models hold plain strings; secrets are unwrapped from ``SecretStr``
only at the moment the request body is built.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .config import CHAT_TEMPERATURE, AgentConfig


class ChatMessage(BaseModel):
    role: Literal["system", "user"]
    content: str


class ChatCompletionRequest(BaseModel):
    messages: List[ChatMessage]
    temperature: float = CHAT_TEMPERATURE

    @classmethod
    def from_prompts(cls, system_prompt: str, user_prompt: str) -> "ChatCompletionRequest":
        return cls(
            messages=[
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=user_prompt),
            ],
        )


class CompletionMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class CompletionChoice(BaseModel):
    message: CompletionMessage = Field(default_factory=CompletionMessage)

    @model_validator(mode="before")
    @classmethod
    def _null_choice(cls, data: Any) -> Any:
        return {} if data is None else data

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, v: Any) -> Any:
        return {} if v is None else v


class ErrorEnvelope(BaseModel):
    message: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    choices: List[CompletionChoice] = Field(default_factory=list)
    error: Optional[ErrorEnvelope] = None

    # JSON null anywhere in the envelope decodes as the empty value.
    @model_validator(mode="before")
    @classmethod
    def _null_body(cls, data: Any) -> Any:
        return {} if data is None else data

    @field_validator("choices", mode="before")
    @classmethod
    def _null_choices(cls, v: Any) -> Any:
        return [] if v is None else v


class AgentModelSpec(BaseModel):
    name: str
    api_base: str
    api_version: str
    api_key: str


class AgentSpec(BaseModel):
    model: AgentModelSpec


class ProblemStatement(BaseModel):
    type: str = "github"
    github_url: str


class RepoSpec(BaseModel):
    github_url: str


class EnvSpec(BaseModel):
    repo: RepoSpec


class AgentActions(BaseModel):
    open_pr: bool = True


def issue_url(owner: str, repo: str, issue_number: int) -> str:
    return f"https://github.com/{owner}/{repo}/issues/{issue_number}"


def repo_url(owner: str, repo: str) -> str:
    return f"https://github.com/{owner}/{repo}"


class AgentRunRequest(BaseModel):
    agent: AgentSpec
    problem_statement: ProblemStatement
    env: EnvSpec
    actions: AgentActions = Field(default_factory=AgentActions)
    env_vars: Dict[str, str]

    @classmethod
    def for_issue(cls, config: AgentConfig, owner: str, repo: str, issue_number: int) -> "AgentRunRequest":
        """Ask the agent to work the given GitHub issue and open a PR for it."""
        return cls(
            agent=AgentSpec(
                model=AgentModelSpec(
                    name=config.model_name,
                    api_base=config.model_api_base,
                    api_version=config.api_version,
                    api_key=config.model_api_key.get_secret_value(),
                )
            ),
            problem_statement=ProblemStatement(github_url=issue_url(owner, repo, issue_number)),
            env=EnvSpec(repo=RepoSpec(github_url=repo_url(owner, repo))),
            actions=AgentActions(open_pr=True),
            env_vars={"GITHUB_TOKEN": config.github_token.get_secret_value()},
        )


class AgentRunResult(BaseModel):
    job_id: str = ""
    status: str = ""
    message: str = ""

    @field_validator("job_id", "status", "message", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v
