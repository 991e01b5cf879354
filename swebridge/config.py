"""Configuration for the Azure OpenAI and SWE Agent integrations.

Both resolvers read named values (environment variables by default), trim
them, and either return a frozen config object or raise ``ConfigurationError``
listing every missing name at once. Loading a ``.env`` file is left to the
entrypoints (``app.py`` and ``cli.py``).
"""

import os
from typing import Dict, Mapping, Optional, Sequence

import httpx
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .errors import ConfigurationError, InvalidEndpointError

REQUEST_TIMEOUT_SECONDS = 30.0
CHAT_TEMPERATURE = 0.2
DEFAULT_SWE_AGENT_ENDPOINT = "http://localhost:8000"

AZURE_OPENAI_ENDPOINT = "AZURE_OPENAI_ENDPOINT"
AZURE_OPENAI_DEPLOYMENT = "AZURE_OPENAI_DEPLOYMENT"
AZURE_OPENAI_API_VERSION = "AZURE_OPENAI_API_VERSION"
AZURE_OPENAI_API_KEY = "AZURE_OPENAI_API_KEY"
AZURE_OPENAI_API_BASE = "AZURE_OPENAI_API_BASE"
AZURE_OPENAI_MODEL = "AZURE_OPENAI_MODEL"
SWE_AGENT_ENDPOINT = "SWE_AGENT_ENDPOINT"
GITHUB_TOKEN = "GITHUB_TOKEN"

# Declaration order is the order missing names are reported in.
AZURE_CHAT_REQUIRED = (
    AZURE_OPENAI_ENDPOINT,
    AZURE_OPENAI_DEPLOYMENT,
    AZURE_OPENAI_API_VERSION,
    AZURE_OPENAI_API_KEY,
)
SWE_AGENT_REQUIRED = (
    AZURE_OPENAI_API_BASE,
    AZURE_OPENAI_API_KEY,
    AZURE_OPENAI_MODEL,
    AZURE_OPENAI_API_VERSION,
    GITHUB_TOKEN,
)


class AzureChatConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(min_length=1)
    deployment: str = Field(min_length=1)
    api_version: str = Field(min_length=1)
    api_key: SecretStr


class AgentConfig(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    # SWE Agent REST API endpoint, e.g. http://localhost:8000
    endpoint: str = DEFAULT_SWE_AGENT_ENDPOINT
    # Model settings forwarded to the agent, e.g. name "azure/gpt-5-chat"
    model_api_base: str = Field(min_length=1)
    model_api_key: SecretStr
    model_name: str = Field(min_length=1)
    api_version: str = Field(min_length=1)
    github_token: SecretStr


def _read(environ: Mapping[str, str], names: Sequence[str]) -> Dict[str, str]:
    return {name: (environ.get(name) or "").strip() for name in names}


def _require(values: Dict[str, str], required: Sequence[str], label: str) -> None:
    missing = [name for name in required if not values[name]]
    if missing:
        raise ConfigurationError(
            f"missing {label} configuration: {', '.join(missing)}", missing=missing
        )


def _check_endpoint(endpoint: str) -> None:
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidEndpointError(f"invalid {AZURE_OPENAI_ENDPOINT}: not a parseable URL: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidEndpointError(
            f"invalid {AZURE_OPENAI_ENDPOINT}: {endpoint!r} parses, but only absolute http(s) URLs are accepted"
        )


def azure_chat_config_from_env(environ: Optional[Mapping[str, str]] = None) -> AzureChatConfig:
    """Resolve the chat-completion settings from ``environ`` (default: ``os.environ``)."""
    values = _read(os.environ if environ is None else environ, AZURE_CHAT_REQUIRED)
    _require(values, AZURE_CHAT_REQUIRED, "Azure OpenAI")
    _check_endpoint(values[AZURE_OPENAI_ENDPOINT])
    return AzureChatConfig(
        endpoint=values[AZURE_OPENAI_ENDPOINT],
        deployment=values[AZURE_OPENAI_DEPLOYMENT],
        api_version=values[AZURE_OPENAI_API_VERSION],
        api_key=SecretStr(values[AZURE_OPENAI_API_KEY]),
    )


def agent_config_from_env(environ: Optional[Mapping[str, str]] = None) -> AgentConfig:
    """Resolve the SWE Agent settings; the endpoint falls back to the local default.

    The endpoint is taken as given, without URL validation.
    """
    values = _read(os.environ if environ is None else environ, (SWE_AGENT_ENDPOINT,) + SWE_AGENT_REQUIRED)
    _require(values, SWE_AGENT_REQUIRED, "SWE Agent")
    return AgentConfig(
        endpoint=values[SWE_AGENT_ENDPOINT] or DEFAULT_SWE_AGENT_ENDPOINT,
        model_api_base=values[AZURE_OPENAI_API_BASE],
        model_api_key=SecretStr(values[AZURE_OPENAI_API_KEY]),
        model_name=values[AZURE_OPENAI_MODEL],
        api_version=values[AZURE_OPENAI_API_VERSION],
        github_token=SecretStr(values[GITHUB_TOKEN]),
    )
