"""swebridge public API.

Exposes the two clients (Azure OpenAI chat completions and SWE Agent job
submission), their config resolvers, and the error kinds they raise.
"""

from .azure_openai import ChatCompletionClient
from .config import AgentConfig, AzureChatConfig, agent_config_from_env, azure_chat_config_from_env
from .errors import (
    BridgeError,
    ConfigurationError,
    DecodeError,
    EmptyCompletionError,
    InvalidEndpointError,
    NoCompletionError,
    RequestConstructionError,
    SemanticError,
    TransportError,
    UpstreamStatusError,
)
from .models import AgentRunResult
from .swe_agent import AgentJobClient
