import json

import httpx
import pytest
from pydantic import SecretStr

from swebridge.config import AgentConfig, AzureChatConfig


@pytest.fixture
def chat_config():
    return AzureChatConfig(
        endpoint="https://example.openai.azure.com",
        deployment="gpt-4o",
        api_version="2024-06-01",
        api_key=SecretStr("chat-secret"),
    )


@pytest.fixture
def agent_config():
    return AgentConfig(
        endpoint="http://agent.local:8000/",
        model_api_base="https://example.openai.azure.com",
        model_api_key=SecretStr("model-secret"),
        model_name="azure/gpt-5-chat",
        api_version="2024-06-01",
        github_token=SecretStr("gh-secret"),
    )


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def recorder():
    def make(status_code: int, **kwargs) -> Recorder:
        return Recorder(httpx.Response(status_code, **kwargs))

    return make
