import httpx
import pytest
from fastapi.testclient import TestClient

import app as server
from swebridge import AgentJobClient, ChatCompletionClient

CHAT_ENV = {
    "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com",
    "AZURE_OPENAI_DEPLOYMENT": "gpt-4o",
    "AZURE_OPENAI_API_VERSION": "2024-06-01",
    "AZURE_OPENAI_API_KEY": "chat-secret",
}

AGENT_ENV = {
    "AZURE_OPENAI_API_BASE": "https://example.openai.azure.com",
    "AZURE_OPENAI_API_KEY": "model-secret",
    "AZURE_OPENAI_MODEL": "azure/gpt-5-chat",
    "AZURE_OPENAI_API_VERSION": "2024-06-01",
    "GITHUB_TOKEN": "gh-secret",
}


@pytest.fixture
def client():
    yield TestClient(server.app)
    server.app.dependency_overrides.clear()


@pytest.fixture
def env(monkeypatch):
    for name in set(CHAT_ENV) | set(AGENT_ENV) | {"SWE_AGENT_ENDPOINT"}:
        monkeypatch.delenv(name, raising=False)

    def apply(values):
        for name, value in values.items():
            monkeypatch.setenv(name, value)

    return apply


def _upstream(handler):
    transport = httpx.MockTransport(handler)
    server.app.dependency_overrides[server.get_chat_client] = lambda: ChatCompletionClient(transport=transport)
    server.app.dependency_overrides[server.get_agent_client] = lambda: AgentJobClient(transport=transport)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_completions(client, env):
    env(CHAT_ENV)
    _upstream(lambda request: httpx.Response(200, json={"choices": [{"message": {"content": " hi "}}]}))

    r = client.post("/completions", json={"system_prompt": "s", "user_prompt": "u"})

    assert r.status_code == 200
    assert r.json() == {"content": "hi"}


def test_completions_missing_config(client, env):
    env({})
    r = client.post("/completions", json={"system_prompt": "s", "user_prompt": "u"})
    assert r.status_code == 500
    assert "AZURE_OPENAI_ENDPOINT" in r.json()["detail"]


def test_completions_upstream_failure(client, env):
    env(CHAT_ENV)
    _upstream(lambda request: httpx.Response(429, json={"error": {"message": "rate limited"}}))

    r = client.post("/completions", json={"system_prompt": "s", "user_prompt": "u"})

    assert r.status_code == 502
    assert "rate limited" in r.json()["detail"]


def test_completions_transport_failure(client, env):
    env(CHAT_ENV)

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _upstream(handler)
    r = client.post("/completions", json={"system_prompt": "s", "user_prompt": "u"})
    assert r.status_code == 504


def test_agent_runs(client, env):
    env(AGENT_ENV)
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json={"job_id": "abc", "status": "queued", "message": ""})

    _upstream(handler)
    r = client.post("/agent/runs", json={"repo": "acme/widgets", "issue_number": 42})

    assert r.status_code == 200
    assert r.json() == {"job_id": "abc", "status": "queued", "message": ""}
    assert str(seen[0].url) == "http://localhost:8000/run"


def test_agent_runs_rejects_bad_repo(client, env):
    env(AGENT_ENV)
    r = client.post("/agent/runs", json={"repo": "widgets", "issue_number": 42})
    assert r.status_code == 400


def test_agent_runs_missing_config(client, env):
    env({"GITHUB_TOKEN": "gh-secret"})
    r = client.post("/agent/runs", json={"repo": "acme/widgets", "issue_number": 42})
    assert r.status_code == 500
    assert "GITHUB_TOKEN" not in r.json()["detail"]
    assert "AZURE_OPENAI_MODEL" in r.json()["detail"]
