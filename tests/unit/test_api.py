"""
Unit tests for the HTTP boundary.

Uses FastAPI's TestClient with a router whose model handles are mocked.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from voxroute.api.app import create_app
from voxroute.intent.models import IntentSchema
from voxroute.providers.base import GenerationResult, LLMProvider, ToolCallRequest
from voxroute.routing import TaskRouter


@pytest.fixture
def model():
    handle = MagicMock(spec=LLMProvider)
    handle.generate = AsyncMock(return_value=GenerationResult())
    return handle


@pytest.fixture
def client(config, model):
    router = TaskRouter(config, model_factory=lambda task: model)
    with TestClient(create_app(router=router)) as c:
        yield c


def _body(**overrides):
    body = {
        "promptId": "p-42",
        "transcript": "run the tests",
        "sessionId": "sess-1",
        "eventType": "EVENT_TYPE_USER_INTENT",
        "availableSessions": [{"id": "sess-1", "command": "bash", "workDir": "/src", "status": "running"}],
        "metadata": {"nupi.lang.english": "English"},
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "tasks": ["history_summary", "user_intent"]}


def test_resolve_action(client, model):
    model.generate.return_value = GenerationResult(object=IntentSchema.model_validate({
        "action": "command", "command": "pytest", "reasoning": "run tests", "confidence": 0.95,
    }))

    response = client.post("/api/v1/intent/resolve", json=_body())

    assert response.status_code == 200
    data = response.json()
    assert data["promptId"] == "p-42"
    assert data["actions"][0]["type"] == "ACTION_TYPE_COMMAND"
    assert data["actions"][0]["sessionRef"] == "sess-1"
    assert data["actions"][0]["command"] == "pytest"
    assert data["confidence"] == 0.95
    assert data["toolCalls"] == []


def test_resolve_tool_use(client, model):
    model.generate.return_value = GenerationResult(
        tool_calls=[ToolCallRequest(id="call-1", name="memory_search", arguments={"query": "tests"})],
    )

    response = client.post("/api/v1/intent/resolve", json=_body(availableTools=[
        {"name": "memory_search", "description": "Search", "parametersJson": '{"type":"object"}'},
    ]))

    data = response.json()
    assert data["actions"][0]["type"] == "ACTION_TYPE_TOOL_USE"
    assert data["toolCalls"] == [{"callId": "call-1", "toolName": "memory_search", "argumentsJson": '{"query": "tests"}'}]
    assert data["confidence"] == 1.0


def test_resolve_accepts_tool_history(client, model):
    response = client.post("/api/v1/intent/resolve", json=_body(toolHistory=[
        {
            "call": {"callId": "c1", "toolName": "memory_search", "argumentsJson": "{}"},
            "result": {"callId": "c1", "resultJson": '{"hits": 0}', "isError": False},
        },
        {"call": None, "result": None},
    ]))

    assert response.status_code == 200
    assert len(model.generate.call_args.kwargs["messages"]) == 4


def test_resolve_drops_deeply_nested_tool_schema(client, model):
    response = client.post("/api/v1/intent/resolve", json=_body(availableTools=[
        {"name": "deep", "description": "", "parametersJson": "[" * 100_000 + "]" * 100_000},
        {"name": "ping", "description": "Ping", "parametersJson": ""},
    ]))

    assert response.status_code == 200
    assert list(model.generate.call_args.kwargs["tools"]) == ["ping"]


def test_missing_task_is_precondition_failure(client):
    response = client.post("/api/v1/intent/resolve", json=_body(eventType="EVENT_TYPE_SESSION_SLUG"))

    assert response.status_code == 412
    assert "session_slug" in response.json()["detail"]


def test_provider_configuration_error_is_internal(build_config):
    config = build_config({"user_intent": ("mystery", "m-1")})
    with TestClient(create_app(config)) as c:
        response = c.post("/api/v1/intent/resolve", json=_body())

    assert response.status_code == 500
    assert "mystery" in response.json()["detail"]


def test_backend_failure_is_soft(client, model):
    model.generate.side_effect = RuntimeError("upstream timeout")

    response = client.post("/api/v1/intent/resolve", json=_body())

    assert response.status_code == 200
    data = response.json()
    assert data["errorMessage"] == "upstream timeout"
    assert data["actions"] == []
    assert data["confidence"] == 0.0


def test_embeddings_without_task_is_soft(client):
    response = client.post("/api/v1/embeddings", json={"texts": ["hello"]})

    assert response.status_code == 200
    data = response.json()
    assert data["embeddings"] == []
    assert "embedding" in data["errorMessage"]
