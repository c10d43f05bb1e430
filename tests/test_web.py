"""
Test Web UI
===========

Tests for the FastAPI routes using the test client.
"""

import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from core.config import Config
from services.chat_service import ChatService
from ui.web.app import create_app


class BrokenService(ChatService):
    """Chat service whose every turn fails unexpectedly."""

    def ask(self, query):
        raise RuntimeError("boom")


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def client(config):
    return TestClient(create_app(config=config))


class TestChatEndpoint:
    """Tests for POST /api/chat."""

    def test_calculation(self, client):
        response = client.post("/api/chat", json={
            "messages": [{"role": "user", "content": "calculate 10 + 5"}]
        })

        assert response.status_code == 200
        data = response.json()
        assert "**10 + 5 = 15**" in data["content"]
        assert data["tool_invocations"] == [
            {"name": "calculator", "input": "calculate 10 + 5", "result": "10 + 5 = 15"}
        ]

    def test_no_tools_omits_invocations(self, client):
        response = client.post("/api/chat", json={
            "messages": [{"role": "user", "content": "hello"}]
        })

        assert response.status_code == 200
        assert "tool_invocations" not in response.json()

    def test_history_from_browser(self, client):
        """Test a transcript in the browser's shape is accepted."""
        response = client.post("/api/chat", json={"messages": [
            {"role": "user", "content": "search for cats"},
            {
                "role": "assistant",
                "content": "...",
                "toolCalls": [{"name": "web_search", "input": "cats", "result": "x"}],
            },
            {"role": "user", "content": "hello"},
        ]})

        assert response.status_code == 200

    @pytest.mark.parametrize("body", [
        {"messages": []},
        {},
        {"messages": [{"role": "assistant", "content": "hi"}]},
        {"messages": [{"role": "robot", "content": "hi"}]},
        {"messages": "hello"},
        {"messages": [1, 2]},
    ])
    def test_malformed(self, client, body):
        response = client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid message format"}

    def test_invalid_json(self, client):
        response = client.post(
            "/api/chat",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_internal_error(self, config):
        """Test unexpected failures give a generic 500 with no partial reply."""
        client = TestClient(create_app(config=config, service=BrokenService(config=config)))
        response = client.post("/api/chat", json={
            "messages": [{"role": "user", "content": "hello"}]
        })

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestInfoEndpoints:
    """Tests for the read-only endpoints."""

    def test_tools(self, client):
        response = client.get("/api/tools")

        assert response.status_code == 200
        tools = response.json()["tools"]
        assert [t["name"] for t in tools][:2] == ["web_search", "calculator"]

    def test_rules(self, client):
        data = client.get("/api/rules").json()

        assert len(data["selection"]) == 6
        assert data["response"][0]["name"] == "calculation"

    def test_status(self, client):
        data = client.get("/api/status").json()

        assert data["app"] == "Elite AI Agent"
        assert data["version"] == "1.0.0"
        assert data["tools"] == 6
        assert "timestamp" in data


class TestChatPage:
    """Tests for the HTML page and static files."""

    def test_index(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Elite AI Agent" in response.text
        assert "Perform calculations" in response.text
        assert 'id="chat-input"' in response.text

    def test_static_assets(self, client):
        assert client.get("/static/js/chat.js").status_code == 200
        assert client.get("/static/css/chat.css").status_code == 200

    def test_markdown_rendered_from_raw_text(self, client):
        """Test replies are parsed as markdown first and sanitized afterwards."""
        script = client.get("/static/js/chat.js").text

        assert "marked.parse(text)" in script
        assert "marked.parse(escapeHtml" not in script
        assert "DOMPurify.sanitize(html)" in script

    def test_page_loads_sanitizer_before_client(self, client):
        page = client.get("/").text
        assert page.index("purify.min.js") < page.index("js/chat.js")
