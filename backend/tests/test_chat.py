"""Tests for the chat echo service and endpoint."""
import pytest

from civic_assistant.errors import InvalidInputError
from civic_assistant.services.chat import respond


class TestRespond:

    def test_echo(self):
        assert respond("hello") == "You said: hello"

    def test_whitespace_is_kept(self):
        assert respond("  ") == "You said:   "

    @pytest.mark.parametrize("message", ["", None, 42, ["hi"], {"text": "hi"}])
    def test_invalid_input(self, message):
        with pytest.raises(InvalidInputError):
            respond(message)


class TestChatEndpoint:

    async def test_reply(self, client):
        resp = await client.post("/api/chat", json={"message": "How do I get a KRA PIN?"})
        assert resp.status_code == 200
        assert resp.json() == {"reply": "You said: How do I get a KRA PIN?"}

    async def test_empty_message(self, client):
        resp = await client.post("/api/chat", json={"message": ""})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Message is required and must be a string"}

    async def test_non_string_message(self, client):
        resp = await client.post("/api/chat", json={"message": 42})
        assert resp.status_code == 400
        assert "error" in resp.json()

    async def test_missing_message(self, client):
        resp = await client.post("/api/chat", json={})
        assert resp.status_code == 400

    async def test_malformed_json(self, client):
        resp = await client.post(
            "/api/chat", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400
        assert "error" in resp.json()
