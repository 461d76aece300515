"""Shared fixtures: fake config and a transport that never touches the network."""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Config


def make_response(payload, status_code: int = 200) -> requests.Response:
    """A real requests.Response carrying payload (JSON-encoded unless already str)."""
    resp = requests.Response()
    resp.status_code = status_code
    body = payload if isinstance(payload, str) else json.dumps(payload)
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


def make_config(**values) -> Config:
    return Config.from_env({k: str(v) for k, v in values.items()})


@pytest.fixture
def fake_session():
    """MagicMock session; set .post.return_value or .post.side_effect per test."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response({})
    return session


@pytest.fixture
def full_config():
    """Every provider with a key and a default token limit (ollama keyless)."""
    values = {}
    for name in ("chatgpt", "claude", "gemini", "deepseek", "mistral", "grok", "openrouter", "groq"):
        values[f"{name.upper()}_API_KEY"] = f"{name}-key"
    for name in ("chatgpt", "claude", "gemini", "deepseek", "mistral", "grok", "ollama", "openrouter", "groq"):
        values[f"{name.upper()}_MAX_TOKENS"] = "256"
    return make_config(**values)
