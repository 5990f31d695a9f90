import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["OPENAI_MODEL"] = "gpt-4o-mini"
os.environ["TOKEN_COUNTER"] = "approximate"
os.environ["RATE_LIMIT_PER_MINUTE"] = "1000"

from app.core.config import get_settings
from app.main import create_app

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def mock_llm(monkeypatch):
    prompts: list[str] = []

    def _fake_summarize_chat(prompt):
        prompts.append(prompt)
        return "#### Summary of Conversations\n- Marco proposed a Saturday hike; Sam picked the lake trail."

    monkeypatch.setattr("app.routers.digest.summarize_chat", _fake_summarize_chat)
    return prompts


@pytest.fixture(autouse=True)
def reset_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def chat_text() -> str:
    return (FIXTURES / "whatsapp_chat.txt").read_text(encoding="utf-8")


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
