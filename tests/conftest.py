"""Pytest fixtures and shared test configuration.

Fixtures:
    - view: Recording ChatView double
    - fake_streamer: Streamer yielding a short scripted response
    - app: FastAPI app with the agent service replaced by fake_streamer
    - async_client: HTTPX client bound to that app
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from seka_portal.agent.chat_agent import get_agent_service
from seka_portal.api.app import create_app
from tests.doubles import RecordingView, ScriptedStreamer


@pytest.fixture
def view() -> RecordingView:
    """Return a fresh recording view."""
    return RecordingView()


@pytest.fixture
def fake_streamer() -> ScriptedStreamer:
    """Return a streamer producing "Hi there!" in three chunks."""
    return ScriptedStreamer(["Hi", " there", "!"])


@pytest.fixture
def app(fake_streamer: ScriptedStreamer) -> FastAPI:
    """Create the API with the agent service overridden.

    Args:
        fake_streamer: Streamer standing in for the Gemini agent.

    Returns:
        Configured FastAPI application.
    """
    application = create_app()
    application.dependency_overrides[get_agent_service] = lambda: fake_streamer
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
