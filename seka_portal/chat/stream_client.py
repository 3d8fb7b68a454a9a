"""HTTP streamer consuming the /chat/stream SSE endpoint.

Used when the UI runs in its own process and talks to the API over HTTP.
Exposes the same stream_response contract as AgentService.
"""

import logging
from collections.abc import AsyncGenerator

import httpx
from pydantic import ValidationError

from seka_portal.agent.chat_agent import GenerationError
from seka_portal.models.schemas import StreamChunk

logger = logging.getLogger(__name__)


class ApiStreamClient:
    """Streams generated text from the portal API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def stream_response(self, prompt: str) -> AsyncGenerator[str]:
        """Stream response chunks for a prompt.

        Args:
            prompt: The user's prompt.

        Yields:
            Content of each SSE chunk until the final one.

        Raises:
            GenerationError: On error chunks, HTTP errors and connection failures.
        """
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                async with client.stream(
                    "POST",
                    "/chat/stream",
                    json={"message": prompt},
                    headers={"Accept": "text/event-stream"},
                ) as response:
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line.startswith("data: "):
                            continue
                        chunk = StreamChunk.model_validate_json(line.removeprefix("data: "))
                        if chunk.error:
                            raise GenerationError(chunk.error)
                        if chunk.done:
                            return
                        if chunk.content:
                            yield chunk.content
            except httpx.HTTPStatusError as e:
                raise GenerationError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise GenerationError(f"Connection failed: {e}") from e
            except ValidationError as e:
                raise GenerationError(f"Malformed stream chunk: {e}") from e

        # Stream closed without a final chunk
        raise GenerationError("Stream ended unexpectedly")
