"""Server-Sent Events endpoint for streamed assistant responses.

Each event carries a StreamChunk serialized as JSON. The stream opens with a
"received" status chunk, continues with one "generating" chunk per text
chunk, and closes with exactly one chunk whose done flag is true.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from seka_portal.agent.chat_agent import AgentService, get_agent_service
from seka_portal.models.schemas import ChatRequest, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])

# Returned to clients instead of the underlying cause
GENERIC_ERROR = "Failed to generate a response"


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(
    request: ChatRequest,
    agent_service: AgentService,
) -> AsyncGenerator[str]:
    """Yield SSE frames for one chat request."""
    yield _sse(StreamChunk(content="", done=False, status=StreamStatus.RECEIVED))

    try:
        async for content in agent_service.stream_response(request.message):
            yield _sse(StreamChunk(content=content, done=False, status=StreamStatus.GENERATING))
    except Exception:
        logger.exception(f"Streaming failed for session {request.session_id or '-'}")
        yield _sse(
            StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=GENERIC_ERROR)
        )
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/stream")
async def chat_stream(
    request: ChatRequest,
    agent_service: Annotated[AgentService, Depends(get_agent_service)],
) -> StreamingResponse:
    """Stream the assistant's response to a prompt as Server-Sent Events.

    Args:
        request: Chat request with the user's message.
        agent_service: Streaming model client.

    Returns:
        text/event-stream response of StreamChunk objects.

    Raises:
        422: Empty or whitespace-only message.
    """
    logger.info(f"Chat stream requested ({len(request.message)} chars)")
    return StreamingResponse(
        _event_stream(request, agent_service),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
