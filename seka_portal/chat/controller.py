"""Chat session controller for the assistant widget.

Owns the lifecycle of one user turn: validate the prompt, append the user
and assistant messages, stream the model response into the assistant
message, and restore the input controls whatever happens.

The controller is UI-agnostic. It drives a ChatView port and reads from any
streamer exposing ``stream_response(prompt)``; both are injected so the
NiceGUI widget, the HTTP client and test doubles are interchangeable.

State machine per turn:

    IDLE -> SENDING -> (STREAMING)* -> {COMPLETED | FAILED} -> IDLE

Controls are enabled only in IDLE. A call to submit_prompt while a turn is
in flight is ignored, so at most one stream is open at a time.
"""

import logging
from collections.abc import AsyncIterator, Callable
from enum import Enum
from typing import Protocol

from seka_portal.models import ChatMessage, MessageRole
from seka_portal.rendering import (
    render_assistant_text,
    render_markdown,
    render_user_text,
    sanitize_html,
)

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "ขออภัยครับ เกิดข้อผิดพลาดบางอย่าง โปรดลองอีกครั้ง"


class TurnState(str, Enum):
    """Whether a turn is in flight, and how far it got."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"


class TurnOutcome(str, Enum):
    """How the last finished turn ended."""

    COMPLETED = "completed"
    FAILED = "failed"


class TextStreamer(Protocol):
    """Anything that streams generated text for a prompt."""

    def stream_response(self, prompt: str) -> AsyncIterator[str]: ...


class ChatView(Protocol):
    """Surface the controller renders into.

    All HTML passed to append_message and update_message is already
    sanitized.
    """

    def clear_input(self) -> None: ...

    def set_input_enabled(self, enabled: bool) -> None: ...

    def set_loading(self, visible: bool) -> None: ...

    def append_message(self, message: ChatMessage) -> None: ...

    def update_message(self, message: ChatMessage) -> None: ...

    def scroll_to_bottom(self) -> None: ...

    def focus_input(self) -> None: ...


class ChatSessionController:
    """Runs chat turns against a streamer and mirrors them into a view."""

    def __init__(
        self,
        streamer: TextStreamer,
        view: ChatView,
        render: Callable[[str], str] = render_markdown,
        error_message: str = ERROR_MESSAGE,
    ) -> None:
        """Initialize the controller.

        Args:
            streamer: Streaming-capable model client.
            view: UI surface receiving messages and control state.
            render: Markdown-to-HTML function applied to the accumulated text.
            error_message: Text shown in place of the response when a turn fails.
        """
        self._streamer = streamer
        self._view = view
        self._render = render
        self._error_message = error_message
        self._history: list[ChatMessage] = []
        self._state = TurnState.IDLE
        self._last_outcome: TurnOutcome | None = None

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is not TurnState.IDLE

    @property
    def history(self) -> tuple[ChatMessage, ...]:
        return tuple(self._history)

    @property
    def last_outcome(self) -> TurnOutcome | None:
        return self._last_outcome

    def _transition(self, state: TurnState) -> None:
        self._state = state
        self._view.set_input_enabled(state is TurnState.IDLE)
        self._view.set_loading(state is not TurnState.IDLE)

    def _append(self, message: ChatMessage) -> None:
        self._history.append(message)
        self._view.append_message(message)

    async def submit_prompt(self, prompt_text: str) -> None:
        """Run one turn for the given prompt.

        Empty or whitespace-only prompts are ignored, as is any call made
        while another turn is still in flight. Failures are shown in the
        assistant message and logged; they never propagate to the caller.

        Args:
            prompt_text: Text typed by the user.
        """
        prompt = prompt_text.strip()
        if not prompt:
            return
        if self.is_busy:
            logger.debug("Ignoring prompt submitted while a turn is in flight")
            return

        self._view.clear_input()
        self._transition(TurnState.SENDING)

        self._append(
            ChatMessage(role=MessageRole.USER, text=prompt, html=render_user_text(prompt))
        )
        assistant = ChatMessage(role=MessageRole.ASSISTANT, html=sanitize_html(""))
        self._append(assistant)
        self._view.scroll_to_bottom()

        outcome = TurnOutcome.FAILED
        try:
            accumulated = ""
            async for chunk in self._streamer.stream_response(prompt):
                if self._state is TurnState.SENDING:
                    self._transition(TurnState.STREAMING)
                accumulated += chunk
                assistant.text = accumulated
                assistant.html = render_assistant_text(accumulated, self._render)
                self._view.update_message(assistant)
                self._view.scroll_to_bottom()
            outcome = TurnOutcome.COMPLETED
        except Exception:
            logger.exception("Error generating content")
            assistant.text = self._error_message
            assistant.html = sanitize_html(self._error_message)
            assistant.error = True
            self._view.update_message(assistant)
        finally:
            self._last_outcome = outcome
            self._transition(TurnState.IDLE)
            self._view.focus_input()

        logger.info(f"Chat turn {outcome.value} ({len(assistant.text)} chars)")
