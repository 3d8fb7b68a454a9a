"""Unit tests for ChatSessionController."""

import asyncio
import logging

import pytest
import pytest_check as check

from seka_portal.chat.controller import (
    ERROR_MESSAGE,
    ChatSessionController,
    TurnOutcome,
    TurnState,
)
from seka_portal.models import MessageRole
from seka_portal.rendering import render_markdown, sanitize_html
from tests.doubles import GatedStreamer, RecordingView, ScriptedStreamer, SteppedStreamer


class TestPromptGuards:
    """Tests for prompts that must not start a turn."""

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t  \n"])
    async def test_blank_prompt_is_ignored(self, prompt: str, view: RecordingView) -> None:
        """Blank prompts append nothing and issue no request."""
        streamer = ScriptedStreamer(["unused"])
        controller = ChatSessionController(streamer, view)

        await controller.submit_prompt(prompt)

        check.equal(controller.history, ())
        check.equal(streamer.prompts, [])
        check.equal(view.events, [])
        check.equal(controller.state, TurnState.IDLE)

    async def test_prompt_is_trimmed_before_sending(self, view: RecordingView) -> None:
        """Surrounding whitespace is stripped from the prompt and user message."""
        streamer = ScriptedStreamer(["ok"])
        controller = ChatSessionController(streamer, view)

        await controller.submit_prompt("  Hello \n")

        check.equal(streamer.prompts, ["Hello"])
        check.equal(controller.history[0].text, "Hello")

    async def test_submit_while_in_flight_is_ignored(self, view: RecordingView) -> None:
        """A second prompt during an open stream starts no second turn."""
        streamer = GatedStreamer(["done"])
        controller = ChatSessionController(streamer, view)

        first = asyncio.create_task(controller.submit_prompt("first"))
        await streamer.started.wait()

        check.is_true(controller.is_busy)
        check.is_false(view.input_enabled)

        await controller.submit_prompt("second")

        check.equal(streamer.prompts, ["first"])
        check.equal(len(controller.history), 2)

        streamer.release.set()
        await first

        check.equal(len(controller.history), 2)
        check.equal(controller.state, TurnState.IDLE)
        check.is_true(view.input_enabled)


class TestTurnStates:
    """Tests for state transitions within one turn."""

    async def test_sending_then_streaming_then_idle(self, view: RecordingView) -> None:
        """State is SENDING until the first chunk, STREAMING after it, IDLE at the end."""
        streamer = SteppedStreamer("Hi", [" there"])
        controller = ChatSessionController(streamer, view)

        turn = asyncio.create_task(controller.submit_prompt("Hello"))
        await streamer.started.wait()

        check.equal(controller.state, TurnState.SENDING)
        check.equal(controller.history[1].text, "")

        streamer.release.set()
        await streamer.first_sent.wait()
        await asyncio.sleep(0)

        check.equal(controller.state, TurnState.STREAMING)
        check.equal(controller.history[1].text, "Hi")
        check.is_false(view.input_enabled)
        check.is_true(view.loading)

        streamer.finish.set()
        await turn

        check.equal(controller.state, TurnState.IDLE)
        check.equal(controller.history[1].text, "Hi there")

    async def test_streaming_transition_reaches_view(self, view: RecordingView) -> None:
        """Entering STREAMING re-applies the in-flight control state to the view."""
        controller = ChatSessionController(ScriptedStreamer(["a", "b"]), view)

        await controller.submit_prompt("Hello")

        first_update = view.events.index(("update", "assistant"))
        assert view.events[first_update - 2 : first_update] == [
            ("input_enabled", False),
            ("loading", True),
        ]
        assert view.events.count(("input_enabled", False)) == 2


class TestSuccessfulTurn:
    """Tests for turns whose stream completes."""

    async def test_appends_user_then_assistant_message(
        self, view: RecordingView, fake_streamer: ScriptedStreamer
    ) -> None:
        """Exactly one user and one assistant message are appended, in order."""
        controller = ChatSessionController(fake_streamer, view)

        await controller.submit_prompt("Hello")

        roles = [message.role for message in controller.history]
        assert roles == [MessageRole.USER, MessageRole.ASSISTANT]
        assert view.messages == list(controller.history)

    async def test_streamed_chunks_rendered_cumulatively(
        self, view: RecordingView, fake_streamer: ScriptedStreamer
    ) -> None:
        """Each chunk re-renders the full accumulated text."""
        rendered: list[str] = []

        def spy_render(text: str) -> str:
            rendered.append(text)
            return render_markdown(text)

        controller = ChatSessionController(fake_streamer, view, render=spy_render)

        await controller.submit_prompt("Hello")

        assistant = controller.history[1]
        check.equal(rendered, ["Hi", "Hi there", "Hi there!"])
        check.equal(assistant.text, "Hi there!")
        check.equal(assistant.html, sanitize_html(render_markdown("Hi there!")))
        check.equal(len(view.snapshots), 3)
        check.is_false(assistant.error)
        check.equal(controller.last_outcome, TurnOutcome.COMPLETED)

    async def test_markdown_response_rendered_as_html(self, view: RecordingView) -> None:
        """Markdown in the response becomes HTML in the assistant message."""
        streamer = ScriptedStreamer(["**bold** and ", "`code`"])
        controller = ChatSessionController(streamer, view)

        await controller.submit_prompt("format please")

        html = controller.history[1].html
        check.is_in("<strong>bold</strong>", html)
        check.is_in("<code>code</code>", html)

    async def test_ui_effects_follow_turn_sequence(
        self, view: RecordingView, fake_streamer: ScriptedStreamer
    ) -> None:
        """Controls lock before messages appear and unlock after the stream."""
        controller = ChatSessionController(fake_streamer, view)

        await controller.submit_prompt("Hello")

        assert view.events[:6] == [
            ("clear_input",),
            ("input_enabled", False),
            ("loading", True),
            ("append", "user"),
            ("append", "assistant"),
            ("scroll",),
        ]
        assert view.events[-3:] == [
            ("input_enabled", True),
            ("loading", False),
            ("focus",),
        ]
        updates = [event for event in view.events if event[0] == "update"]
        scrolls = [event for event in view.events if event[0] == "scroll"]
        assert len(updates) == 3
        assert len(scrolls) == 4

    async def test_state_returns_to_idle(
        self, view: RecordingView, fake_streamer: ScriptedStreamer
    ) -> None:
        """Controls are enabled and loading hidden once the turn completes."""
        controller = ChatSessionController(fake_streamer, view)

        await controller.submit_prompt("Hello")

        check.equal(controller.state, TurnState.IDLE)
        check.is_false(controller.is_busy)
        check.is_true(view.input_enabled)
        check.is_false(view.loading)

    async def test_consecutive_turns_extend_history(self, view: RecordingView) -> None:
        """History is append-only across turns."""
        controller = ChatSessionController(ScriptedStreamer(["one"]), view)
        await controller.submit_prompt("first")
        first_turn = controller.history

        controller._streamer = ScriptedStreamer(["two"])
        await controller.submit_prompt("second")

        check.equal(len(controller.history), 4)
        check.equal(controller.history[:2], first_turn)
        check.equal(controller.history[2].text, "second")
        check.equal(controller.history[3].text, "two")


class TestFailedTurn:
    """Tests for turns whose stream raises."""

    async def test_error_replaces_partial_content(self, view: RecordingView) -> None:
        """A failure mid-stream discards partial text for the error message."""
        streamer = ScriptedStreamer(["partial"], error=ConnectionError("stream dropped"))
        controller = ChatSessionController(streamer, view)

        await controller.submit_prompt("test")

        assistant = controller.history[1]
        check.equal(assistant.html, sanitize_html(ERROR_MESSAGE))
        check.equal(assistant.text, ERROR_MESSAGE)
        check.is_true(assistant.error)
        check.is_true(view.input_enabled)
        check.is_false(view.loading)
        check.equal(view.events[-1], ("focus",))
        check.equal(controller.last_outcome, TurnOutcome.FAILED)

    async def test_error_is_logged_not_raised(
        self, view: RecordingView, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Failures reach the operator log and do not propagate."""
        streamer = ScriptedStreamer([], error=RuntimeError("quota exceeded"))
        controller = ChatSessionController(streamer, view)

        with caplog.at_level(logging.ERROR, logger="seka_portal.chat.controller"):
            await controller.submit_prompt("test")

        assert "Error generating content" in caplog.text
        assert "quota exceeded" in caplog.text

    async def test_custom_error_message_is_sanitized(self, view: RecordingView) -> None:
        """A configured error message goes through the sanitizer too."""
        streamer = ScriptedStreamer([], error=RuntimeError("boom"))
        controller = ChatSessionController(
            streamer, view, error_message="Oops <script>alert(1)</script>"
        )

        await controller.submit_prompt("test")

        html = controller.history[1].html
        assert "<script" not in html
        assert "Oops" in html

    async def test_controller_usable_after_failure(self, view: RecordingView) -> None:
        """A failed turn leaves the controller ready for the next prompt."""
        controller = ChatSessionController(
            ScriptedStreamer([], error=RuntimeError("boom")), view
        )
        await controller.submit_prompt("first")

        controller._streamer = ScriptedStreamer(["recovered"])
        await controller.submit_prompt("again")

        check.equal(controller.history[3].text, "recovered")
        check.equal(controller.last_outcome, TurnOutcome.COMPLETED)


class TestSanitization:
    """Tests for markup injection through prompts and responses."""

    async def test_script_in_prompt_is_not_executable(
        self, view: RecordingView, fake_streamer: ScriptedStreamer
    ) -> None:
        """User-typed markup is escaped in the user message."""
        controller = ChatSessionController(fake_streamer, view)

        await controller.submit_prompt("<script>alert(1)</script>")

        user = controller.history[0]
        check.equal(user.text, "<script>alert(1)</script>")
        check.is_not_in("<script", user.html)
        check.is_in("&lt;script&gt;", user.html)

    async def test_unsafe_render_output_is_sanitized(self, view: RecordingView) -> None:
        """HTML produced by the renderer is cleaned before reaching the view."""
        controller = ChatSessionController(
            ScriptedStreamer(["anything"]),
            view,
            render=lambda text: f'<p onclick="steal()">{text}</p><script>alert(1)</script>',
        )

        await controller.submit_prompt("hi")

        html = controller.history[1].html
        check.equal(html, "<p>anything</p>")
        for snapshot in view.snapshots:
            check.is_not_in("<script", snapshot)
