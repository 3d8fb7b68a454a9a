"""NiceGUI chat widget: floating button, modal dialog and message list."""

from nicegui import ui

from seka_portal.chat.controller import ChatSessionController, TextStreamer
from seka_portal.models import ChatMessage, MessageRole
from seka_portal.rendering import sanitize_html

CHAT_CSS = """
<style>
    .ai-message { max-width: 85%; border-radius: 14px; padding: 0.6rem 0.9rem; }
    .ai-message.user {
        align-self: flex-end;
        background: linear-gradient(135deg, #ff2e88 0%, #7b2ff7 100%);
        color: white;
        border-radius: 14px 14px 4px 14px;
    }
    .ai-message.assistant {
        align-self: flex-start;
        background: rgba(255, 255, 255, 0.08);
        color: #e5e7eb;
        border-radius: 14px 14px 14px 4px;
    }
    .ai-message.assistant pre {
        background: #111827; padding: 0.6rem; border-radius: 8px; overflow-x: auto;
    }
    .ai-message.assistant code { font-family: 'Menlo', 'Monaco', monospace; font-size: 0.8rem; }
    .ai-message.assistant ul { list-style: disc; padding-left: 1.2rem; }
    .ai-message.assistant ol { list-style: decimal; padding-left: 1.2rem; }
    .ai-message.assistant a { color: #ff7ab6; text-decoration: underline; }
    .ai-message.error { border: 1px solid rgba(248, 113, 113, 0.6); }
</style>
"""


class NiceGUIChatView:
    """ChatView backed by NiceGUI elements.

    Message bodies go through ui.html with the portal sanitizer, so content
    is cleaned again at insertion even though the controller already
    sanitized it.
    """

    def __init__(
        self,
        messages: ui.column,
        scroll_area: ui.scroll_area,
        prompt_input: ui.input,
        send_button: ui.button,
        loading: ui.element,
    ) -> None:
        self._messages = messages
        self._scroll_area = scroll_area
        self._input = prompt_input
        self._send_button = send_button
        self._loading = loading
        self._bodies: dict[int, ui.html] = {}

    def clear_input(self) -> None:
        self._input.set_value("")

    def set_input_enabled(self, enabled: bool) -> None:
        self._input.set_enabled(enabled)
        self._send_button.set_enabled(enabled)

    def set_loading(self, visible: bool) -> None:
        self._loading.set_visibility(visible)

    def append_message(self, message: ChatMessage) -> None:
        with self._messages:
            body = ui.html(message.html, sanitize=sanitize_html).classes(
                f"ai-message {message.role.value} text-sm leading-relaxed"
            )
        self._bodies[id(message)] = body

    def update_message(self, message: ChatMessage) -> None:
        body = self._bodies[id(message)]
        body.set_content(message.html)
        if message.error:
            body.classes(add="error")

    def scroll_to_bottom(self) -> None:
        self._scroll_area.scroll_to(percent=1.0)

    def focus_input(self) -> None:
        self._input.run_method("focus")


def chat_widget(streamer: TextStreamer) -> ChatSessionController:
    """Build the floating assistant button and its chat dialog.

    Args:
        streamer: Streaming model client used for every turn.

    Returns:
        The controller driving this widget.
    """
    ui.add_head_html(CHAT_CSS)

    with ui.dialog() as dialog, ui.card().classes("w-full max-w-2xl bg-slate-900 text-white"):
        with ui.row().classes("w-full items-center justify-between"):
            with ui.row().classes("items-center gap-2"):
                ui.icon("smart_toy").classes("text-pink-400 text-2xl")
                ui.label("ผู้ช่วย AI").classes("text-lg font-semibold")
            ui.button(icon="close", on_click=dialog.close).props("flat round color=white")

        with ui.scroll_area().classes("w-full h-96") as scroll_area:
            messages = ui.column().classes("w-full gap-3")

        with ui.row().classes("w-full items-center gap-2") as loading:
            ui.spinner("dots", size="lg", color="pink")
            ui.label("กำลังคิด...").classes("text-sm text-gray-400 italic")
        loading.set_visibility(False)

        with ui.row().classes("w-full items-center gap-2 no-wrap"):
            prompt_input = (
                ui.input(placeholder="พิมพ์คำถามของคุณ...")
                .props("dark outlined dense")
                .classes("flex-grow")
            )
            send_button = ui.button(icon="send").props("round unelevated color=pink")

    view = NiceGUIChatView(messages, scroll_area, prompt_input, send_button, loading)
    controller = ChatSessionController(streamer, view)

    async def send() -> None:
        await controller.submit_prompt(prompt_input.value or "")

    send_button.on_click(send)
    prompt_input.on("keydown.enter", send)

    with ui.page_sticky(position="bottom-right", x_offset=24, y_offset=24):
        ui.button(icon="smart_toy", on_click=dialog.open).props("fab color=pink")

    return controller
