"""Chat assistant interaction logic.

Responsibilities:
    - Turn lifecycle and control state (ChatSessionController)
    - Streaming text over HTTP for split UI/API deployments (ApiStreamClient)

Independent of any UI toolkit; the NiceGUI widget implements ChatView.
"""

from seka_portal.chat.controller import (
    ERROR_MESSAGE,
    ChatSessionController,
    ChatView,
    TextStreamer,
    TurnOutcome,
    TurnState,
)
from seka_portal.chat.stream_client import ApiStreamClient

__all__ = [
    "ERROR_MESSAGE",
    "ApiStreamClient",
    "ChatSessionController",
    "ChatView",
    "TextStreamer",
    "TurnOutcome",
    "TurnState",
]
