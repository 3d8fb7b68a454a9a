"""Pydantic models for chat history and dashboard content.

Models:
    - MessageRole: Speaker of a chat message
    - ChatMessage: One entry in the visible chat history
    - DashboardCard: Shortcut card on the main dashboard
    - NavLink: Sidebar and mobile menu link
"""

from enum import Enum

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in the visible chat history.

    The assistant message's text and html grow while its turn streams and
    are left untouched once the turn ends.

    Attributes:
        role: The speaker (user or assistant).
        text: Raw prompt for user messages, accumulated response for assistant messages.
        html: Sanitized HTML shown for the message.
        error: Whether the turn failed and html holds the error message.
    """

    role: MessageRole = Field(..., description="Message role: 'user' or 'assistant'")
    text: str = Field("", description="Raw or accumulated message text")
    html: str = Field("", description="Sanitized HTML rendering of the message")
    error: bool = Field(False, description="Whether this message reports a failed turn")


class DashboardCard(BaseModel):
    """Shortcut card on the main dashboard.

    Attributes:
        title: Card heading.
        description: Short explanation of the section.
        icon: Material icon name.
        url: Link target.
    """

    title: str
    description: str
    icon: str
    url: str = "#"


class NavLink(BaseModel):
    """Link shown in the sidebar and the mobile menu."""

    label: str
    url: str = "#"
    icon: str = "link"
    external: bool = False
