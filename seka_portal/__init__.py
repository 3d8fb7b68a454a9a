"""Seka School Portal - school administration dashboard with an AI assistant.

Combines NiceGUI for the dashboard and chat widget, Agno with Gemini for
streamed generation, FastAPI for HTTP streaming, and Pydantic for data
validation.

Components:
    - agent: Gemini-backed streaming text generation
    - chat: Chat session controller and streaming clients
    - rendering: Markdown rendering and HTML sanitization
    - api: HTTP endpoints and streaming responses
    - ui: Dashboard page and chat widget
    - models: Chat and dashboard data models
"""

__version__ = "0.1.0"
