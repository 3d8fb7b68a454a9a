"""FastAPI endpoints for the school portal.

Endpoints:
    - GET /health: Service health status
    - POST /chat/stream: Assistant response as Server-Sent Events
"""

from seka_portal.api.app import app, create_app

__all__ = ["app", "create_app"]
