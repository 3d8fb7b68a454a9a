"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Controller turn lifecycle and HTTP stream client
    - rendering/: Markdown conversion and sanitization
    - agent/: Configuration and Agno stream handling

Uses test doubles for the view and the streamer. Leverages pytest-check
for multiple assertions per test.
"""
