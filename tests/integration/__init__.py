"""Integration tests for components working together.

Coverage:
    - API streaming endpoint through ASGI transport
    - Full chat turns from controller to API and back

The model service is always replaced by a scripted streamer.
"""
