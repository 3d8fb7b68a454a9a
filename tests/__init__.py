"""Test package for Seka School Portal.

Structure:
    - unit/: Controller, rendering, configuration and client tests
    - integration/: API streaming and end-to-end chat turns

No test calls the real model service; streamers are replaced by doubles.
Leverages pytest with pytest-check for soft assertions.
"""
