"""Integration tests for components working together as a system.

No mocks - the client talks to the development service in-process.

Coverage:
    - Service endpoints with real HTTP requests
    - Full chat workflow from authentication to feedback
"""
