"""Serving: ASGI request handling, route dispatch, and server startup."""
