"""ASGI response sending, default error pages, and the dev server."""
