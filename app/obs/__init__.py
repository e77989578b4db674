"""Observability package.

Structured JSON logging, request-scoped context, and the ASGI middleware that
logs every request and response passing through the pipeline.
"""

__all__ = [
    "middleware",
    "logger",
    "context",
]
