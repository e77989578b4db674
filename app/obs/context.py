"""Request context helpers using ContextVars.

The exception boundary assigns a request id per HTTP request; every log line
emitted while serving that request picks it up automatically.
"""

from contextvars import ContextVar
from typing import Optional


# Public ContextVars (names are stable API)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
client_var: ContextVar[Optional[str]] = ContextVar("client", default=None)


def clear_context() -> None:
    """Reset context variables to defaults."""
    request_id_var.set(None)
    client_var.set(None)
