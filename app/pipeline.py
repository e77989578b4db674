"""Compose the ASGI middleware stack in a fixed, explicit order."""

from functools import partial
from typing import Any, Callable, List, Sequence

from app.config import Settings
from app.infrastructure.resilience import ExceptionBoundaryMiddleware
from app.obs.middleware import RequestResponseLoggingMiddleware
from app.security.auth import TokenAuthenticationMiddleware


Stage = Callable[[Any], Any]


def default_stages(settings: Settings) -> List[Stage]:
    """Middleware factories, outermost first."""
    return [
        ExceptionBoundaryMiddleware,
        partial(TokenAuthenticationMiddleware, token=settings.AUTH_TOKEN),
        partial(RequestResponseLoggingMiddleware, log_body=settings.LOG_RESPONSE_BODY),
    ]


def build_pipeline(app: Any, stages: Sequence[Stage]) -> Any:
    """Wrap ``app`` so that ``stages[0]`` is the first to see each request."""
    for stage in reversed(stages):
        app = stage(app)
    return app
