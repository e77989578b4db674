"""Bearer-token gate for every HTTP request."""

import hmac
from typing import Any, Callable, Optional

from app.infrastructure.resilience import send_json_response
from app.obs.logger import log_event
from app.user.errors import AuthenticationError


BEARER_PREFIX = "Bearer "


def _header(scope: dict, name: bytes) -> Optional[str]:
    for key, value in scope.get("headers") or []:
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def check_bearer_token(auth_header: Optional[str], expected_token: str) -> None:
    """Raise AuthenticationError unless the header carries the expected token."""
    if not auth_header or not auth_header.startswith(BEARER_PREFIX):
        raise AuthenticationError(
            AuthenticationError.MISSING_OR_MALFORMED,
            "Unauthorized: Token missing or malformed.",
        )

    token = auth_header[len(BEARER_PREFIX):].strip()
    if not expected_token or not hmac.compare_digest(
        token.encode("utf-8"), expected_token.encode("utf-8")
    ):
        raise AuthenticationError(
            AuthenticationError.INVALID_TOKEN,
            "Unauthorized: Invalid token.",
        )


class TokenAuthenticationMiddleware:
    """Short-circuit with 401 unless ``Authorization: Bearer <token>`` matches."""

    def __init__(self, app: Any, token: str):
        self.app = app
        self.token = token

    async def __call__(self, scope: dict, receive: Callable, send: Callable[[dict], Any]):
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        auth_header = _header(scope, b"authorization")
        try:
            check_bearer_token(auth_header, self.token)
        except AuthenticationError as e:
            log_event(
                "auth_rejected",
                level="WARNING",
                reason=e.reason,
                method=scope.get("method", ""),
                path=scope.get("path", ""),
            )
            await send_json_response(send, {"error": e.message}, status=401)
            return

        await self.app(scope, receive, send)
