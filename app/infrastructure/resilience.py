import json
import uuid
from typing import Any, Callable, Dict

from app.obs.context import request_id_var, client_var, clear_context
from app.obs.logger import log_event


PROBLEM_TITLE = "An error occurred while processing your request."
PROBLEM_CONTENT_TYPE = "application/problem+json"


def problem_details(exc: BaseException) -> Dict[str, Any]:
    """Generic 500 body carrying the failure's message."""
    return {
        "title": PROBLEM_TITLE,
        "status": 500,
        "detail": f"Internal server error: {exc}",
    }


async def send_json_response(
    send: Callable,
    data: Dict,
    status: int = 200,
    content_type: str = "application/json",
):
    body = json.dumps(data).encode()
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [
            [b"content-type", content_type.encode()],
            [b"content-length", str(len(body)).encode()],
        ],
    })
    await send({
        "type": "http.response.body",
        "body": body,
    })


class ExceptionBoundaryMiddleware:
    """Outermost stage: no failure reaches the server without a response.

    Also tags the request with an id so every log line of the request can be
    correlated.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        request_id_var.set(str(uuid.uuid4()))
        client = scope.get("client") or ("unknown", None)
        client_var.set(str(client[0]))

        response_started = False

        async def send_wrapper(message: dict):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            log_event(
                "unhandled_exception",
                level="ERROR",
                method=scope.get("method", ""),
                path=scope.get("path", ""),
                error=str(e),
                error_type=type(e).__name__,
            )
            if response_started:
                # Headers are already on the wire; let the server close it
                raise
            await send_json_response(
                send,
                problem_details(e),
                status=500,
                content_type=PROBLEM_CONTENT_TYPE,
            )
        finally:
            clear_context()
