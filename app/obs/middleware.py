"""ASGI middleware that logs each request and its full response."""

from typing import Callable, Any, List
import time

from app.obs.logger import log_event


class RequestResponseLoggingMiddleware:
    """Log method and path, then the status and body of the response.

    The downstream response is buffered in memory, logged, and only then
    replayed to the transport unchanged.
    """

    def __init__(self, app: Any, log_body: bool = True):
        self.app = app
        self.log_body = log_body

    async def __call__(self, scope: dict, receive: Callable, send: Callable[[dict], Any]):
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        method = scope.get("method", "")
        path = scope.get("path", "")
        start = time.monotonic()
        log_event("http_request", method=method, path=path)

        messages: List[dict] = []
        status_code = 500

        async def send_buffer(message: dict):
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 200))
            messages.append(message)

        try:
            await self.app(scope, receive, send_buffer)
        except Exception as e:
            elapsed_ms = (time.monotonic() - start) * 1000.0
            log_event(
                "http_response",
                level="ERROR",
                method=method,
                path=path,
                error=str(e),
                ms_total=round(elapsed_ms, 2),
            )
            raise

        body = b"".join(
            m.get("body", b"") for m in messages if m.get("type") == "http.response.body"
        )
        elapsed_ms = (time.monotonic() - start) * 1000.0
        if self.log_body:
            body_field = {"body": body.decode("utf-8", errors="replace")}
        else:
            body_field = {"body_bytes": len(body)}
        log_event(
            "http_response",
            method=method,
            path=path,
            status=status_code,
            ms_total=round(elapsed_ms, 2),
            **body_field,
        )

        for message in messages:
            await send(message)
