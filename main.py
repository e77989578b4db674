from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from dotenv import load_dotenv

from app.config import Settings, settings as default_settings
from app.obs.logger import log_event
from app.pipeline import build_pipeline, default_stages
from app.user.handlers import errors_response, get_store, router as users_router
from app.user.store import UserStore

load_dotenv()


def _format_request_errors(exc: RequestValidationError) -> list:
    messages = []
    for err in exc.errors():
        loc = err.get("loc", ())
        field = ".".join(str(part) for part in loc[1:]) or "Request body"
        messages.append(f"{field}: {err.get('msg', 'Invalid value')}")
    return messages


def create_api(store: Optional[UserStore] = None) -> FastAPI:
    """Bare FastAPI application, without the middleware pipeline."""
    api = FastAPI(
        title="User Management API",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    api.state.user_store = store if store is not None else UserStore()

    @api.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # A non-integer id does not match the route at all
        if any((err.get("loc") or ("",))[0] == "path" for err in exc.errors()):
            return Response(status_code=404)
        return errors_response(_format_request_errors(exc))

    @api.get("/health")
    def health(request: Request):
        return {
            "status": "healthy",
            "service": "user-management-api",
            "users": get_store(request).count(),
        }

    api.include_router(users_router)
    return api


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None):
    """FastAPI application wrapped in the exception/auth/logging pipeline."""
    settings = settings or default_settings
    if not settings.AUTH_TOKEN:
        log_event("startup", level="WARNING", message="AUTH_TOKEN is empty; every request will be rejected")
    log_event("startup", app_env=settings.APP_ENV)
    return build_pipeline(create_api(store), default_stages(settings))


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.APP_ENV == "dev",
        log_level="info"
    )
