"""HTTP handlers for the /users resource."""

from functools import wraps
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.infrastructure.resilience import PROBLEM_CONTENT_TYPE, problem_details
from app.obs.logger import log_event
from app.user.errors import ConflictError, NotFoundError, ValidationError
from app.user.models import User, UserIn
from app.user.sanitize import sanitize
from app.user.store import UserStore
from app.user.validation import validate_user


router = APIRouter()


def get_store(request: Request) -> UserStore:
    return request.app.state.user_store


def errors_response(errors: List[str], status_code: int = 400) -> JSONResponse:
    return JSONResponse({"Errors": errors}, status_code=status_code)


def problem_response(exc: BaseException) -> JSONResponse:
    return JSONResponse(
        problem_details(exc),
        status_code=500,
        media_type=PROBLEM_CONTENT_TYPE,
    )


def guarded(handler):
    """Translate service errors into responses and any other failure into a 500."""

    @wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except NotFoundError:
            return Response(status_code=404)
        except (ValidationError, ConflictError) as e:
            return errors_response(e.errors)
        except Exception as e:
            log_event(
                "handler_error",
                level="ERROR",
                handler=handler.__name__,
                error=str(e),
                error_type=type(e).__name__,
            )
            return problem_response(e)

    return wrapper


def _clean(candidate: UserIn) -> UserIn:
    """Validate the raw values, then return their sanitized form."""
    errors = validate_user(candidate)
    if errors:
        raise ValidationError(errors)
    return UserIn(username=sanitize(candidate.username), email=sanitize(candidate.email))


@router.post("/users", status_code=201, response_model=User)
@guarded
def create_user(candidate: UserIn, response: Response, store: UserStore = Depends(get_store)):
    clean = _clean(candidate)
    user = store.create(clean.username, clean.email)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.get("/users", response_model=List[User])
@guarded
def list_users(store: UserStore = Depends(get_store)):
    return store.list()


@router.get("/users/{user_id}", response_model=User)
@guarded
def get_user(user_id: int, store: UserStore = Depends(get_store)):
    user = store.get(user_id)
    if user is None:
        raise NotFoundError(user_id)
    return user


@router.put("/users/{user_id}", response_model=User)
@guarded
def update_user(user_id: int, candidate: UserIn, store: UserStore = Depends(get_store)):
    # Unknown ids are reported before the body is validated
    if store.get(user_id) is None:
        raise NotFoundError(user_id)
    clean = _clean(candidate)
    return store.update(user_id, clean.username, clean.email)


@router.delete("/users/{user_id}", status_code=204)
@guarded
def delete_user(user_id: int, store: UserStore = Depends(get_store)):
    store.delete(user_id)
    return Response(status_code=204)
