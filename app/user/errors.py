from typing import List


DUPLICATE_EMAIL_MESSAGE = "Email must be unique."


class UserServiceError(Exception):
    """Base class for failures the API translates into a specific status."""


class ValidationError(UserServiceError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class ConflictError(UserServiceError):
    def __init__(self, message: str = DUPLICATE_EMAIL_MESSAGE):
        super().__init__(message)
        self.errors = [message]


class NotFoundError(UserServiceError):
    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class AuthenticationError(UserServiceError):
    MISSING_OR_MALFORMED = "missing_or_malformed"
    INVALID_TOKEN = "invalid_token"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message
