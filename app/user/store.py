"""In-memory user store.

One lock guards both the record list and the identifier counter, so id
allocation, the email uniqueness check and the write happen atomically.
"""

from datetime import datetime, timezone
from typing import List, Optional
import threading

from app.user.errors import ConflictError, NotFoundError
from app.user.models import User


class UserStore:
    """Process-lifetime user collection with a monotonic id counter."""

    def __init__(self):
        self._lock = threading.Lock()
        self._users: List[User] = []
        self._next_id = 1

    def _find(self, user_id: int) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        lowered = email.lower()
        return any(
            u.email.lower() == lowered
            for u in self._users
            if u.id != exclude_id
        )

    def create(self, username: str, email: str) -> User:
        """Insert a record; raises ConflictError on a duplicate email."""
        with self._lock:
            if self._email_taken(email):
                raise ConflictError()
            user = User(
                id=self._next_id,
                username=username,
                email=email,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1
            self._users.append(user)
            return user.model_copy()

    def list(self) -> List[User]:
        with self._lock:
            return [u.model_copy() for u in self._users]

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._find(user_id)
            return user.model_copy() if user else None

    def update(self, user_id: int, username: str, email: str) -> User:
        """Overwrite username and email; id and created_at never change."""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                raise NotFoundError(user_id)
            if self._email_taken(email, exclude_id=user_id):
                raise ConflictError()
            user.username = username
            user.email = email
            return user.model_copy()

    def delete(self, user_id: int) -> None:
        with self._lock:
            user = self._find(user_id)
            if user is None:
                raise NotFoundError(user_id)
            self._users.remove(user)

    def count(self) -> int:
        with self._lock:
            return len(self._users)

