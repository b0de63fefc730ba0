"""User Store: the in-memory, insertion-ordered collection of user records.

Invariants:
    - Ids are unique and assigned from a monotonic counter; deleted ids are never reused
    - Emails are unique, compared case-insensitively
    - A rejected create/update leaves the store untouched
    - Every read-modify-write runs under self._lock
    - Returned records are the stored objects; callers serialize, never mutate

Design Decisions:
    - Owned object injected into handlers instead of module-level state, so each
      app (and each test) gets its own store
    - threading.Lock over asyncio.Lock: store methods are synchronous and never
      await, so they stay safe if handlers move to a thread pool
"""

import logging
import threading
from datetime import datetime

from users_api.core.domain_types import UserId
from users_api.core.errors import DuplicateEmailError, UserNotFoundError
from users_api.core.user_record import User, utc_now

logger = logging.getLogger(__name__)

SAMPLE_USERS = (
    {"name": "Rahul Sharma", "email": "rahul@example.com", "age": 28, "city": "Delhi", "isActive": True},
    {"name": "Priya Patel", "email": "priya@example.com", "age": 24, "city": "Ahmedabad", "isActive": True},
    {"name": "Amit Kumar", "email": "amit@example.com", "age": 35, "city": "Delhi", "isActive": False},
    {"name": "Sneha Reddy", "email": "sneha@example.com", "age": 30, "city": "Hyderabad", "isActive": True},
    {"name": "Vikram Singh", "email": "vikram@example.com", "age": 42, "city": "Mumbai", "isActive": False},
)


class UserStore:
    """Ordered list of users with id/email uniqueness guarantees."""

    def __init__(self, initial_users: list[dict] | tuple[dict, ...] = ()):
        self._users: list[User] = []
        self._next_id = 1
        self._lock = threading.Lock()
        for data in initial_users:
            self.create(data)

    @classmethod
    def with_sample_users(cls) -> "UserStore":
        return cls(SAMPLE_USERS)

    # ─── Reads ───────────────────────────────────────────────────

    def list_users(self, is_active: bool | None = None) -> list[User]:
        """All users in insertion order, optionally filtered by activity."""
        with self._lock:
            if is_active is None:
                return list(self._users)
            return [u for u in self._users if u.is_active == is_active]

    def get(self, user_id: UserId) -> User:
        with self._lock:
            return self._users[self._index_of(user_id)]

    def find_by_city(self, city: str) -> list[User]:
        """Exact city match, ignoring case."""
        wanted = city.casefold()
        with self._lock:
            return [u for u in self._users if u.city.casefold() == wanted]

    def find_by_status(self, is_active: bool) -> list[User]:
        return self.list_users(is_active=is_active)

    def counts(self) -> dict[str, int]:
        with self._lock:
            active = sum(1 for u in self._users if u.is_active)
            return {
                "total": len(self._users),
                "active": active,
                "inactive": len(self._users) - active,
            }

    def __len__(self) -> int:
        return len(self._users)

    # ─── Mutations ───────────────────────────────────────────────

    def create(self, data: dict, now: datetime | None = None) -> User:
        """Append a new user built from validated camelCase fields.

        Raises:
            DuplicateEmailError: another user already has this email
        """
        with self._lock:
            self._ensure_email_free(data["email"])
            stamp = now or utc_now()
            user = User(
                id=UserId(self._next_id),
                name=data["name"],
                email=data["email"],
                age=data["age"],
                city=data["city"],
                is_active=data.get("isActive", True),
                created_at=stamp,
                updated_at=stamp,
            )
            self._next_id += 1
            self._users.append(user)
        logger.info(f"User {user.id} created", extra={"user_id": user.id})
        return user

    def update(self, user_id: UserId, changes: dict, now: datetime | None = None) -> User:
        """Merge validated camelCase changes over an existing user.

        Raises:
            UserNotFoundError: no user has this id
            DuplicateEmailError: the new email belongs to a different user
        """
        with self._lock:
            user = self._users[self._index_of(user_id)]
            if "email" in changes:
                self._ensure_email_free(changes["email"], except_id=user_id)
            user.apply_changes(changes, now)
        logger.info(f"User {user_id} updated", extra={"user_id": user_id})
        return user

    def delete(self, user_id: UserId) -> User:
        """Remove a user and return the removed record.

        Raises:
            UserNotFoundError: no user has this id
        """
        with self._lock:
            user = self._users.pop(self._index_of(user_id))
        logger.info(f"User {user_id} deleted", extra={"user_id": user_id})
        return user

    # ─── Helpers (caller holds the lock) ─────────────────────────

    def _index_of(self, user_id: UserId) -> int:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        raise UserNotFoundError(user_id)

    def _ensure_email_free(self, email: str, except_id: UserId | None = None) -> None:
        wanted = email.casefold()
        for user in self._users:
            if user.email.casefold() == wanted and user.id != except_id:
                raise DuplicateEmailError(email)
