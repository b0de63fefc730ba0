"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps a positive int and is never reused after deletion
    - Field bounds live here so validators and schemas agree on them
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Field Bounds ────────────────────────────────────────────────

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
CITY_MIN_LENGTH = 2
AGE_MIN = 1
AGE_MAX = 150


# ─── Enums ───────────────────────────────────────────────────────

class UserStatus(str, Enum):
    """Activity filter accepted by /users/status/{status}."""
    ACTIVE = "active"
    INACTIVE = "inactive"

    @property
    def is_active(self) -> bool:
        return self is UserStatus.ACTIVE
