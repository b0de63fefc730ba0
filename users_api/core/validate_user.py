"""User Validation: explicit per-operation checks over decoded JSON bodies and path values.

Invariants:
    - validate_* functions never raise; they return every failing field, in field order
    - parse_* functions raise a UsersApiError subclass on bad input
    - clean_user_fields() is only called on bodies that validated cleanly
    - Unknown body keys are ignored, never echoed back

Design Decisions:
    - Plain functions over a schema library: each rule is visible and each error
      message is ours to word
    - Id format failures (400) are kept distinct from missing users (404)
"""

import re

from users_api.core.domain_types import (
    AGE_MAX, AGE_MIN, CITY_MIN_LENGTH, NAME_MAX_LENGTH, NAME_MIN_LENGTH,
    UserId, UserStatus,
)
from users_api.core.errors import (
    FieldError, InvalidUserIdError, RequestValidationFailedError,
)

EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$",
)
USER_ID_PATTERN = re.compile(r"^[0-9]+$")

REQUIRED_ON_CREATE = ("name", "email", "age", "city")


def validate_user_create(body: object) -> list[FieldError]:
    """Check a POST /users body. name, email, age and city are required."""
    if not isinstance(body, dict):
        return [FieldError("body", "Request body must be a JSON object")]
    errors = [
        FieldError(name, f"{name.capitalize()} is required")
        for name in REQUIRED_ON_CREATE
        if name not in body
    ]
    errors.extend(_check_present_fields(body))
    return _in_field_order(errors)


def validate_user_update(body: object) -> list[FieldError]:
    """Check a PUT /users/{id} body. Every field is optional."""
    if not isinstance(body, dict):
        return [FieldError("body", "Request body must be a JSON object")]
    return _check_present_fields(body)


def require_valid(errors: list[FieldError]) -> None:
    if errors:
        raise RequestValidationFailedError(errors)


def clean_user_fields(body: dict) -> dict:
    """Keep only known fields, with age normalized to int."""
    cleaned = {
        key: body[key]
        for key in ("name", "email", "age", "city", "isActive")
        if key in body
    }
    if "age" in cleaned:
        cleaned["age"] = int(cleaned["age"])
    return cleaned


def parse_user_id(raw: str) -> UserId:
    """Parse a /users/{id} path segment; digits only."""
    if not USER_ID_PATTERN.match(raw):
        raise InvalidUserIdError(raw)
    return UserId(int(raw))


def parse_active_flag(raw: str | None) -> bool | None:
    """Parse the ?active= query flag. None means no filter."""
    if raw is None:
        return None
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise RequestValidationFailedError(
        [FieldError("active", "Active filter must be 'true' or 'false'")],
    )


def parse_status(raw: str) -> UserStatus:
    try:
        return UserStatus(raw)
    except ValueError:
        raise RequestValidationFailedError(
            [FieldError("status", "Status must be 'active' or 'inactive'")],
        )


# ─── Field rules ─────────────────────────────────────────────────

def _check_present_fields(body: dict) -> list[FieldError]:
    errors: list[FieldError] = []
    for field_name, check in _FIELD_CHECKS:
        if field_name in body:
            message = check(body[field_name])
            if message:
                errors.append(FieldError(field_name, message))
    return errors


def _check_name(value: object) -> str | None:
    if not isinstance(value, str):
        return "Name must be a string"
    if len(value) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters"
    if len(value) > NAME_MAX_LENGTH:
        return f"Name must be at most {NAME_MAX_LENGTH} characters"
    return None


def _check_email(value: object) -> str | None:
    if not isinstance(value, str):
        return "Email must be a string"
    if not EMAIL_PATTERN.match(value):
        return "Invalid email format"
    return None


def _check_age(value: object) -> str | None:
    # bool is an int subclass; true/false are not ages
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "Age must be a number"
    if isinstance(value, float) and not value.is_integer():
        return "Age must be an integer"
    if value < AGE_MIN:
        return f"Age must be at least {AGE_MIN}"
    if value > AGE_MAX:
        return f"Age must be at most {AGE_MAX}"
    return None


def _check_city(value: object) -> str | None:
    if not isinstance(value, str):
        return "City must be a string"
    if len(value) < CITY_MIN_LENGTH:
        return f"City must be at least {CITY_MIN_LENGTH} characters"
    return None


def _check_is_active(value: object) -> str | None:
    if not isinstance(value, bool):
        return "isActive must be a boolean"
    return None


_FIELD_CHECKS = (
    ("name", _check_name),
    ("email", _check_email),
    ("age", _check_age),
    ("city", _check_city),
    ("isActive", _check_is_active),
)

_FIELD_ORDER = {name: i for i, (name, _) in enumerate(_FIELD_CHECKS)}


def _in_field_order(errors: list[FieldError]) -> list[FieldError]:
    return sorted(errors, key=lambda e: _FIELD_ORDER.get(e.field, len(_FIELD_ORDER)))
