"""User Record: the single entity held by the store.

Invariants:
    - created_at is set once; updated_at is restamped on every update
    - apply_changes() only touches fields present in the changes mapping
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from users_api.core.domain_types import UserId

# camelCase wire name -> dataclass attribute, for fields a client may set
MUTABLE_FIELDS = {
    "name": "name",
    "email": "email",
    "age": "age",
    "city": "city",
    "isActive": "is_active",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A user in the directory."""
    id: UserId
    name: str
    email: str
    age: int
    city: str
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def apply_changes(self, changes: dict, now: datetime | None = None) -> None:
        """Merge validated camelCase changes over this record and restamp updated_at."""
        for wire_name, attr in MUTABLE_FIELDS.items():
            if wire_name in changes:
                setattr(self, attr, changes[wire_name])
        self.updated_at = now or utc_now()
