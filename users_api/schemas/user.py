"""User Schemas: response contracts for the /users endpoints.

Invariants:
    - Serialized by alias, so clients see isActive/createdAt/updatedAt
    - UserResponse.from_record is the only place a User becomes wire data
    - Request bodies are NOT modeled here; they are checked by core.validate_user
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from users_api.core.user_record import User


class UserResponse(BaseModel):
    """Public-facing user record."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    age: int
    city: str
    is_active: bool = Field(alias="isActive")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_record(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            city=user.city,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserListResponse(BaseModel):
    count: int
    users: list[UserResponse]


class CityUsersResponse(UserListResponse):
    city: str


class StatusUsersResponse(UserListResponse):
    status: Literal["active", "inactive"]


class UserMutationResponse(BaseModel):
    """Create/update/delete result: a message plus the affected record."""
    message: str
    user: UserResponse
