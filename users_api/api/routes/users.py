"""User Routes: CRUD and filtering over the in-memory user store.

Invariants:
    - /users/city/{city_name} and /users/status/{status} are registered before
      /users/{user_id}; the order of the decorators below is load-bearing
    - Ids and bodies are validated before the store is touched
    - Domain errors propagate to the global handlers; routes never build error JSON
"""

from fastapi import APIRouter, Depends, Query, Request, status

from users_api.api.dependencies import get_store, read_json_body
from users_api.core.user_store import UserStore
from users_api.core.validate_user import (
    clean_user_fields, parse_active_flag, parse_status, parse_user_id,
    require_valid, validate_user_create, validate_user_update,
)
from users_api.schemas.user import (
    CityUsersResponse, StatusUsersResponse, UserListResponse,
    UserMutationResponse, UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    active: str | None = Query(None, description="Filter by activity: true or false"),
    store: UserStore = Depends(get_store),
):
    """List all users, optionally only active or inactive ones."""
    users = store.list_users(is_active=parse_active_flag(active))
    return {
        "count": len(users),
        "users": [UserResponse.from_record(u) for u in users],
    }


@router.get("/city/{city_name}", response_model=CityUsersResponse)
async def list_users_by_city(city_name: str, store: UserStore = Depends(get_store)):
    """Users whose city matches, ignoring case."""
    users = store.find_by_city(city_name)
    return {
        "city": city_name,
        "count": len(users),
        "users": [UserResponse.from_record(u) for u in users],
    }


@router.get("/status/{user_status}", response_model=StatusUsersResponse)
async def list_users_by_status(user_status: str, store: UserStore = Depends(get_store)):
    parsed = parse_status(user_status)
    users = store.find_by_status(parsed.is_active)
    return {
        "status": parsed.value,
        "count": len(users),
        "users": [UserResponse.from_record(u) for u in users],
    }


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, store: UserStore = Depends(get_store)):
    return UserResponse.from_record(store.get(parse_user_id(user_id)))


@router.post(
    "", response_model=UserMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(request: Request, store: UserStore = Depends(get_store)):
    """Create a user. Email must not belong to any existing user."""
    body = await read_json_body(request)
    require_valid(validate_user_create(body))
    user = store.create(clean_user_fields(body))
    return {
        "message": "User created successfully",
        "user": UserResponse.from_record(user),
    }


@router.put("/{user_id}", response_model=UserMutationResponse)
async def update_user(
    user_id: str, request: Request, store: UserStore = Depends(get_store),
):
    """Partially update a user; only fields present in the body change."""
    parsed_id = parse_user_id(user_id)
    body = await read_json_body(request)
    require_valid(validate_user_update(body))
    user = store.update(parsed_id, clean_user_fields(body))
    return {
        "message": "User updated successfully",
        "user": UserResponse.from_record(user),
    }


@router.delete("/{user_id}", response_model=UserMutationResponse)
async def delete_user(user_id: str, store: UserStore = Depends(get_store)):
    """Delete a user and echo the removed record."""
    user = store.delete(parse_user_id(user_id))
    return {
        "message": "User deleted successfully",
        "user": UserResponse.from_record(user),
    }
