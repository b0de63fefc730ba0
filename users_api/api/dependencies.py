"""Request Dependencies: store/settings lookup and JSON body decoding for route handlers.

Invariants:
    - The store is owned by app.state; handlers receive it only through get_store
    - read_json_body raises MalformedJsonError for empty, undecodable or too deeply nested bodies
"""

import json

from fastapi import Request

from users_api.config import Settings
from users_api.core.errors import MalformedJsonError
from users_api.core.user_store import UserStore


def get_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def read_json_body(request: Request) -> object:
    """Decode the request body as JSON; validation of its shape happens later."""
    raw = await request.body()
    # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting raises RecursionError
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        raise MalformedJsonError()
