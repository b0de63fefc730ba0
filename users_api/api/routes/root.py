"""Root Routes: service banner, greeting, and the endpoint listing shared with the 404 fallback.

Invariants:
    - list_endpoints() reflects the routes in the app's OpenAPI schema, paths in registration order
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, FastAPI, Request

from users_api.api.dependencies import get_app_settings
from users_api.config import Settings

router = APIRouter(tags=["root"])


HTTP_METHODS = ("get", "post", "put", "patch", "delete")


def list_endpoints(app: FastAPI) -> list[str]:
    """'METHOD /path' for every documented route, paths in registration order."""
    endpoints = []
    for path, operations in app.openapi()["paths"].items():
        for method in HTTP_METHODS:
            if method in operations:
                endpoints.append(f"{method.upper()} {path}")
    return endpoints


@router.get("/")
async def service_banner(
    request: Request, settings: Settings = Depends(get_app_settings),
):
    return {
        "message": f"Welcome to the {settings.service_name}",
        "service": settings.service_name,
        "version": settings.service_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "instructions": "Try visiting /users or /hello/YourName",
        "endpoints": list_endpoints(request.app),
    }


@router.get("/hello/{name}")
async def greet(name: str):
    """Greeting that echoes a path parameter."""
    return {
        "message": f"Hello, {name}! Welcome to the API!",
        "tip": "You just used a route parameter!",
    }
