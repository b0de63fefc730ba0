"""User Routes: verifies CRUD status codes, filters and store effects over HTTP.

Invariants:
    - Duplicate email → 409 and the store is unchanged
    - Non-numeric id → 400; unknown numeric id → 404
    - PUT merges only the provided fields
    - DELETE echoes the removed record; a later GET returns 404
    - /users/city/* and /users/status/* are never captured by /users/{user_id}
"""

from dataclasses import replace

import pytest

from users_api.core.user_store import SAMPLE_USERS

NEW_USER = {
    "name": "Kavya Nair",
    "email": "kavya@example.com",
    "age": 27,
    "city": "Kochi",
}


# --- list / filters ----------------------------------------------------------

async def test_list_users_returns_count_and_users(client):
    res = await client.get("/users")
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == len(SAMPLE_USERS)
    assert [u["id"] for u in body["users"]] == list(range(1, len(SAMPLE_USERS) + 1))
    assert set(body["users"][0]) == {
        "id", "name", "email", "age", "city", "isActive", "createdAt", "updatedAt",
    }


@pytest.mark.parametrize("flag, expected", [("true", True), ("false", False)])
async def test_list_users_active_filter(client, flag, expected):
    res = await client.get("/users", params={"active": flag})
    users = res.json()["users"]
    assert users
    assert all(u["isActive"] is expected for u in users)
    assert res.json()["count"] == len(users)


async def test_list_users_rejects_bad_active_flag(client):
    res = await client.get("/users", params={"active": "sometimes"})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "active"


async def test_users_by_city_is_case_insensitive(client):
    res = await client.get("/users/city/delhi")
    assert res.status_code == 200
    body = res.json()
    assert body["city"] == "delhi"
    assert body["count"] == 2
    assert all(u["city"] == "Delhi" for u in body["users"])


async def test_users_by_unknown_city_is_empty(client):
    res = await client.get("/users/city/Atlantis")
    assert res.status_code == 200
    assert res.json() == {"city": "Atlantis", "count": 0, "users": []}


async def test_users_by_status_active(client):
    res = await client.get("/users/status/active")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "active"
    assert body["count"] == len(body["users"]) > 0
    assert all(u["isActive"] for u in body["users"])


async def test_users_by_status_inactive(client):
    body = (await client.get("/users/status/inactive")).json()
    assert body["status"] == "inactive"
    assert not any(u["isActive"] for u in body["users"])


async def test_users_by_unknown_status_is_400(client):
    res = await client.get("/users/status/archived")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# --- get by id ---------------------------------------------------------------

async def test_get_user(client):
    res = await client.get("/users/1")
    assert res.status_code == 200
    assert res.json()["email"] == SAMPLE_USERS[0]["email"]


async def test_get_user_non_numeric_id_is_400(client):
    res = await client.get("/users/abc")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ID"


async def test_get_user_missing_id_is_404(client):
    res = await client.get("/users/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"


async def test_get_user_zero_is_404(client):
    """'0' is digits-only, so it is a well-formed id that no user has."""
    res = await client.get("/users/0")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "USER_NOT_FOUND"


async def test_update_and_delete_user_zero_are_404(client):
    assert (await client.put("/users/0", json={"city": "Mumbai"})).status_code == 404
    assert (await client.delete("/users/0")).status_code == 404


# --- create ------------------------------------------------------------------

async def test_create_user(client, store):
    res = await client.post("/users", json=NEW_USER)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "User created successfully"
    user = body["user"]
    assert user["id"] == len(SAMPLE_USERS) + 1
    assert user["isActive"] is True
    assert user["createdAt"] == user["updatedAt"]
    assert len(store) == len(SAMPLE_USERS) + 1


async def test_create_user_duplicate_email_is_409_and_store_unchanged(client, store):
    before = [replace(u) for u in store.list_users()]
    res = await client.post("/users", json={**NEW_USER, "email": "rahul@example.com"})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_EMAIL"
    assert store.list_users() == before


@pytest.mark.parametrize("age", [0, 151])
async def test_create_user_age_out_of_range_is_400(client, store, age):
    res = await client.post("/users", json={**NEW_USER, "age": age})
    assert res.status_code == 400
    details = res.json()["error"]["details"]
    assert [d["field"] for d in details] == ["age"]
    assert "Age must be" in details[0]["message"]
    assert len(store) == len(SAMPLE_USERS)


async def test_create_user_missing_fields_lists_each(client):
    res = await client.post("/users", json={"name": "Kavya Nair"})
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert fields == ["email", "age", "city"]


async def test_create_user_malformed_json_is_400(client):
    res = await client.post(
        "/users", content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid JSON"


async def test_create_user_empty_body_is_invalid_json(client):
    res = await client.post("/users")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_JSON"


async def test_create_user_deeply_nested_json_is_invalid_json(client, store):
    res = await client.post(
        "/users", content="[" * 100_000 + "]" * 100_000,
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Invalid JSON"
    assert len(store) == len(SAMPLE_USERS)


async def test_created_user_is_retrievable(client):
    created = (await client.post("/users", json=NEW_USER)).json()["user"]
    res = await client.get(f"/users/{created['id']}")
    assert res.json() == created


# --- update ------------------------------------------------------------------

async def test_update_city_changes_only_city_and_updated_at(client):
    before = (await client.get("/users/2")).json()
    res = await client.put("/users/2", json={"city": "Mumbai"})
    assert res.status_code == 200
    assert res.json()["message"] == "User updated successfully"
    after = res.json()["user"]
    assert after["city"] == "Mumbai"
    assert after["updatedAt"] != before["updatedAt"]
    for key in ("id", "name", "email", "age", "isActive", "createdAt"):
        assert after[key] == before[key]


async def test_update_invalid_id_is_400(client):
    res = await client.put("/users/two", json={"city": "Mumbai"})
    assert res.status_code == 400


async def test_update_missing_user_is_404(client):
    res = await client.put("/users/999", json={"city": "Mumbai"})
    assert res.status_code == 404


async def test_update_validation_error_is_400(client):
    res = await client.put("/users/1", json={"age": 151})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "age"


async def test_update_email_of_other_user_is_409(client):
    res = await client.put("/users/1", json={"email": "priya@example.com"})
    assert res.status_code == 409


async def test_update_keeping_own_email_is_allowed(client):
    res = await client.put("/users/1", json={"email": "rahul@example.com"})
    assert res.status_code == 200


async def test_update_malformed_json_is_400(client):
    res = await client.put(
        "/users/1", content="{",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_JSON"


# --- delete ------------------------------------------------------------------

async def test_delete_user_echoes_record_then_404(client):
    before = (await client.get("/users/3")).json()
    res = await client.delete("/users/3")
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted successfully", "user": before}
    assert (await client.get("/users/3")).status_code == 404


async def test_delete_invalid_id_is_400(client):
    assert (await client.delete("/users/x1")).status_code == 400


async def test_delete_missing_user_is_404(client):
    assert (await client.delete("/users/999")).status_code == 404


async def test_delete_then_create_never_reuses_id(client):
    await client.delete(f"/users/{len(SAMPLE_USERS)}")
    created = (await client.post("/users", json=NEW_USER)).json()["user"]
    assert created["id"] == len(SAMPLE_USERS) + 1
