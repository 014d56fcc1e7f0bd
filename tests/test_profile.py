"""
Profile API tests
"""
import pytest

from app.models.profile import UserProfile

from conftest import auth_headers, count_rows


@pytest.mark.asyncio
async def test_get_missing_profile_is_404(client):
    r = await client.get("/profile", headers=auth_headers())
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "not_found", "message": "Profile not found"}


@pytest.mark.asyncio
async def test_create_profile_uses_token_email_by_default(client):
    headers = auth_headers(sub="jane", email="jane@example.com")
    r = await client.post("/profile", json={"name": "  Jane Doe "}, headers=headers)
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["userId"] == "jane"
    assert data["name"] == "Jane Doe"
    assert data["email"] == "jane@example.com"

    r = await client.get("/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Jane Doe"


@pytest.mark.asyncio
async def test_upsert_merges_into_existing_profile(client):
    headers = auth_headers(sub="jane", email="jane@example.com")
    await client.post("/profile", json={"name": "Jane", "email": "jane.work@example.com"}, headers=headers)

    r = await client.post("/profile", json={"name": "Janet"}, headers=headers)
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["name"] == "Janet"
    assert data["email"] == "jane.work@example.com", "Omitted email must keep the stored one"
    assert await count_rows(UserProfile) == 1


@pytest.mark.asyncio
async def test_profiles_are_keyed_by_subject(client):
    await client.post("/profile", json={"name": "Alice"}, headers=auth_headers(sub="alice"))
    await client.post("/profile", json={"name": "Bob"}, headers=auth_headers(sub="bob"))

    r = await client.get("/profile", headers=auth_headers(sub="alice"))
    assert r.json()["data"]["name"] == "Alice"
    assert await count_rows(UserProfile) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {},
    {"name": ""},
    {"name": "   "},
    {"name": None},
    {"name": "Jane", "email": "not-an-email"},
])
async def test_invalid_profile_is_rejected(client, payload):
    r = await client.post("/profile", json=payload, headers=auth_headers())
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "validation_error"
    assert await count_rows(UserProfile) == 0
