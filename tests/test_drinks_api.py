"""Drink API tests — posting, reading, and owner-only edits."""

import pytest

from brewlog.db.models import Drink
from brewlog.errors import ForbiddenError
from brewlog.services.drink_service import DrinkService
from brewlog.services.user_store import UserStore

LATTE = {
    "drink_name": "Latte",
    "brew": "Espresso",
    "description": "xyz",
    "ingredients": ["Espresso", "Milk"],
}

CHAI = {
    "drink_name": "Chai Latte",
    "brew": "Espresso",
    "description": "Chai Latte",
    "ingredients": ["Milk", "Tea"],
}


# ═══════════════════════════════════════════════════════════
# Create / read
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_drink_owned_by_caller(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    assert r.status_code == 201
    drink = r.json()
    assert drink["post_id"] == joe["user"]["id"]
    for key, value in LATTE.items():
        assert drink[key] == value


@pytest.mark.asyncio
async def test_owner_in_body_is_ignored(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post(
        "/api/v1/drinks", json={**LATTE, "post_id": 999}, headers=joe["headers"]
    )
    assert r.status_code == 201
    assert r.json()["post_id"] == joe["user"]["id"]


@pytest.mark.asyncio
async def test_create_drink_requires_auth(client):
    r = await client.post("/api/v1/drinks", json=LATTE)
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_reads_are_open(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    drink_id = r.json()["id"]

    r = await client.get(f"/api/v1/drinks/{drink_id}")
    assert r.status_code == 200
    assert r.json()["drink_name"] == "Latte"

    r = await client.get("/api/v1/drinks")
    assert r.status_code == 200
    assert [d["id"] for d in r.json()] == [drink_id]


@pytest.mark.asyncio
async def test_reads_ignore_the_authorization_header(client):
    r = await client.get(
        "/api/v1/drinks", headers={"Authorization": "Bearer nope"}
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_bad_token_on_mutation_is_not_treated_as_anonymous(client):
    r = await client.post(
        "/api/v1/drinks", json=LATTE, headers={"Authorization": "Bearer nope"}
    )
    assert r.status_code == 401
    assert r.json()["error"] == "invalid_token"


@pytest.mark.asyncio
async def test_get_missing_drink(client):
    r = await client.get("/api/v1/drinks/9999")
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"


# ═══════════════════════════════════════════════════════════
# Update
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_owner_can_update(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    drink_id = r.json()["id"]

    r = await client.put(
        f"/api/v1/drinks/{drink_id}", json=CHAI, headers=joe["headers"]
    )
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == drink_id
    assert updated["post_id"] == joe["user"]["id"]
    for key, value in CHAI.items():
        assert updated[key] == value


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    drink_id = r.json()["id"]

    r = await client.put(
        f"/api/v1/drinks/{drink_id}",
        json={"description": "Extra foam"},
        headers=joe["headers"],
    )
    assert r.status_code == 200
    assert r.json()["description"] == "Extra foam"
    assert r.json()["drink_name"] == "Latte"


@pytest.mark.asyncio
async def test_non_owner_cannot_update(client, signup):
    joe = await signup("cupajoe@aol.com")
    ann = await signup("ann@example.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    drink_id = r.json()["id"]

    r = await client.put(
        f"/api/v1/drinks/{drink_id}", json=CHAI, headers=ann["headers"]
    )
    assert r.status_code == 403
    assert r.json()["error"] == "forbidden"

    r = await client.get(f"/api/v1/drinks/{drink_id}")
    assert r.json()["drink_name"] == "Latte"


@pytest.mark.asyncio
async def test_update_without_token(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    r = await client.put(f"/api/v1/drinks/{r.json()['id']}", json=CHAI)
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_update_missing_drink(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.put("/api/v1/drinks/9999", json=CHAI, headers=joe["headers"])
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_owner_can_delete(client, signup):
    joe = await signup("cupajoe@aol.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    created = r.json()

    r = await client.delete(
        f"/api/v1/drinks/{created['id']}", headers=joe["headers"]
    )
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]
    assert r.json()["drink_name"] == "Latte"

    r = await client.get(f"/api/v1/drinks/{created['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_non_owner_cannot_delete(client, signup):
    joe = await signup("cupajoe@aol.com")
    ann = await signup("ann@example.com")
    r = await client.post("/api/v1/drinks", json=LATTE, headers=joe["headers"])
    drink_id = r.json()["id"]

    r = await client.delete(f"/api/v1/drinks/{drink_id}", headers=ann["headers"])
    assert r.status_code == 403

    r = await client.get(f"/api/v1/drinks/{drink_id}")
    assert r.status_code == 200


# ═══════════════════════════════════════════════════════════
# Service level: user 1 owns drink 42
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_only_owner_mutates_drink_42(db_session):
    store = UserStore(db_session)
    owner = await store.insert_by_username("owner")
    other = await store.insert_by_username("other")
    assert (owner.id, other.id) == (1, 2)

    db_session.add(Drink(id=42, post_id=owner.id, **LATTE))
    await db_session.commit()

    svc = DrinkService(db_session)
    with pytest.raises(ForbiddenError):
        await svc.update(other.id, 42, {"drink_name": "Mocha"})

    updated = await svc.update(owner.id, 42, {"drink_name": "Mocha"})
    assert updated.drink_name == "Mocha"
    assert updated.post_id == owner.id


@pytest.mark.asyncio
async def test_update_cannot_change_owner(db_session):
    owner = await UserStore(db_session).insert_by_username("owner")
    svc = DrinkService(db_session)
    drink = await svc.create(owner.id, LATTE)

    updated = await svc.update(owner.id, drink.id, {"post_id": 999})
    assert updated.post_id == owner.id
