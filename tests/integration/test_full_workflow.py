"""End-to-end integration test covering the full user workflow."""
import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from friendvault.database import enable_sqlite_foreign_keys, get_db
from friendvault.main import app
from friendvault.models import Base
from friendvault.models.friend_request import FriendRequest
from friendvault.models.secret_message import SecretMessage


@pytest.mark.asyncio
async def test_full_workflow():
    """Register two accounts -> store secrets -> befriend -> read friend's secrets ->
    delete account and verify everything tied to it is gone."""

    # Setup
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    alice = {"x-user-id": str(uuid.uuid4())}
    bob = {"x-user-id": str(uuid.uuid4())}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        # 1. Register both accounts
        resp = await client.post("/users", json={"email": "alice@example.com"}, headers=alice)
        assert resp.status_code == 201
        resp = await client.post("/users", json={"email": "bob@example.com"}, headers=bob)
        assert resp.status_code == 201
        resp = await client.post("/users", json={"email": "alice@example.com"}, headers=alice)
        assert resp.status_code == 200
        assert resp.json()["status"] == "exists"

        # 2. Alice stores two secrets and edits one
        resp = await client.post("/secret", json={"content": "I like pineapple pizza"}, headers=alice)
        assert resp.status_code == 201
        first_id = resp.json()["data"]["id"]
        resp = await client.post("/secret", json={"content": "second"}, headers=alice)
        assert resp.status_code == 201

        resp = await client.put(f"/secret/{first_id}", json={"content": "I love pineapple pizza"}, headers=alice)
        assert resp.status_code == 200

        # Bob cannot edit it
        resp = await client.put(f"/secret/{first_id}", json={"content": "nope"}, headers=bob)
        assert resp.status_code == 404

        # 3. Alice sends a request, Bob accepts
        resp = await client.post("/add-friend", json={"receiver_id": bob["x-user-id"]}, headers=alice)
        assert resp.status_code == 200
        request_id = resp.json()["data"]["id"]

        resp = await client.post("/add-friend", json={"receiver_id": bob["x-user-id"]}, headers=alice)
        assert resp.status_code == 409

        resp = await client.post("/friends/accept", json={"requestId": request_id}, headers=bob)
        assert resp.status_code == 200

        # 4. Bob reads Alice's secrets; Alice cannot read Bob's
        resp = await client.get(f"/friends/messages/{alice['x-user-id']}", headers=bob)
        assert resp.status_code == 200
        assert sorted(s["friend_secret"] for s in resp.json()["data"]) == [
            "I love pineapple pizza",
            "second",
        ]
        resp = await client.get(f"/friends/messages/{bob['x-user-id']}", headers=alice)
        assert resp.status_code == 401

        # 5. Alice deletes her account
        resp = await client.delete(f"/users/{alice['x-user-id']}", headers=alice)
        assert resp.status_code == 200

        resp = await client.get(f"/friends/messages/{alice['x-user-id']}", headers=bob)
        assert resp.status_code == 401

    async with session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(SecretMessage)) == 0
        assert await session.scalar(select(func.count()).select_from(FriendRequest)) == 0

    # Cleanup
    app.dependency_overrides.clear()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
