"""
Integration tests for wallet routes.

Usage:
    pytest tests/integration/api/test_wallet_routes.py
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from greffier.domain.exceptions import StorageUnavailableError
from greffier.infrastructure.persistence.models import UserModel
from tests.helpers import issue_token

pytestmark = pytest.mark.integration

WALLET = "kshy5yns5FGGXcFVfjT2fTzVsQLFnbZzL9zuh1ZKR2y"


def _auth(subject_id: str) -> dict:
    return {"Authorization": f"Bearer {issue_token(subject_id)}"}


class TestWalletRoutes:
    """GET / POST / DELETE /api/wallet"""

    # ================================================================
    # Read
    # ================================================================

    async def test_get_wallet_unbound(self, client):
        response = await client.get("/api/wallet", headers=_auth("alice"))

        assert response.status_code == 200
        assert response.json() == {"wallet_address": None}

    async def test_get_wallet_requires_auth(self, client):
        response = await client.get("/api/wallet")

        assert response.status_code == 401

    # ================================================================
    # Bind
    # ================================================================

    async def test_link_wallet(self, client):
        response = await client.post(
            "/api/wallet",
            json={"wallet_address": f"  {WALLET} "},
            headers=_auth("alice"),
        )

        assert response.status_code == 200
        assert response.json() == {"wallet_address": WALLET}

        read = await client.get("/api/wallet", headers=_auth("alice"))
        assert read.json() == {"wallet_address": WALLET}

    async def test_link_same_wallet_twice(self, client):
        for _ in range(2):
            response = await client.post(
                "/api/wallet", json={"wallet_address": WALLET}, headers=_auth("alice")
            )
            assert response.status_code == 200
            assert response.json() == {"wallet_address": WALLET}

    async def test_link_wallet_held_by_other_user(self, client):
        await client.post(
            "/api/wallet", json={"wallet_address": WALLET}, headers=_auth("alice")
        )

        response = await client.post(
            "/api/wallet", json={"wallet_address": WALLET}, headers=_auth("bob")
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "WALLET_CONFLICT"
        assert "alice" not in body["message"]
        assert WALLET not in body["message"]

        bob = await client.get("/api/wallet", headers=_auth("bob"))
        assert bob.json() == {"wallet_address": None}

    @pytest.mark.parametrize("payload", [{"wallet_address": "   "}, {}])
    async def test_link_wallet_empty(self, client, payload):
        response = await client.post("/api/wallet", json=payload, headers=_auth("alice"))

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_link_wallet_non_string(self, client):
        response = await client.post(
            "/api/wallet", json={"wallet_address": 123}, headers=_auth("alice")
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert "wallet_address" in body["message"]
        assert "detail" not in body

    async def test_link_wallet_without_body(self, client):
        response = await client.post("/api/wallet", headers=_auth("alice"))

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_link_wallet_malformed_json(self, client):
        response = await client.post(
            "/api/wallet",
            content=b"{not json",
            headers={**_auth("alice"), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    # ================================================================
    # Unbind
    # ================================================================

    async def test_unlink_then_relink_elsewhere(self, client):
        await client.post(
            "/api/wallet", json={"wallet_address": WALLET}, headers=_auth("alice")
        )

        unlink = await client.delete("/api/wallet", headers=_auth("alice"))
        relink = await client.post(
            "/api/wallet", json={"wallet_address": WALLET}, headers=_auth("bob")
        )

        assert unlink.status_code == 200
        assert unlink.json() == {"wallet_address": None}
        assert relink.status_code == 200
        assert relink.json() == {"wallet_address": WALLET}

    async def test_unlink_when_unbound(self, client):
        response = await client.delete("/api/wallet", headers=_auth("alice"))

        assert response.status_code == 200
        assert response.json() == {"wallet_address": None}

    # ================================================================
    # Races against the real store
    # ================================================================

    async def test_race_on_same_address(self, client, test_db):
        """Exactly one of two users binding one address wins."""
        for subject in ("alice", "bob"):
            await client.post("/api/auth/check-user", headers=_auth(subject))

        responses = await asyncio.gather(
            *(
                client.post(
                    "/api/wallet",
                    json={"wallet_address": WALLET},
                    headers=_auth(subject),
                )
                for subject in ("alice", "bob")
            )
        )

        assert sorted(r.status_code for r in responses) == [200, 409]
        loser = next(r for r in responses if r.status_code == 409)
        assert loser.json()["error"] == "WALLET_CONFLICT"

        async with test_db.session() as session:
            holders = (
                await session.execute(
                    select(UserModel.id).where(UserModel.wallet_address == WALLET)
                )
            ).scalars().all()
        assert len(holders) == 1

    # ================================================================
    # Storage failures
    # ================================================================

    async def test_storage_unavailable_maps_to_503(self, client, monkeypatch):
        from greffier.infrastructure.persistence.repositories import user_repository

        monkeypatch.setattr(
            user_repository.UserRepository,
            "upsert_by_id",
            AsyncMock(side_effect=StorageUnavailableError("upsert_by_id")),
        )

        response = await client.get("/api/wallet", headers=_auth("alice"))

        assert response.status_code == 503
        assert response.json()["error"] == "STORAGE_UNAVAILABLE"
