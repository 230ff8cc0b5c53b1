"""End-to-end tests for the operator endpoints."""

from uuid import uuid4

import pytest

from tally.domain.value import TargetType
from tests.conftest import ADMIN_VOTER_ID, add_target
from tests.e2e.conftest import auth_cookie

ADMIN = auth_cookie(ADMIN_VOTER_ID)


class TestAdminAccess:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("POST", "/admin/votes/reconcile"),
            ("GET", "/admin/votes/drift"),
            ("POST", "/admin/votes/probe"),
            ("GET", f"/admin/votes/topic/{uuid4()}"),
        ],
    )
    async def test_ordinary_voter_is_forbidden(self, client, method, path):
        response = await client.request(method, path, headers=auth_cookie(uuid4()))

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_anonymous_is_unauthenticated(self, client):
        response = await client.post("/admin/votes/reconcile")

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"


class TestReconcileEndpoint:
    @pytest.mark.asyncio
    async def test_reconcile_all(self, client, store):
        # Arrange
        topic_id = add_target(store, score=3)
        add_target(store, TargetType.POST)

        # Act
        response = await client.post("/admin/votes/reconcile", headers=ADMIN)

        # Assert
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["targetsChecked"] == 2
        assert data["targetsCorrected"] == 1
        assert data["corrections"] == [
            {
                "targetType": "topic",
                "targetId": str(topic_id),
                "oldScore": 3,
                "newScore": 0,
                "delta": -3,
            }
        ]
        assert data["errors"] == []
        assert store.scores[(TargetType.TOPIC, topic_id)] == 0

    @pytest.mark.asyncio
    async def test_reconcile_single_target(self, client, store):
        target = add_target(store, TargetType.POST, score=1)
        other = add_target(store, TargetType.POST, score=1)

        response = await client.post(
            "/admin/votes/reconcile",
            json={"targetType": "post", "targetId": str(target)},
            headers=ADMIN,
        )

        assert response.json()["data"]["targetsChecked"] == 1
        assert store.scores[(TargetType.POST, target)] == 0
        assert store.scores[(TargetType.POST, other)] == 1

    @pytest.mark.asyncio
    async def test_target_id_without_type_is_invalid(self, client):
        response = await client.post(
            "/admin/votes/reconcile",
            json={"targetId": str(uuid4())},
            headers=ADMIN,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ARGUMENT"

    @pytest.mark.asyncio
    async def test_reconciled_count_matches_later_drift_scan(self, client, store):
        add_target(store, TargetType.TOPIC, score=5)

        before = await client.get("/admin/votes/drift", headers=ADMIN)
        await client.post("/admin/votes/reconcile", headers=ADMIN)
        after = await client.get("/admin/votes/drift", headers=ADMIN)

        assert before.json()["data"]["total"] == 1
        assert after.json()["data"] == {"drifted": [], "total": 0}


class TestDiagnosticsEndpoints:
    @pytest.mark.asyncio
    async def test_inspect_target(self, client, store):
        topic_id = add_target(store, score=2)

        response = await client.get(f"/admin/votes/topic/{topic_id}", headers=ADMIN)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["cachedScore"] == 2
        assert data["ledgerScore"] == 0
        assert data["drift"] == 2
        assert data["isConsistent"] is False

    @pytest.mark.asyncio
    async def test_inspect_missing_target(self, client):
        response = await client.get(f"/admin/votes/post/{uuid4()}", headers=ADMIN)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_drift_filtered_by_type(self, client, store):
        add_target(store, TargetType.TOPIC, score=1)
        post_id = add_target(store, TargetType.POST, score=1)

        response = await client.get(
            "/admin/votes/drift", params={"target_type": "post"}, headers=ADMIN
        )

        drifted = response.json()["data"]["drifted"]
        assert [item["targetId"] for item in drifted] == [str(post_id)]

    @pytest.mark.asyncio
    async def test_probe(self, client, store):
        response = await client.post("/admin/votes/probe", headers=ADMIN)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "canRead": True,
            "canWrite": True,
            "readError": None,
            "writeError": None,
        }
        assert store.votes == {}
