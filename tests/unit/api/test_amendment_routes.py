"""Unit tests for the amendment API routes.

The routes are exercised through FastAPI's TestClient with the workflow
and status services wired to in-memory stubs and a fake clock.
"""

from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from amendment_engine.api.dependencies.amendment import (
    get_governance_status_service,
    get_workflow_service,
)
from amendment_engine.api.middleware.logging_middleware import (
    CORRELATION_HEADER,
    LoggingMiddleware,
)
from amendment_engine.api.routes.amendments import router
from amendment_engine.application.services.amendment_workflow_service import (
    AmendmentWorkflowService,
)
from amendment_engine.application.services.governance_status_service import (
    GovernanceStatusService,
)
from amendment_engine.domain.errors import StoreError
from amendment_engine.infrastructure.stubs import (
    AmendmentHistoryStub,
    ProposalStoreStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

COMPLETE_PROPOSAL = {
    "title": "Clarify Voting Rules",
    "description": "Clarifies how abstentions are counted",
    "proposer": "alice@example.org",
    "type": "governance-process",
    "impact": "patch",
    "proposed_text": "Abstentions count toward the approval denominator.",
    "rationale": "The current text is ambiguous.",
}


@pytest.fixture
def status_service(
    store: ProposalStoreStub,
    history: AmendmentHistoryStub,
    fake_time_authority: FakeTimeAuthority,
) -> GovernanceStatusService:
    return GovernanceStatusService(
        store=store, history=history, time_authority=fake_time_authority
    )


@pytest.fixture
def app(
    workflow: AmendmentWorkflowService, status_service: GovernanceStatusService
) -> FastAPI:
    """Create FastAPI app with amendment routes wired to stubs."""
    application = FastAPI()
    application.add_middleware(LoggingMiddleware)
    application.include_router(router)
    application.dependency_overrides[get_workflow_service] = lambda: workflow
    application.dependency_overrides[get_governance_status_service] = lambda: status_service
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _create(client: TestClient, **overrides: object) -> dict:
    response = client.post("/v1/amendments", json={**COMPLETE_PROPOSAL, **overrides})
    assert response.status_code == 201
    return response.json()


def _open_voting(client: TestClient, clock: FakeTimeAuthority) -> str:
    proposal_id = _create(client)["id"]
    assert client.post(f"/v1/amendments/{proposal_id}/submit").status_code == 200
    clock.advance(delta=timedelta(days=3))
    assert client.post(f"/v1/amendments/{proposal_id}/voting").status_code == 200
    return proposal_id


class TestRouter:
    """Router configuration."""

    def test_router_prefix_and_tags(self) -> None:
        assert router.prefix == "/v1/amendments"
        assert "amendments" in router.tags


class TestCreateAndRead:
    """POST /v1/amendments and the read endpoints."""

    def test_create_returns_draft(self, client: TestClient) -> None:
        body = _create(client)

        assert body["status"] == "draft"
        assert body["impact"] == "patch"
        assert body["review_duration_days"] == 3
        assert body["voting"]["quorum"] == 3
        assert body["voting"]["threshold"] == 50.0
        assert body["proposed_date"] == "2026-01-01T00:00:00Z"
        assert body["id"].startswith("amendment-clarify-voting-rules-")

    def test_create_rejects_unknown_impact(self, client: TestClient) -> None:
        response = client.post("/v1/amendments", json={**COMPLETE_PROPOSAL, "impact": "huge"})
        assert response.status_code == 422

    def test_get_and_list(self, client: TestClient) -> None:
        created = _create(client)

        fetched = client.get(f"/v1/amendments/{created['id']}")
        listing = client.get("/v1/amendments", params={"status": "draft"})
        empty = client.get("/v1/amendments", params={"status": "voting"})

        assert fetched.status_code == 200
        assert fetched.json()["id"] == created["id"]
        assert listing.json()["total"] == 1
        assert listing.json()["proposals"][0]["id"] == created["id"]
        assert empty.json() == {"proposals": [], "total": 0}

    def test_get_unknown_proposal_is_404(self, client: TestClient) -> None:
        response = client.get("/v1/amendments/amendment-missing-0")

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["type"].endswith("proposal-not-found")
        assert detail["title"] == "Proposal Not Found"
        assert "amendment-missing-0" in detail["detail"]

    def test_status_and_history(self, client: TestClient) -> None:
        _create(client)

        status = client.get("/v1/amendments/status").json()
        history = client.get("/v1/amendments/history").json()

        assert status["active_proposals"] == 0
        assert status["system_health"] == "Normal activity"
        assert len(status["recent_activity"]) == 1
        assert history == {"entries": []}

    def test_correlation_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/v1/amendments", headers={CORRELATION_HEADER: "req-123"})
        assert response.headers[CORRELATION_HEADER] == "req-123"


class TestWorkflowErrors:
    """Domain errors map to problem-detail responses."""

    def test_incomplete_submit_is_422(self, client: TestClient) -> None:
        proposal_id = _create(client, rationale="")["id"]

        response = client.post(f"/v1/amendments/{proposal_id}/submit")

        assert response.status_code == 422
        assert "rationale" in response.json()["detail"]["detail"]
        assert client.get(f"/v1/amendments/{proposal_id}").json()["status"] == "draft"

    def test_early_voting_is_409(self, client: TestClient) -> None:
        proposal_id = _create(client)["id"]
        client.post(f"/v1/amendments/{proposal_id}/submit")

        response = client.post(f"/v1/amendments/{proposal_id}/voting")

        assert response.status_code == 409
        assert response.json()["detail"]["title"] == "ReviewPeriodNotElapsed"

    def test_duplicate_vote_is_409(
        self, client: TestClient, fake_time_authority: FakeTimeAuthority
    ) -> None:
        proposal_id = _open_voting(client, fake_time_authority)
        vote = {"voter": "core-team", "decision": "approve"}

        first = client.post(f"/v1/amendments/{proposal_id}/votes", json=vote)
        second = client.post(f"/v1/amendments/{proposal_id}/votes", json=vote)

        assert first.status_code == 201
        assert first.json()["weight"] == 3
        assert second.status_code == 409
        assert second.json()["detail"]["title"] == "DuplicateVote"

    def test_ineligible_voter_is_403(
        self, client: TestClient, fake_time_authority: FakeTimeAuthority
    ) -> None:
        proposal_id = _open_voting(client, fake_time_authority)
        response = client.post(
            f"/v1/amendments/{proposal_id}/votes", json={"voter": "bob", "decision": "approve"}
        )
        assert response.status_code == 403

    def test_reply_to_unknown_comment_is_404(self, client: TestClient) -> None:
        proposal_id = _create(client)["id"]
        response = client.post(
            f"/v1/amendments/{proposal_id}/comments",
            json={"content": "orphan", "reply_to": "missing"},
        )
        assert response.status_code == 404
        assert response.json()["detail"]["title"] == "Comment Not Found"
        assert response.json()["detail"]["detail"] == "Comment missing not found"

    def test_store_error_is_503(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch, store: ProposalStoreStub
    ) -> None:
        async def broken_list(status=None):
            raise StoreError("disk unavailable")

        monkeypatch.setattr(store, "list_proposals", broken_list)

        response = client.get("/v1/amendments")

        assert response.status_code == 503
        assert response.json()["detail"]["detail"] == "disk unavailable"


class TestFullLifecycle:
    """Comment, vote, tally and finalize over HTTP."""

    def test_patch_amendment_is_implemented(
        self, client: TestClient, fake_time_authority: FakeTimeAuthority
    ) -> None:
        proposal_id = _open_voting(client, fake_time_authority)
        comment = client.post(
            f"/v1/amendments/{proposal_id}/comments",
            json={"author": "community", "content": "Looks good", "type": "support"},
        )
        assert comment.status_code == 201
        for voter in ("core-team", "contributor", "community"):
            response = client.post(
                f"/v1/amendments/{proposal_id}/votes",
                json={"voter": voter, "decision": "approve"},
            )
            assert response.status_code == 201

        tally = client.get(f"/v1/amendments/{proposal_id}/tally").json()
        early = client.post(f"/v1/amendments/{proposal_id}/finalize")
        fake_time_authority.advance(delta=timedelta(days=3, seconds=1))
        final = client.post(f"/v1/amendments/{proposal_id}/finalize")

        assert tally["approvals"] == 6
        assert tally["quorum_met"] is True
        assert early.status_code == 409
        assert final.status_code == 200
        body = final.json()
        assert body["proposal"]["status"] == "implemented"
        assert body["proposal"]["implemented_by"] == "democratic-process"
        assert body["result"]["passed"] is True
        history = client.get("/v1/amendments/history").json()["entries"]
        assert [(e["proposal_id"], e["result"]) for e in history] == [
            (proposal_id, "approved")
        ]
