"""Tests for Approval Gate endpoints."""

from fastapi.testclient import TestClient

from src.chancery.backend import LocalAuthProvider, MemoryDocumentStore
from src.chancery.models import Diocese, ProfileStatus
from tests.factories import UserProfileFactory
from tests.helpers import signed_in


def test_anonymous_redirected_to_login(client: TestClient) -> None:
    response = client.get("/api/v1/pages/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["outcome"] == "unauthenticated"
    assert data["navigation"]["route"] == "/login"


def test_pending_parish_secretary_on_chancery_page(
    client: TestClient, auth_provider: LocalAuthProvider, store: MemoryDocumentStore
) -> None:
    _, headers = signed_in(auth_provider, store, UserProfileFactory.parish_secretary())

    data = client.get("/api/v1/pages/announcements", headers=headers).json()

    assert data["outcome"] == "access_restricted"
    assert data["pending"] is None
    assert data["required_roles"] == ["chancery_office"]
    assert data["message"].startswith("Only Chancery Office users can access this page.")


def test_pending_parish_secretary_on_parish_page(
    client: TestClient, auth_provider: LocalAuthProvider, store: MemoryDocumentStore
) -> None:
    _, headers = signed_in(
        auth_provider, store, UserProfileFactory.parish_secretary(parish="St. Joseph Parish")
    )

    data = client.get("/api/v1/pages/parish_dashboard", headers=headers).json()

    assert data["outcome"] == "awaiting_approval"
    assert data["pending"]["reviewer_label"] == "current parish user for your parish"
    assert "St. Joseph Parish" in data["pending"]["submission_text"]


def test_diocese_mismatch(
    client: TestClient, auth_provider: LocalAuthProvider, store: MemoryDocumentStore
) -> None:
    _, headers = signed_in(
        auth_provider, store, UserProfileFactory.approved(diocese=Diocese.TAGBILARAN)
    )

    own = client.get("/api/v1/pages/reports?diocese=tagbilaran", headers=headers).json()
    other = client.get("/api/v1/pages/reports?diocese=talibon", headers=headers).json()

    assert own["outcome"] == "approved"
    assert other["outcome"] == "access_restricted"
    assert other["target_diocese"] == "talibon"


def test_rejected_user_restricted(
    client: TestClient, auth_provider: LocalAuthProvider, store: MemoryDocumentStore
) -> None:
    _, headers = signed_in(
        auth_provider, store, UserProfileFactory.build(status=ProfileStatus.REJECTED)
    )
    data = client.get("/api/v1/pages/dashboard", headers=headers).json()
    assert data["outcome"] == "access_restricted"


def test_invalid_token_treated_as_anonymous(client: TestClient) -> None:
    data = client.get(
        "/api/v1/pages/dashboard", headers={"Authorization": "Bearer not-a-token"}
    ).json()
    assert data["outcome"] == "unauthenticated"


def test_pending_approval_page_content(client: TestClient) -> None:
    response = client.get(
        "/api/v1/pending-approval",
        params={
            "role": "chancery_office",
            "diocese": "talibon",
            "name": "Maria",
            "email": "maria@example.com",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["diocese_name"] == "Diocese of Talibon"
    assert data["contact_email"] == "talibonchancery@gmail.com"
    assert data["reviewer_label"] == "current chancellor"
    assert data["greeting"] == "Hello, Maria!"
    assert data["email"] == "maria@example.com"
