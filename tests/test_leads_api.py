import pytest
import uuid

from tests.helpers import count_leads_in_db

@pytest.fixture
def lead_payload():
    """Return a valid payload for creating a lead via the API."""
    return {
        "lead_id": f"lead-{uuid.uuid4().hex[:8]}",
        "campaign_id": "cmp-1",
        "ad_id": "ad-1",
        "name": "Alice Smith",
        "email": "alice@example.com",
        "phone": "+15559876543",
        "zip_code": "85001",
        "service_interest": "roof repair",
        "message": "Need a quote this week",
        "created_time": "2026-03-01T10:00:00+0000",
    }

# ------------------- Lead Creation Tests -------------------
def test_create_lead_success(authenticated_client, db_helpers, lead_payload):
    response = authenticated_client.post("/api/leads", json=lead_payload)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    stored = db_helpers.get_leads_by_lead_id(lead_payload["lead_id"])
    assert len(stored) == 1
    lead = stored[0]
    for key, value in lead_payload.items():
        assert getattr(lead, key) == value
    assert lead.logged_at is not None

def test_create_lead_duplicate_lead_id_is_ignored(authenticated_client, db_helpers, db_session, lead_payload):
    first = authenticated_client.post("/api/leads", json=lead_payload)
    second = authenticated_client.post("/api/leads", json=dict(lead_payload, name="Someone Else"))
    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json() == second.json() == {"success": True}

    assert count_leads_in_db(db_session) == 1
    stored = db_helpers.get_leads_by_lead_id(lead_payload["lead_id"])
    assert stored[0].name == "Alice Smith"

def test_create_leads_without_lead_id_are_all_kept(authenticated_client, db_session, lead_payload):
    payload = dict(lead_payload)
    del payload["lead_id"]
    for _ in range(2):
        assert authenticated_client.post("/api/leads", json=payload).status_code == 200
    assert count_leads_in_db(db_session) == 2

def test_create_lead_with_numeric_fields(authenticated_client, db_helpers, lead_payload):
    payload = dict(lead_payload, zip_code=85001, phone=15559876543)
    response = authenticated_client.post("/api/leads", json=payload)
    assert response.status_code == 200
    lead = db_helpers.get_leads_by_lead_id(lead_payload["lead_id"])[0]
    assert lead.zip_code == "85001"
    assert lead.phone == "15559876543"

def test_create_lead_empty_body(authenticated_client, db_session):
    response = authenticated_client.post("/api/leads", json={})
    assert response.status_code == 200
    assert count_leads_in_db(db_session) == 1

def test_create_lead_malformed_body(authenticated_client, db_session):
    response = authenticated_client.post(
        "/api/leads",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert count_leads_in_db(db_session) == 0

# ------------------- Lead Listing Tests -------------------
def test_list_leads_empty(authenticated_client):
    response = authenticated_client.get("/api/leads")
    assert response.status_code == 200
    assert response.json() == []

def test_list_leads_newest_first(authenticated_client, lead_payload):
    lead_ids = []
    for i in range(3):
        payload = dict(lead_payload, lead_id=f"lead-{i}")
        assert authenticated_client.post("/api/leads", json=payload).status_code == 200
        lead_ids.append(payload["lead_id"])

    response = authenticated_client.get("/api/leads")
    assert response.status_code == 200
    data = response.json()
    assert [lead["lead_id"] for lead in data] == list(reversed(lead_ids))
    assert data[0]["email"] == lead_payload["email"]
    assert data[0]["logged_at"]
