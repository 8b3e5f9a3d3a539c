import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from app.main import app


def _unique_violation():
    raise IntegrityError(
        "INSERT INTO bids (auction_id, vendor_email) VALUES (?, ?)",
        (1, "v@vendor.com"),
        Exception("UNIQUE constraint failed: bids.auction_id, bids.vendor_email"),
    )


def _crash():
    raise RuntimeError("unexpected")


@pytest.fixture
def failing_client(client):
    app.add_api_route("/failing/conflict", _unique_violation)
    app.add_api_route("/failing/crash", _crash)
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.router.routes[:] = [
            r for r in app.router.routes if not getattr(r, "path", "").startswith("/failing/")
        ]


def test_unique_violation_is_json_409(failing_client):
    r = failing_client.get("/failing/conflict")
    assert r.status_code == 409
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"message": "Conflicting update, please retry"}


def test_unexpected_error_is_json_500(failing_client):
    r = failing_client.get("/failing/crash")
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"message": "Internal server error"}


def test_validation_error_is_json_400(client):
    r = client.post("/api/admin/login", content="not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "message" in r.json()
