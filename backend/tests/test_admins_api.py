from app.models import Admin

from conftest import make_admin


def test_signup_creates_internal_user(client, db):
    r = client.post(
        "/api/admins",
        json={"email": " New.Buyer@Corp.com ", "company_name": "Corp", "role": "internal_user", "password": "pw"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["email"] == "new.buyer@corp.com"
    assert body["role"] == "internal_user"
    assert "password_hash" not in body
    stored = db.query(Admin).filter(Admin.email == "new.buyer@corp.com").one()
    assert stored.password_hash and stored.password_hash != "pw"


def test_signup_existing_email_returns_existing_record(client, buyer):
    r = client.post("/api/admins", json={"email": "BUYER@corp.com", "company_name": "Other", "role": "internal_user"})
    assert r.status_code == 200
    assert r.json()["id"] == buyer.id
    assert r.json()["company_name"] == buyer.company_name


def test_signup_requires_fields(client):
    r = client.post("/api/admins", json={"email": "x@corp.com"})
    assert r.status_code == 400
    assert r.json() == {"message": "email, company_name, and role are required"}


def test_signup_rejects_unknown_role(client):
    r = client.post("/api/admins", json={"email": "x@corp.com", "company_name": "C", "role": "root"})
    assert r.status_code == 400
    assert "Unknown role" in r.json()["message"]


def test_privileged_account_needs_product_owner(client, global_admin):
    payload = {"email": "ga2@corp.com", "company_name": "C", "role": "global_admin"}
    assert client.post("/api/admins", json=payload).status_code == 403
    r = client.post("/api/admins", json=payload, headers={"X-Admin-Email": global_admin.email})
    assert r.status_code == 403


def test_product_owner_creates_global_admin(client, owner):
    r = client.post(
        "/api/admins",
        json={"email": "ga2@corp.com", "company_name": "C", "role": "global_admin"},
        headers={"X-Admin-Email": "OWNER@corp.com"},
    )
    assert r.status_code == 201
    assert r.json()["role"] == "global_admin"


def test_list_admins_newest_first(client, db):
    make_admin(db, "first@corp.com", "internal_user")
    make_admin(db, "second@corp.com", "internal_user")
    emails = [a["email"] for a in client.get("/api/admins").json()]
    assert emails == ["second@corp.com", "first@corp.com"]


def test_login(client, owner):
    r = client.post("/api/admin/login", json={"email": "Owner@Corp.com", "password": "secret"})
    assert r.status_code == 200
    assert r.json()["role"] == "product_owner"


def test_login_wrong_password(client, owner):
    r = client.post("/api/admin/login", json={"email": owner.email, "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid email or password"}


def test_login_unknown_email(client):
    r = client.post("/api/admin/login", json={"email": "ghost@corp.com", "password": "x"})
    assert r.status_code == 401


def test_login_requires_email(client):
    r = client.post("/api/admin/login", json={"password": "x"})
    assert r.status_code == 400
    assert r.json()["message"] == "email is required"


def test_permissions_endpoint(client, global_admin):
    r = client.get(f"/api/admins/{global_admin.id}/permissions")
    assert r.status_code == 200
    body = r.json()
    assert body["role_name"] == "Global Administrator"
    assert body["has_global_view"] is True
    assert body["can_delete"] is False
    assert body["auctions_label"] == "All Auctions"


def test_permissions_unknown_admin(client):
    r = client.get("/api/admins/999/permissions")
    assert r.status_code == 404
    assert r.json() == {"message": "Admin not found"}
