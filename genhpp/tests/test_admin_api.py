"""
Admin tests: roles, content report review and the maintenance gate.

Run: python -m pytest genhpp/tests/test_admin_api.py -v
"""

import pytest

from genhpp.api.auth import MAINTENANCE_MESSAGE, UPDATE_MESSAGE
from genhpp.db.models import User
from genhpp.tests.conftest import make_admin


@pytest.fixture
def admin_and_member(client, db, token_auth):
    """An admin and a regular member, both registered through the API."""
    admin = token_auth("admin-sub", email="admin@example.com")
    member = token_auth("member-sub", email="member@example.com")
    client.get("/api/profile", headers=admin)
    client.get("/api/profile", headers=member)
    make_admin(db.query(User).filter_by(auth_id="admin-sub").one().id)
    return admin, member


class TestAccess:
    def test_non_admin_forbidden(self, client):
        assert client.get("/api/admin/users").status_code == 403
        assert client.put("/api/admin/site-status", json={"is_maintenance_mode": True}).status_code == 403

    def test_list_users(self, client):
        make_admin()
        resp = client.get("/api/admin/users")
        assert resp.status_code == 200
        assert resp.json()[0]["is_admin"] is True


class TestRoles:
    def test_grant_and_revoke(self, client, db, admin_and_member):
        admin, _ = admin_and_member
        member_id = db.query(User).filter_by(auth_id="member-sub").one().id

        resp = client.put(f"/api/admin/users/{member_id}/admin", json={"is_admin": True}, headers=admin)
        assert resp.status_code == 200
        assert resp.json()["is_admin"] is True

        resp = client.put(f"/api/admin/users/{member_id}/admin", json={"is_admin": False}, headers=admin)
        assert resp.json()["is_admin"] is False

    def test_cannot_revoke_self(self, client):
        make_admin()
        resp = client.put("/api/admin/users/1/admin", json={"is_admin": False})
        assert resp.status_code == 400

    def test_unknown_user_returns_404(self, client):
        make_admin()
        assert client.put("/api/admin/users/99/admin", json={"is_admin": True}).status_code == 404


class TestContentReports:
    def _report(self, client):
        calc = client.post(
            "/api/calculations/",
            json={
                "product_name": "Sambal",
                "materials": [{"name": "Cabai", "cost": 30000, "qty": 1}],
                "margin": 30,
                "share_publicly": True,
            },
        ).json()
        post = client.get("/api/community/calculations").json()[0]
        assert post["calculation_id"] == calc["id"]
        resp = client.post(
            f"/api/community/calculations/{post['id']}/reports",
            json={"category": "Lainnya", "reason": "Harga tidak masuk akal"},
        )
        return resp.json()

    def test_list_and_resolve(self, client):
        report = self._report(client)
        make_admin()

        open_reports = client.get("/api/admin/reports", params={"report_status": "open"}).json()
        assert [r["id"] for r in open_reports] == [report["id"]]

        resp = client.put(f"/api/admin/reports/{report['id']}", json={"status": "resolved"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "resolved"
        assert client.get("/api/admin/reports", params={"report_status": "open"}).json() == []

    def test_resolve_missing_report(self, client):
        make_admin()
        assert client.put("/api/admin/reports/5", json={"status": "resolved"}).status_code == 404


class TestSiteStatus:
    def test_public_status_defaults_off(self, client):
        resp = client.get("/api/site-status")
        assert resp.status_code == 200
        assert resp.json()["is_maintenance_mode"] is False
        assert resp.json()["is_update_mode"] is False

    def test_maintenance_blocks_members_not_admins(self, client, admin_and_member):
        admin, member = admin_and_member
        resp = client.put("/api/admin/site-status", json={"is_maintenance_mode": True}, headers=admin)
        assert resp.status_code == 200
        assert resp.json()["is_maintenance_mode"] is True

        blocked = client.get("/api/calculations/", headers=member)
        assert blocked.status_code == 503
        assert blocked.json()["detail"] == MAINTENANCE_MESSAGE
        assert client.get("/api/calculations/", headers=admin).status_code == 200

        # Public surfaces stay reachable
        assert client.get("/api/site-status").json()["is_maintenance_mode"] is True
        assert client.post("/api/calculators/ideal-price", json={"cost": 1000, "margin": 10}).status_code == 200

    def test_update_mode_message(self, client, admin_and_member):
        admin, member = admin_and_member
        client.put("/api/admin/site-status", json={"is_update_mode": True}, headers=admin)
        blocked = client.get("/api/profile", headers=member)
        assert blocked.status_code == 503
        assert blocked.json()["detail"] == UPDATE_MESSAGE

    def test_partial_update_keeps_other_flag(self, client):
        make_admin()
        client.put("/api/admin/site-status", json={"is_update_mode": True})
        resp = client.put("/api/admin/site-status", json={"is_maintenance_mode": True})
        assert resp.json()["is_update_mode"] is True
        assert resp.json()["is_maintenance_mode"] is True


class TestProfile:
    def test_get_profile(self, client):
        data = client.get("/api/profile").json()
        assert data["id"] == 1
        assert data["name"] == "Test User"

    def test_update_name(self, client):
        resp = client.put("/api/profile", json={"name": "  Warung Bu Sri  "})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Warung Bu Sri"

    def test_short_name_rejected(self, client):
        assert client.put("/api/profile", json={"name": " a "}).status_code == 400

    def test_name_defaults_from_email(self, client, token_auth):
        headers = token_auth("new-sub", email="tokokue@example.com")
        assert client.get("/api/profile", headers=headers).json()["name"] == "tokokue"
