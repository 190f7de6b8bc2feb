"""
Notification tests: admin delivery endpoint and the user inbox.

Run: python -m pytest genhpp/tests/test_notifications_api.py -v
"""

from genhpp.api.routes.notifications import INVALID_ITEM_MESSAGE, NO_DATA_MESSAGE, SENT_MESSAGE
from genhpp.db.models import Notification, User
from genhpp.tests.conftest import make_admin


SEND_URL = "/api/send-admin-notification"


def _send(client, payload, headers=None):
    return client.post(SEND_URL, json=payload, headers=headers)


class TestSendAdminNotification:
    def test_requires_admin(self, client):
        resp = _send(client, {"userId": 1, "title": "Hai", "content": "Isi"})
        assert resp.status_code == 403

    def test_send_single(self, client, db):
        make_admin()
        resp = _send(client, {"userId": 1, "title": "Pengumuman", "content": "Fitur baru!"})
        assert resp.status_code == 200
        assert resp.json() == {"message": SENT_MESSAGE}

        notification = db.query(Notification).one()
        assert notification.type == "admin"
        assert notification.is_read is False

    def test_send_list(self, client, db):
        make_admin()
        db.add(User(id=2, name="Second", email="second@genhpp.local"))
        db.commit()

        resp = _send(
            client,
            [
                {"userId": 1, "title": "A", "content": "Satu"},
                {"userId": 2, "title": "B", "content": "Dua", "type": "system"},
            ],
        )
        assert resp.status_code == 200
        assert db.query(Notification).count() == 2
        assert db.query(Notification).filter_by(user_id=2).one().type == "system"

    def test_empty_list_rejected(self, client):
        make_admin()
        resp = _send(client, [])
        assert resp.status_code == 400
        assert resp.json()["detail"] == NO_DATA_MESSAGE

    def test_missing_body_rejected(self, client):
        make_admin()
        resp = client.post(SEND_URL)
        assert resp.status_code == 400
        assert resp.json()["detail"] == NO_DATA_MESSAGE

    def test_invalid_item_rejects_whole_batch(self, client, db):
        make_admin()
        resp = _send(
            client,
            [
                {"userId": 1, "title": "OK", "content": "Valid"},
                {"userId": 1, "title": "Tanpa isi"},
            ],
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == INVALID_ITEM_MESSAGE
        assert db.query(Notification).count() == 0

    def test_non_object_item_rejected(self, client):
        make_admin()
        resp = _send(client, ["bukan objek"])
        assert resp.status_code == 400
        assert resp.json()["detail"] == INVALID_ITEM_MESSAGE

    def test_unknown_user_rejected(self, client, db):
        make_admin()
        resp = _send(client, {"userId": 77, "title": "Hai", "content": "Isi"})
        assert resp.status_code == 400
        assert db.query(Notification).count() == 0

    def test_get_not_allowed(self, client):
        assert client.get(SEND_URL).status_code == 405


class TestInbox:
    def _seed(self, client, count=3):
        make_admin()
        for i in range(count):
            _send(client, {"userId": 1, "title": f"Judul {i}", "content": "Isi"})

    def test_list_with_unread_count(self, client):
        self._seed(client)
        resp = client.get("/api/notifications/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["unread_count"] == 3
        assert [n["title"] for n in data["notifications"]] == ["Judul 2", "Judul 1", "Judul 0"]

    def test_mark_one_read(self, client):
        self._seed(client, count=2)
        first = client.get("/api/notifications/").json()["notifications"][0]

        resp = client.post(f"/api/notifications/{first['id']}/read")
        assert resp.status_code == 200
        assert resp.json()["is_read"] is True
        assert client.get("/api/notifications/").json()["unread_count"] == 1

    def test_mark_all_read(self, client):
        self._seed(client)
        resp = client.post("/api/notifications/read-all")
        assert resp.status_code == 200
        assert client.get("/api/notifications/").json()["unread_count"] == 0

    def test_cannot_read_someone_elses_notification(self, client, db, token_auth):
        db.add(Notification(user_id=1, title="Pribadi", content="Rahasia"))
        db.commit()
        notification_id = db.query(Notification).one().id

        other = token_auth("other-sub", email="other@example.com")
        resp = client.post(f"/api/notifications/{notification_id}/read", headers=other)
        assert resp.status_code == 403
