"""Registration, login and profile endpoints."""

from datetime import datetime, timedelta

import pytest

from sinceonearth.core.auth import decode_access_token, hash_password, verify_password
from sinceonearth.models.invite_code import InviteCode
from sinceonearth.models.user import User
from sinceonearth.services import users as users_service


def _register(client, username="traveller", **extra):
    body = {
        "name": "Test Traveller",
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
    }
    body.update(extra)
    return client.post("/api/auth/register", json=body)


@pytest.fixture
def invite(db):
    code = InviteCode(code="WELCOME2024", max_uses=1, current_uses=0, is_active=True)
    db.add(code)
    db.commit()
    db.refresh(code)
    return code


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_password_hash_roundtrip():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-pass", hashed)
    assert not verify_password("secret123", None)


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------


class TestRegister:
    def test_without_invite_needs_approval(self, client, db):
        resp = _register(client)

        assert resp.status_code == 201
        assert resp.json()["requiresApproval"] is True
        assert "token" not in resp.json()

        user = db.query(User).filter_by(username="traveller").one()
        assert user.approved is False
        assert user.country == "Other"
        assert user.alien == "01"

    def test_alien_numbers_are_sequential(self, client, db):
        _register(client, "first")
        _register(client, "second")

        aliens = sorted(u.alien for u in db.query(User).all())
        assert aliens == ["01", "02"]

    def test_alien_limit(self, client, make_user):
        make_user("veteran", alien="99")
        resp = _register(client)

        assert resp.status_code == 409
        assert resp.json()["message"] == "Maximum number of users reached"

    def test_alien_collision_is_retried(self, db, make_user, monkeypatch):
        make_user("alice")
        real_next_alien = users_service._next_alien
        taken = iter(["01"])
        monkeypatch.setattr(
            users_service, "_next_alien", lambda session: next(taken, None) or real_next_alien(session)
        )

        user = users_service.register_user(
            db, name="Bob B", username="bob", email="bob@example.com", password="secret123"
        )

        assert user.alien == "02"
        assert db.query(User).count() == 2

    def test_repeated_alien_collision_is_409(self, client, make_user, monkeypatch):
        make_user("alice")
        monkeypatch.setattr(users_service, "_next_alien", lambda session: "01")

        resp = _register(client)

        assert resp.status_code == 409
        assert "message" in resp.json()

    def test_with_invite_code_is_approved(self, client, db, invite):
        resp = _register(client, inviteCode="WELCOME2024")

        assert resp.status_code == 201
        data = resp.json()
        assert data["user"]["approved"] is True
        assert decode_access_token(data["token"])["username"] == "traveller"

        db.refresh(invite)
        assert invite.current_uses == 1
        assert invite.used_by == data["user"]["id"]

    def test_used_up_invite_code_rejected(self, client, invite):
        _register(client, "first", inviteCode="WELCOME2024")
        resp = _register(client, "second", inviteCode="WELCOME2024")

        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid or expired invite code"

    def test_expired_invite_code_rejected(self, client, db, invite):
        invite.expires_at = datetime.utcnow() - timedelta(days=1)
        db.commit()

        assert _register(client, inviteCode="WELCOME2024").status_code == 400

    def test_duplicate_email(self, client):
        _register(client)
        resp = client.post(
            "/api/auth/register",
            json={"name": "Other", "username": "other", "email": "traveller@example.com", "password": "secret123"},
        )
        assert resp.status_code == 409

    def test_duplicate_username(self, client):
        _register(client)
        resp = _register(client, email="new@example.com")
        assert resp.status_code == 409

    @pytest.mark.parametrize(
        "override",
        [
            {"password": "123"},
            {"username": "no spaces"},
            {"email": "not-an-email"},
            {"name": "A"},
        ],
    )
    def test_validation(self, client, override):
        assert _register(client, **override).status_code == 400


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


class TestLogin:
    def test_by_email(self, client, make_user):
        user = make_user("alice")
        resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})

        assert resp.status_code == 200
        data = resp.json()
        assert data["user"]["id"] == user.id
        claims = decode_access_token(data["token"])
        assert claims["userId"] == user.id
        assert claims["isAdmin"] is False

    def test_by_username(self, client, make_user):
        make_user("alice")
        resp = client.post("/api/auth/login", json={"email": "alice", "password": "secret123"})
        assert resp.status_code == 200

    def test_wrong_password(self, client, make_user):
        make_user("alice")
        resp = client.post("/api/auth/login", json={"email": "alice", "password": "wrong-pass"})
        assert resp.status_code == 401

    def test_short_wrong_password_is_401(self, client, make_user):
        make_user("alice")
        resp = client.post("/api/auth/login", json={"email": "alice", "password": "abc"})

        assert resp.status_code == 401
        assert resp.json() == {"message": "Invalid credentials"}

    def test_empty_password_rejected(self, client, make_user):
        make_user("alice")
        resp = client.post("/api/auth/login", json={"email": "alice", "password": ""})
        assert resp.status_code == 400

    def test_unknown_user(self, client):
        resp = client.post("/api/auth/login", json={"email": "ghost", "password": "secret123"})
        assert resp.status_code == 401

    def test_pending_user(self, client, make_user):
        make_user("alice", approved=False)
        resp = client.post("/api/auth/login", json={"email": "alice", "password": "secret123"})

        assert resp.status_code == 403
        assert resp.json()["requiresApproval"] is True
        assert resp.json()["message"].startswith("Your account is pending admin approval")


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class TestProfile:
    def test_current_user(self, client, make_user, headers_for):
        user = make_user("alice", profile_icon="rocket")
        resp = client.get("/api/auth/user", headers=headers_for(user))

        assert resp.status_code == 200
        data = resp.json()
        assert data["username"] == "alice"
        assert data["profile_icon"] == "rocket"
        assert data["profile_setup_complete"] is False

    def test_missing_header(self, client):
        assert client.get("/api/auth/user").status_code == 401

    def test_malformed_header(self, client):
        resp = client.get("/api/auth/user", headers={"Authorization": "Token abc"})
        assert resp.status_code == 401

    def test_update_profile(self, client, make_user, headers_for):
        user = make_user("alice")
        resp = client.patch(
            "/api/auth/profile",
            json={"name": "Alice A", "username": "alice_a", "email": "alice@new.example.com", "country": "NL"},
            headers=headers_for(user),
        )

        assert resp.status_code == 200
        assert resp.json()["user"]["username"] == "alice_a"
        assert resp.json()["user"]["country"] == "NL"

    def test_update_profile_email_taken(self, client, make_user, headers_for):
        user = make_user("alice")
        make_user("bob")
        resp = client.patch(
            "/api/auth/profile",
            json={"name": "Alice", "username": "alice", "email": "bob@example.com"},
            headers=headers_for(user),
        )
        assert resp.status_code == 409

    def test_change_password(self, client, make_user, headers_for):
        user = make_user("alice")
        headers = headers_for(user)

        bad = client.patch(
            "/api/auth/password",
            json={"currentPassword": "nope-nope", "newPassword": "brandnew1"},
            headers=headers,
        )
        assert bad.status_code == 401

        ok = client.patch(
            "/api/auth/password",
            json={"currentPassword": "secret123", "newPassword": "brandnew1"},
            headers=headers,
        )
        assert ok.status_code == 200

        login = client.post("/api/auth/login", json={"email": "alice", "password": "brandnew1"})
        assert login.status_code == 200

    def test_profile_setup_and_icon(self, client, make_user, headers_for):
        user = make_user("alice")
        headers = headers_for(user)

        resp = client.post(
            "/api/auth/profile-setup",
            json={"profile_icon": "plane", "profile_color": "#ff0000"},
            headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["profile_setup_complete"] is True

        resp = client.patch("/api/auth/profile-icon", json={"profile_icon": "globe"}, headers=headers)
        assert resp.json()["user"]["profile_icon"] == "globe"

        resp = client.patch("/api/auth/profile-icon", json={}, headers=headers)
        assert resp.status_code == 400

    def test_delete_account_removes_travel_log(self, client, make_user, headers_for, db):
        user = make_user("alice")
        user_id = user.id
        headers = headers_for(user)
        client.post(
            "/api/flights",
            json={"date": "2024-01-01", "flight_number": "KL1001", "departure": "AMS", "arrival": "LHR", "status": "Landed"},
            headers=headers,
        )

        resp = client.delete("/api/auth/account", headers=headers)
        assert resp.status_code == 200

        db.expire_all()
        assert db.get(User, user_id) is None
        assert client.get("/api/auth/user", headers=headers).status_code == 404


def test_users_table_columns(db):
    columns = set(User.__table__.columns.keys())
    assert {"alien", "username", "email", "password_hash", "profile_icon", "profile_color"} <= columns
    assert "profile_image_url" not in columns
