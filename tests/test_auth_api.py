from __future__ import annotations

from civicreport.models.user import User


def _register(client, **overrides):
    payload = {
        "fullName": "Alice Walker",
        "email": "alice@example.com",
        "username": "alice",
        "password": "s3cret!",
    }
    payload.update(overrides)
    return client.post("/api/register", json=payload)


def test_register_creates_citizen_by_default(client, db_session):
    resp = _register(client)
    assert resp.status_code == 201
    assert resp.json() == {"message": "User registered successfully!"}
    assert "password" not in resp.text

    user = db_session.query(User).filter(User.username == "alice").one()
    assert user.role == "citizen"
    assert user.full_name == "Alice Walker"
    # Stored as a bcrypt hash, never the raw value
    assert user.password_hash != "s3cret!"
    assert user.password_hash.startswith("$2")


def test_register_admin_role(client, db_session):
    resp = _register(client, username="root", email="root@example.com", role="admin")
    assert resp.status_code == 201
    assert db_session.query(User).filter(User.username == "root").one().role == "admin"


def test_duplicate_username_conflicts_and_keeps_first_user(client, db_session):
    assert _register(client).status_code == 201

    resp = _register(client, email="other@example.com", fullName="Impostor")
    assert resp.status_code == 409
    assert resp.json() == {"error": "Username or email already exists."}

    users = db_session.query(User).all()
    assert len(users) == 1
    assert users[0].full_name == "Alice Walker"

    login = client.post("/api/login", json={"username": "alice", "password": "s3cret!"})
    assert login.status_code == 200


def test_duplicate_email_conflicts(client):
    assert _register(client).status_code == 201
    resp = _register(client, username="alice2")
    assert resp.status_code == 409


def test_register_missing_field_is_client_error(client, db_session):
    resp = client.post(
        "/api/register",
        json={"fullName": "No Mail", "username": "nomail", "password": "x"},
    )
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert db_session.query(User).count() == 0


def test_register_rejects_unknown_role(client):
    resp = _register(client, role="superuser")
    assert resp.status_code == 400


def test_login_returns_user_without_password(client):
    _register(client)
    resp = client.post("/api/login", json={"username": "alice", "password": "s3cret!"})
    assert resp.status_code == 200

    user = resp.json()["user"]
    assert user["username"] == "alice"
    assert user["fullName"] == "Alice Walker"
    assert user["email"] == "alice@example.com"
    assert user["role"] == "citizen"
    assert "password" not in user
    assert "passwordHash" not in user
    assert "password_hash" not in user


def test_login_wrong_password_and_unknown_user_look_identical(client):
    _register(client)
    wrong_password = client.post("/api/login", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/api/login", json={"username": "bob", "password": "s3cret!"})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid username or password."}


def test_login_missing_password_is_unauthorized(client):
    _register(client)
    resp = client.post("/api/login", json={"username": "alice"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid username or password."}


def test_login_missing_username_is_unauthorized(client):
    resp = client.post("/api/login", json={"password": "s3cret!"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid username or password."}


def test_login_empty_body_is_unauthorized(client):
    assert client.post("/api/login", json={}).status_code == 401
    assert client.post("/api/login").status_code == 401
