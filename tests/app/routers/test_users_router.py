"""Tests for users router."""


def test_register_user(client):
    payload = {
        "username": "dave",
        "email": "dave@example.com",
        "password": "dave-pass",
        "full_name": "Dave D",
    }
    r = client.post("/users/register", json=payload)
    assert r.status_code == 201
    data = r.json()
    assert data["username"] == "dave"
    assert data["email"] == "dave@example.com"
    assert data["is_online"] is False
    assert data["last_seen"] is None
    assert "password_hash" not in data
    assert "password" not in data


def test_register_duplicate_username(client, setup_user):
    payload = {
        "username": setup_user.username,
        "email": "fresh@example.com",
        "password": "long-enough",
    }
    r = client.post("/users/register", json=payload)
    assert r.status_code == 409
    assert r.json()["detail"] == "Username already exists"


def test_register_duplicate_email(client, setup_user):
    payload = {
        "username": "fresh-name",
        "email": setup_user.email,
        "password": "long-enough",
    }
    r = client.post("/users/register", json=payload)
    assert r.status_code == 409
    assert r.json()["detail"] == "Email already exists"


def test_register_rejects_short_password(client):
    payload = {"username": "erin", "email": "erin@example.com", "password": "123"}
    r = client.post("/users/register", json=payload)
    assert r.status_code == 422


def test_login(client, setup_user, user_password):
    r = client.post(
        "/users/login", json={"email": setup_user.email, "password": user_password}
    )
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == setup_user.id
    assert data["is_online"] is True
    assert data["last_seen"] is None


def test_login_failures_are_indistinguishable(client, setup_user):
    wrong_password = client.post(
        "/users/login", json={"email": setup_user.email, "password": "nope-nope"}
    )
    unknown_email = client.post(
        "/users/login", json={"email": "ghost@example.com", "password": "nope-nope"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_list_users_public_projection(client, setup_user_pair):
    r = client.get("/users")
    assert r.status_code == 200
    users = r.json()
    assert [u["username"] for u in users] == ["alice", "bob"]
    for user in users:
        assert "email" not in user
        assert "password_hash" not in user


def test_presence_updates(client, setup_user):
    r = client.put(f"/users/{setup_user.id}/presence", json={"is_online": True})
    assert r.status_code == 200
    assert r.json()["is_online"] is True
    assert r.json()["last_seen"] is None

    r = client.post(f"/users/{setup_user.id}/logout")
    assert r.status_code == 200
    assert r.json()["is_online"] is False
    assert r.json()["last_seen"] is not None


def test_presence_unknown_user(client):
    r = client.put("/users/999999/presence", json={"is_online": False})
    assert r.status_code == 404


def test_healthcheck(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
