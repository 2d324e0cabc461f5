from legalease.config import AUTH_COOKIE_NAME
from legalease.core.security import create_access_token

from conftest import signup


def test_signup_sets_session_cookie(client):
    response = client.post("/api/auth/signup", json={"email": "Ana@Example.com", "password": "pw", "name": "Ana"})

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "ana@example.com"
    assert "passwordHash" not in user
    assert AUTH_COOKIE_NAME in response.cookies


def test_signup_requires_all_fields(client):
    response = client.post("/api/auth/signup", json={"email": "ana@example.com", "password": "pw"})
    assert response.status_code == 400


def test_signup_rejects_existing_email(client):
    signup(client)
    response = client.post("/api/auth/signup", json={"email": "ana@example.com", "password": "x", "name": "A"})
    assert response.status_code == 409


def test_signin_checks_password(client):
    signup(client, password="right-password")
    client.cookies.clear()

    bad = client.post("/api/auth/signin", json={"email": "ana@example.com", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid credentials"

    unknown = client.post("/api/auth/signin", json={"email": "nobody@example.com", "password": "x"})
    assert unknown.status_code == 401

    good = client.post("/api/auth/signin", json={"email": "ana@example.com", "password": "right-password"})
    assert good.status_code == 200
    assert client.get("/api/auth/me").json()["user"]["name"] == "Ana"


def test_signin_requires_fields(client):
    assert client.post("/api/auth/signin", json={"email": "ana@example.com"}).status_code == 400


def test_me_without_session_is_null(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json() == {"user": None}


def test_signout_clears_session(auth_client):
    assert auth_client.post("/api/auth/signout").json() == {"success": True}
    assert auth_client.get("/api/auth/me").json() == {"user": None}


def test_protected_routes_need_a_session(client):
    assert client.get("/api/documents").status_code == 401
    response = client.get("/api/documents", headers={"Cookie": f"{AUTH_COOKIE_NAME}=not-a-jwt"})
    assert response.status_code == 401


def test_token_for_deleted_user_is_404(client):
    token = create_access_token({"sub": "ghost"})
    response = client.get("/api/documents", headers={"Cookie": f"{AUTH_COOKIE_NAME}={token}"})
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_bearer_token_is_accepted(client):
    user = signup(client)
    client.cookies.clear()
    token = create_access_token({"sub": user["id"]})

    response = client.get("/api/documents", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_bearer_token_used_when_cookie_is_stale(client):
    user = signup(client)
    client.cookies.clear()
    token = create_access_token({"sub": user["id"]})

    response = client.get("/api/documents", headers={
        "Cookie": f"{AUTH_COOKIE_NAME}=expired-garbage",
        "Authorization": f"Bearer {token}"
    })
    assert response.status_code == 200

    me = client.get("/api/auth/me", headers={
        "Cookie": f"{AUTH_COOKIE_NAME}=expired-garbage",
        "Authorization": f"Bearer {token}"
    })
    assert me.json()["user"]["id"] == user["id"]
