from lms_api.config import settings


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_returns_token(client):
    response = client.post(
        "/api/users/login",
        json={"username": "admin", "password": settings.SEED_PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert list(body) == ["Token"]
    assert body["Token"].count(".") == 2


def test_login_wrong_password(client):
    response = client.post("/api/users/login", json={"username": "admin", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_login_unknown_user_looks_the_same(client):
    response = client.post("/api/users/login", json={"username": "ghost", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_login_missing_fields(client):
    response = client.post("/api/users/login", json={"username": "admin"})
    assert response.status_code == 422


def test_admin_lists_users(client, admin):
    response = client.get("/api/users", headers=admin)
    assert response.status_code == 200
    users = response.json()
    assert {u["username"] for u in users} == {"admin", "instructor", "student"}
    assert all("password_hash" not in u for u in users)
    by_name = {u["username"]: u for u in users}
    assert [r["name"] for r in by_name["admin"]["roles"]] == ["Admin"]


def test_no_token_is_401(client):
    response = client.get("/api/users")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_401(client):
    response = client.get("/api/users", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


def test_non_admin_is_403(client, student, instructor):
    assert client.get("/api/users", headers=student).status_code == 403
    assert client.get("/api/users", headers=instructor).status_code == 403


def test_me(client, student):
    response = client.get("/api/users/me", headers=student)
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "student"
    assert [r["name"] for r in body["roles"]] == ["Student"]


def test_metrics_endpoint(client):
    client.get("/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text
