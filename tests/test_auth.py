from bodega.security.password import hash_password, verify_password

ADMIN = {"username": "supervisor", "password": "Sup3rvisor!"}


def login(client, username, password):
    return client.post("/api/v1/auth/login", json={"username": username, "password": password})


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def test_password_hashing():
    hashed = hash_password("Sup3rvisor!")

    assert hashed != "Sup3rvisor!"
    assert verify_password("Sup3rvisor!", hashed)
    assert not verify_password("wrong-password", hashed)


def test_bootstrap_creates_admin_only_once(unauthenticated_client):
    first = unauthenticated_client.post("/api/v1/auth/bootstrap", json={**ADMIN, "is_admin": False})

    assert first.status_code == 200
    assert first.json()["is_admin"] is True

    second = unauthenticated_client.post("/api/v1/auth/bootstrap", json={
        "username": "intruso",
        "password": "intruso123",
    })
    assert second.status_code == 403


def test_login_and_me(unauthenticated_client):
    unauthenticated_client.post("/api/v1/auth/bootstrap", json=ADMIN)

    response = login(unauthenticated_client, ADMIN["username"], ADMIN["password"])

    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["operator"]["username"] == "supervisor"

    me = unauthenticated_client.get("/api/v1/auth/me", headers=auth_header(token))
    assert me.status_code == 200
    assert me.json()["is_admin"] is True


def test_login_wrong_password(unauthenticated_client):
    unauthenticated_client.post("/api/v1/auth/bootstrap", json=ADMIN)

    response = login(unauthenticated_client, ADMIN["username"], "not-the-password")

    assert response.status_code == 401


def test_invalid_token_rejected(unauthenticated_client):
    response = unauthenticated_client.get("/api/v1/auth/me", headers=auth_header("not-a-token"))

    assert response.status_code == 401


def test_operator_cannot_open_admin_endpoints(unauthenticated_client):
    unauthenticated_client.post("/api/v1/auth/bootstrap", json=ADMIN)
    admin_token = login(unauthenticated_client, ADMIN["username"], ADMIN["password"]).json()["access_token"]

    created = unauthenticated_client.post(
        "/api/v1/auth/register",
        json={"username": "kiosko", "password": "kiosko1234"},
        headers=auth_header(admin_token),
    )
    assert created.status_code == 201
    assert created.json()["is_admin"] is False

    operator_token = login(unauthenticated_client, "kiosko", "kiosko1234").json()["access_token"]
    headers = auth_header(operator_token)

    assert unauthenticated_client.get("/api/v1/employees", headers=headers).status_code == 200
    assert unauthenticated_client.get("/api/v1/metrics", headers=headers).status_code == 403
    assert unauthenticated_client.post(
        "/api/v1/auth/register",
        json={"username": "otro", "password": "otro12345"},
        headers=headers,
    ).status_code == 403


def test_register_duplicate_username(unauthenticated_client):
    unauthenticated_client.post("/api/v1/auth/bootstrap", json=ADMIN)
    token = login(unauthenticated_client, ADMIN["username"], ADMIN["password"]).json()["access_token"]

    response = unauthenticated_client.post(
        "/api/v1/auth/register",
        json={"username": "supervisor", "password": "another-pass"},
        headers=auth_header(token),
    )

    assert response.status_code == 409


def test_health_is_public(unauthenticated_client):
    response = unauthenticated_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
