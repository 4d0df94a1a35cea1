from jose import jwt


def test_login_returns_token_with_role_and_branch_claims(client, branches, make_user):
    centro, norte = branches
    make_user("ana", password="pw1", branch_ids=[centro.id, norte.id])

    response = client.post("/login", json={"username": "ana", "password": "pw1"})

    assert response.status_code == 200
    body = response.json()
    assert body["isSuperAdmin"] is False
    assert body["role"] == "admin"
    assert body["clientBranch"] is None

    claims = jwt.get_unverified_claims(body["token"])
    assert claims["role"] == "admin"
    assert sorted(claims["branchIds"]) == sorted([centro.id, norte.id])
    assert "exp" in claims


def test_login_username_is_case_insensitive(client, branches, make_user):
    make_user("Ana", password="pw1")
    response = client.post("/login", json={"username": "ANA", "password": "pw1"})
    assert response.status_code == 200


def test_client_user_login_reports_branch_name(client, branches, make_user):
    centro, _ = branches
    make_user("kiosco", password="pw1", client_branch_id=centro.id)

    body = client.post("/login", json={"username": "kiosco", "password": "pw1"}).json()

    assert body["role"] == "clientUser"
    assert body["clientBranch"] == "Centro"
    claims = jwt.get_unverified_claims(body["token"])
    assert claims["clientBranch"] == "Centro"
    assert claims["branchIds"] == []


def test_wrong_password_and_unknown_user_look_the_same(client, branches, make_user):
    make_user("ana", password="pw1")

    wrong = client.post("/login", json={"username": "ana", "password": "nope"})
    unknown = client.post("/login", json={"username": "nadie", "password": "pw1"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Credenciales inválidas"}


def test_login_requires_both_fields(client):
    response = client.post("/login", json={"username": "ana"})
    assert response.status_code == 400
    assert "password" in response.json()["error"]


def test_login_token_opens_protected_routes(client, branches, make_user, add_employee):
    centro, norte = branches
    make_user("ana", password="pw1", branch_ids=[centro.id])
    add_employee("Juan", centro.id)
    add_employee("Pedro", norte.id)

    token = client.post("/login", json={"username": "ana", "password": "pw1"}).json()["token"]
    response = client.get("/employees", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert [e["name"] for e in response.json()] == ["Juan"]
