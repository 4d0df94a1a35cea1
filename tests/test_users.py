import pytest

from ratings_api.models import Role, User, UserBranch


class TestListUsers:
    def test_branches_depend_on_role(self, client, branches, make_user, super_headers):
        centro, norte = branches
        make_user("ana", branch_ids=[centro.id, norte.id])
        make_user("kiosco", client_branch_id=norte.id)

        body = client.get("/users", headers=super_headers).json()

        ana, kiosco = body
        assert ana["role"] == "admin"
        assert sorted(b["name"] for b in ana["branches"]) == ["Centro", "Norte"]
        assert kiosco["role"] == "clientUser"
        assert [b["name"] for b in kiosco["branches"]] == ["Norte"]
        assert "password" not in ana and "passwordHash" not in ana

    def test_only_super_admin(self, client, branches, centro_headers):
        assert client.get("/users", headers=centro_headers).status_code == 403


class TestCreateUser:
    def test_create_admin_with_branches(self, client, db, branches, super_headers):
        centro, norte = branches
        response = client.post(
            "/users",
            json={"username": "Marta", "password": "secreta", "branchIds": [centro.id, norte.id]},
            headers=super_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Usuario creado"
        user = db.get(User, body["id"])
        assert user.username == "marta"
        assert user.role == Role.ADMIN
        assert {ub.branch_id for ub in user.user_branches} == {centro.id, norte.id}

    def test_create_client_user(self, client, db, branches, super_headers):
        centro, _ = branches
        response = client.post(
            "/users",
            json={"username": "kiosco", "password": "x", "role": "clientUser", "clientBranchId": centro.id, "branchIds": [centro.id]},
            headers=super_headers,
        )

        user = db.get(User, response.json()["id"])
        assert user.role == Role.CLIENT_USER
        assert user.client_branch_id == centro.id
        assert user.user_branches == []

    def test_client_user_requires_branch(self, client, branches, super_headers):
        response = client.post("/users", json={"username": "kiosco", "password": "x", "role": "clientUser"}, headers=super_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "clientUser requiere una sucursal asignada"}

    def test_username_is_unique_ignoring_case(self, client, branches, make_user, super_headers):
        make_user("ana")
        response = client.post("/users", json={"username": "ANA", "password": "x"}, headers=super_headers)
        assert response.status_code == 409

    def test_unknown_branch(self, client, branches, super_headers):
        response = client.post("/users", json={"username": "ana", "password": "x", "branchIds": [999]}, headers=super_headers)
        assert response.status_code == 404

    @pytest.mark.parametrize("payload", [
        {"password": "x"},
        {"username": "ana"},
        {"username": "", "password": "x"},
        {"username": "   ", "password": "x"},
        {"username": "ana", "password": "x", "role": "owner"},
    ])
    def test_invalid_payload(self, client, super_headers, payload):
        assert client.post("/users", json=payload, headers=super_headers).status_code == 400

    def test_only_super_admin(self, client, branches, centro_headers):
        response = client.post("/users", json={"username": "ana", "password": "x"}, headers=centro_headers)
        assert response.status_code == 403


class TestUpdateUser:
    def test_branch_links_are_replaced_not_merged(self, client, db, branches, make_user, super_headers):
        centro, norte = branches
        ana = make_user("ana", branch_ids=[centro.id])

        response = client.put(f"/users/{ana.id}", json={"branchIds": [norte.id]}, headers=super_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Usuario actualizado"}
        links = db.query(UserBranch).filter(UserBranch.user_id == ana.id).all()
        assert [link.branch_id for link in links] == [norte.id]

    def test_resubmitting_same_links(self, client, db, branches, make_user, super_headers):
        centro, norte = branches
        ana = make_user("ana", branch_ids=[centro.id, norte.id])

        response = client.put(f"/users/{ana.id}", json={"branchIds": [centro.id, norte.id]}, headers=super_headers)

        assert response.status_code == 200
        assert db.query(UserBranch).filter(UserBranch.user_id == ana.id).count() == 2

    def test_switch_to_client_user_drops_links(self, client, db, branches, make_user, super_headers):
        centro, norte = branches
        ana = make_user("ana", branch_ids=[centro.id, norte.id])

        client.put(f"/users/{ana.id}", json={"role": "clientUser", "clientBranchId": norte.id}, headers=super_headers)

        db.expire_all()
        user = db.get(User, ana.id)
        assert user.role == Role.CLIENT_USER
        assert user.client_branch_id == norte.id
        assert user.user_branches == []

    def test_switch_back_to_admin_clears_client_branch(self, client, db, branches, make_user, super_headers):
        centro, _ = branches
        kiosco = make_user("kiosco", client_branch_id=centro.id)

        client.put(f"/users/{kiosco.id}", json={"role": "admin", "branchIds": [centro.id]}, headers=super_headers)

        db.expire_all()
        user = db.get(User, kiosco.id)
        assert user.role == Role.ADMIN
        assert user.client_branch_id is None
        assert [ub.branch_id for ub in user.user_branches] == [centro.id]

    def test_client_user_without_branch_is_rejected(self, client, branches, make_user, super_headers):
        ana = make_user("ana")
        response = client.put(f"/users/{ana.id}", json={"role": "clientUser"}, headers=super_headers)
        assert response.status_code == 400

    def test_password_change(self, client, branches, make_user, super_headers):
        ana = make_user("ana", password="vieja")

        client.put(f"/users/{ana.id}", json={"password": "nueva"}, headers=super_headers)

        assert client.post("/login", json={"username": "ana", "password": "vieja"}).status_code == 401
        assert client.post("/login", json={"username": "ana", "password": "nueva"}).status_code == 200

    def test_unknown_user(self, client, super_headers):
        assert client.put("/users/321", json={}, headers=super_headers).status_code == 404

    def test_only_super_admin(self, client, branches, make_user, centro_headers):
        ana = make_user("ana")
        assert client.put(f"/users/{ana.id}", json={}, headers=centro_headers).status_code == 403


class TestDeleteUser:
    def test_delete_removes_links(self, client, db, branches, make_user, super_headers):
        ana = make_user("ana", branch_ids=[b.id for b in branches])
        ana_id = ana.id

        response = client.delete(f"/users/{ana_id}", headers=super_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.get(User, ana_id) is None
        assert db.query(UserBranch).count() == 0

    def test_self_delete_is_rejected_even_for_super_admin(self, client, headers_for):
        response = client.delete("/users/5", headers=headers_for(user_id=5, is_super_admin=True))
        assert response.status_code == 400
        assert response.json() == {"error": "No podés eliminar tu propio usuario"}

    def test_self_delete_checked_before_permissions(self, client, headers_for):
        assert client.delete("/users/5", headers=headers_for(user_id=5)).status_code == 400

    def test_only_super_admin(self, client, branches, make_user, centro_headers):
        ana = make_user("ana")
        assert client.delete(f"/users/{ana.id}", headers=centro_headers).status_code == 403

    def test_unknown_user(self, client, super_headers):
        assert client.delete("/users/321", headers=super_headers).status_code == 404
