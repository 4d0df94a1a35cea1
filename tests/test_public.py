import os

from ratings_api.config import get_settings


class TestBranchEmployeesByName:
    def test_lookup_ignores_case(self, client, branches, add_employee):
        centro, norte = branches
        add_employee("Ana", centro.id)
        add_employee("Bruno", centro.id, active=False)
        add_employee("Carla", norte.id)

        response = client.get("/api/employees", params={"branch": "cENTRO"})

        assert response.status_code == 200
        assert [e["name"] for e in response.json()] == ["Ana", "Bruno"]
        assert response.json()[1]["active"] is False

    def test_unknown_branch(self, client, branches):
        response = client.get("/api/employees", params={"branch": "Oeste"})
        assert response.status_code == 404
        assert response.json() == {"error": "Sucursal no encontrada"}

    def test_branch_is_required(self, client):
        assert client.get("/api/employees").status_code == 400


class TestSiteRoutes:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "API funcionando correctamente"}

    def test_healthz(self, client):
        body = client.get("/healthz").json()
        assert body["status"] == "ok"
        assert body["env"] == get_settings().ENV

    def test_client_page_served_for_any_branch(self, client):
        settings = get_settings()
        page = os.path.join(settings.PUBLIC_DIR, "client.html")
        with open(page, "w", encoding="utf-8") as fh:
            fh.write("<html>cliente</html>")
        try:
            response = client.get("/centro")
            assert response.status_code == 200
            assert "cliente" in response.text
        finally:
            os.remove(page)

    def test_client_page_missing(self, client):
        response = client.get("/centro")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_uploaded_images_are_served(self, client):
        settings = get_settings()
        path = os.path.join(settings.PUBLIC_DIR, settings.IMAGES_SUBDIR, "foto.png")
        with open(path, "wb") as fh:
            fh.write(b"png")
        response = client.get("/images/foto.png")
        assert response.status_code == 200
        assert response.content == b"png"
