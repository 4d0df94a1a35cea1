import os
import tempfile

# La configuración se lee al importar el paquete: va antes de cualquier import de ratings_api
_TMP = tempfile.mkdtemp(prefix="ratings-tests-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP, "test.db")
os.environ["PUBLIC_DIR"] = os.path.join(_TMP, "public")

import pytest
from fastapi.testclient import TestClient

from ratings_api.crud.users import create_user
from ratings_api.database import Base, SessionLocal, engine
from ratings_api.main import app
from ratings_api.models import AdminAccess, Branch, ClientAccess, Employee, Role
from ratings_api.security import create_access_token


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_database():
    """Tablas vacías en cada test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def branches(db):
    """Dos sucursales: Centro (1) y Norte (2)."""
    centro = Branch(name="Centro", address="Av. Siempre Viva 742")
    norte = Branch(name="Norte")
    db.add_all([centro, norte])
    db.commit()
    return centro, norte


@pytest.fixture
def add_employee(db):
    def _add(name, branch_id, active=True, photo_url="/images/test.png"):
        employee = Employee(name=name, branch_id=branch_id, active=active, photo_url=photo_url)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee
    return _add


@pytest.fixture
def make_user(db):
    def _make(username, password="pw1", is_super_admin=False, branch_ids=(), client_branch_id=None):
        if client_branch_id is not None:
            access = ClientAccess(branch_id=client_branch_id)
        else:
            access = AdminAccess(branch_ids=frozenset(branch_ids))
        return create_user(db, username=username, password=password, access=access, is_super_admin=is_super_admin)
    return _make


def token_headers(user_id=99, is_super_admin=False, branch_ids=(), role=Role.ADMIN, client_branch=None, expires_delta=None):
    token = create_access_token(
        {
            "sub": str(user_id),
            "userId": user_id,
            "isSuperAdmin": is_super_admin,
            "role": role.value,
            "branchIds": list(branch_ids),
            "clientBranch": client_branch,
        },
        expires_delta=expires_delta,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_headers():
    return token_headers(user_id=100, is_super_admin=True)


@pytest.fixture
def centro_headers(branches):
    """Admin de la sucursal Centro únicamente."""
    return token_headers(user_id=2, branch_ids=[branches[0].id])


@pytest.fixture
def norte_headers(branches):
    """Admin de la sucursal Norte únicamente."""
    return token_headers(user_id=3, branch_ids=[branches[1].id])


@pytest.fixture
def headers_for():
    return token_headers
