from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ratings_api.errors import Conflict, NotFound
from ratings_api.models import Branch, Employee, User
from ratings_api.security import AuthContext


def get_branch(db: Session, branch_id: int) -> Branch:
    branch = db.get(Branch, branch_id)
    if not branch:
        raise NotFound("Sucursal no encontrada")
    return branch


def get_branch_by_name(db: Session, name: str) -> Optional[Branch]:
    """Búsqueda sin distinguir mayúsculas/minúsculas."""
    return db.query(Branch).filter(func.lower(Branch.name) == name.strip().lower()).first()


def list_branches(db: Session, ctx: AuthContext) -> List[Branch]:
    query = db.query(Branch)
    if not ctx.is_super_admin:
        query = query.filter(Branch.id.in_(ctx.branch_ids))
    return query.order_by(Branch.id).all()


def _commit_unique_name(db: Session):
    # El UNIQUE de la tabla resuelve la carrera entre dos altas simultáneas
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Ya existe otra sucursal con ese nombre")


def create_branch(db: Session, name: str, address: Optional[str] = None) -> Branch:
    branch = Branch(name=name.strip(), address=address)
    db.add(branch)
    _commit_unique_name(db)
    db.refresh(branch)
    return branch


def update_branch(db: Session, branch_id: int, data: dict) -> Branch:
    branch = get_branch(db, branch_id)
    if data.get("name") is not None:
        branch.name = data["name"].strip()
    if "address" in data:
        branch.address = data["address"]
    _commit_unique_name(db)
    db.refresh(branch)
    return branch


def delete_branch(db: Session, branch_id: int) -> None:
    branch = get_branch(db, branch_id)

    employee_count = db.query(func.count(Employee.id)).filter(Employee.branch_id == branch_id).scalar()
    if employee_count > 0:
        raise Conflict("No se puede eliminar una sucursal que tiene empleados asignados")

    client_count = db.query(func.count(User.id)).filter(User.client_branch_id == branch_id).scalar()
    if client_count > 0:
        raise Conflict("No se puede eliminar una sucursal que tiene usuarios cliente asignados")

    # Los vínculos user_branches se van por ON DELETE CASCADE
    db.delete(branch)
    db.commit()
