from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from ratings_api.errors import Conflict, NotFound
from ratings_api.models import Employee
from ratings_api.security import AuthContext
from ratings_api.crud.branches import get_branch


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = (
        db.query(Employee)
        .options(joinedload(Employee.branch))
        .filter(Employee.id == employee_id)
        .first()
    )
    if not employee:
        raise NotFound("Empleado no encontrado")
    return employee


def _visible_employees(db: Session, ctx: AuthContext):
    query = db.query(Employee).options(joinedload(Employee.branch))
    if ctx.is_super_admin:
        return query.order_by(Employee.name.asc())
    # Usuarios por sucursal: solo sus sucursales, en el orden natural de la tabla
    return query.filter(Employee.branch_id.in_(ctx.branch_ids)).order_by(Employee.id)


def list_employees(db: Session, ctx: AuthContext) -> List[Employee]:
    return _visible_employees(db, ctx).all()


def list_employees_with_ratings(db: Session, ctx: AuthContext) -> List[Employee]:
    return _visible_employees(db, ctx).options(selectinload(Employee.ratings)).all()


def list_branch_employees(db: Session, branch_id: int) -> List[Employee]:
    return db.query(Employee).filter(Employee.branch_id == branch_id).order_by(Employee.id).all()


def _commit_unique_employee(db: Session, message: str):
    # UNIQUE(name, branch_id): la base rechaza el duplicado en la misma escritura
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(message)


def create_employee(db: Session, name: str, branch_id: int, photo_url: str) -> Employee:
    get_branch(db, branch_id)

    employee = Employee(name=name.strip(), branch_id=branch_id, photo_url=photo_url)
    db.add(employee)
    _commit_unique_employee(db, "Ya existe un empleado con ese nombre en esta sucursal")
    return get_employee(db, employee.id)


def update_employee(
    db: Session,
    employee: Employee,
    name: str,
    branch_id: int,
    photo_url: Optional[str] = None,
) -> Employee:
    if branch_id != employee.branch_id:
        get_branch(db, branch_id)

    employee.name = name.strip()
    employee.branch_id = branch_id
    if photo_url:
        employee.photo_url = photo_url
    _commit_unique_employee(db, "Ya existe otro empleado con ese nombre en esta sucursal")
    return get_employee(db, employee.id)


def move_employee(db: Session, employee: Employee, branch_id: int) -> Employee:
    get_branch(db, branch_id)

    employee.branch_id = branch_id
    _commit_unique_employee(db, "Ya existe otro empleado con ese nombre en la sucursal destino")
    return get_employee(db, employee.id)


def toggle_employee(db: Session, employee: Employee) -> Employee:
    employee.active = not employee.active
    db.commit()
    return get_employee(db, employee.id)


def delete_employee(db: Session, employee: Employee) -> None:
    # Las calificaciones del empleado se borran con él
    db.delete(employee)
    db.commit()
