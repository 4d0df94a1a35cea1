# ratings_api/routers/employees.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.orm import Session

from ratings_api.database import get_db
from ratings_api.crud import employees as crud
from ratings_api.crud.ratings import ratings_summary
from ratings_api.errors import BadRequest, Forbidden
from ratings_api.policies import can_read_branch, can_write_employee
from ratings_api.schemas.employees import (
    EmployeeBranchChange, EmployeeRead, EmployeeWithBranch,
    RatingPeriod, RatingsSummary,
)
from ratings_api.security import AuthContext, get_auth_context
from ratings_api.uploads import discard_photo, save_employee_photo

router = APIRouter()


def _required_name(name: str) -> str:
    # Form(min_length=1) deja pasar "   "
    name = name.strip()
    if not name:
        raise BadRequest("El nombre es requerido")
    return name


# --- 1. LISTAR (solo sucursales autorizadas) ---
@router.get("", response_model=List[EmployeeWithBranch])
def read_employees(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    return crud.list_employees(db, ctx)


# --- 2. DETALLE (público) ---
@router.get("/{employee_id}", response_model=EmployeeWithBranch)
def read_employee(employee_id: int, db: Session = Depends(get_db)):
    return crud.get_employee(db, employee_id)


# --- 3. CREAR (multipart con foto) ---
@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    name: str = Form(..., min_length=1),
    branch_id: int = Form(..., alias="branchId"),
    photo: UploadFile = File(...),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    if not can_write_employee(ctx, branch_id, branch_id):
        raise Forbidden("No estás autorizado para agregar empleados en esta sucursal")
    name = _required_name(name)

    photo_url = await save_employee_photo(photo)
    try:
        return crud.create_employee(db, name=name, branch_id=branch_id, photo_url=photo_url)
    except Exception:
        # Si el alta no se concretó la foto queda huérfana
        discard_photo(photo_url)
        raise


# --- 4. EDITAR (foto opcional) ---
@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    name: str = Form(..., min_length=1),
    branch_id: int = Form(..., alias="branchId"),
    photo: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    employee = crud.get_employee(db, employee_id)

    if not can_write_employee(ctx, employee.branch_id, branch_id):
        raise Forbidden("No estás autorizado para editar este empleado")
    name = _required_name(name)

    photo_url = await save_employee_photo(photo) if photo and photo.filename else None
    try:
        return crud.update_employee(db, employee, name=name, branch_id=branch_id, photo_url=photo_url)
    except Exception:
        if photo_url:
            discard_photo(photo_url)
        raise


# --- 5. ACTIVAR / DESACTIVAR ---
@router.put("/{employee_id}/toggle", response_model=EmployeeRead)
def toggle_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    employee = crud.get_employee(db, employee_id)
    if not can_write_employee(ctx, employee.branch_id, employee.branch_id):
        raise Forbidden("No estás autorizado para modificar este empleado")
    return crud.toggle_employee(db, employee)


# --- 6. CAMBIAR DE SUCURSAL ---
@router.put("/{employee_id}/branch", response_model=EmployeeWithBranch)
def change_employee_branch(
    employee_id: int,
    change: EmployeeBranchChange,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    employee = crud.get_employee(db, employee_id)
    if not can_write_employee(ctx, employee.branch_id, change.branch_id):
        raise Forbidden("No estás autorizado para cambiar la sucursal de este empleado")
    return crud.move_employee(db, employee, change.branch_id)


# --- 7. ELIMINAR ---
@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    employee = crud.get_employee(db, employee_id)
    if not can_write_employee(ctx, employee.branch_id, employee.branch_id):
        raise Forbidden("No estás autorizado para eliminar este empleado")
    crud.delete_employee(db, employee)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- 8. RESUMEN DE CALIFICACIONES ---
@router.get("/{employee_id}/ratings-summary", response_model=RatingsSummary)
def read_ratings_summary(
    employee_id: int,
    period: Optional[RatingPeriod] = None,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    """Cantidad y promedio de estrellas; period = week | month | year (o todo el historial)."""
    employee = crud.get_employee(db, employee_id)
    if not can_read_branch(ctx, employee.branch_id):
        raise Forbidden("No estás autorizado para ver esta sucursal")
    return ratings_summary(db, employee.id, period)
