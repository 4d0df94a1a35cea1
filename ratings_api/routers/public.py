# ratings_api/routers/public.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from ratings_api.database import get_db
from ratings_api.crud.branches import get_branch_by_name
from ratings_api.crud.employees import list_branch_employees, list_employees_with_ratings
from ratings_api.errors import NotFound
from ratings_api.schemas.employees import EmployeeRead, EmployeeStats
from ratings_api.security import AuthContext, get_auth_context

router = APIRouter()

@router.get("/employees", response_model=List[EmployeeRead])
def read_branch_employees(
    branch: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """Empleados de una sucursal por nombre (sin importar mayúsculas). Lo usa la pantalla cliente."""
    found = get_branch_by_name(db, branch)
    if not found:
        raise NotFound("Sucursal no encontrada")
    return list_branch_employees(db, found.id)

@router.get("/employee-stats", response_model=List[EmployeeStats])
def read_employee_stats(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    """Promedio, cantidad y todos los comentarios (más nuevos primero) por empleado visible."""
    stats = []
    for e in list_employees_with_ratings(db, ctx):
        total = len(e.ratings)
        average = sum(r.stars for r in e.ratings) / total if total else 0.0
        stats.append({
            "id": e.id,
            "name": e.name,
            "photo_url": e.photo_url,
            "branch": e.branch.name,
            "average": round(average, 2),
            "count": total,
            "comments": [
                {"stars": r.stars, "comment": r.comment, "email": r.email, "created_at": r.created_at}
                for r in e.ratings
            ],
        })
    return stats
