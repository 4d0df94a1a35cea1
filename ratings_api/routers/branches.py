from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from ratings_api.database import get_db
from ratings_api.crud import branches as crud
from ratings_api.errors import Forbidden
from ratings_api.policies import can_manage_branches, can_read_branch
from ratings_api.schemas.branches import BranchCreate, BranchRead, BranchUpdate
from ratings_api.schemas.ratings import MessageResponse
from ratings_api.security import AuthContext, get_auth_context

router = APIRouter()

def _require_branch_manager(ctx: AuthContext, message: str):
    if not can_manage_branches(ctx):
        raise Forbidden(message)

@router.get("", response_model=List[BranchRead])
def get_branches(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    return crud.list_branches(db, ctx)

@router.post("", response_model=BranchRead)
def create_branch(branch: BranchCreate, db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    _require_branch_manager(ctx, "Acceso denegado: solo administradores globales pueden crear sucursales")
    return crud.create_branch(db, name=branch.name, address=branch.address)

@router.get("/{branch_id}", response_model=BranchRead)
def get_branch(branch_id: int, db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    branch = crud.get_branch(db, branch_id)
    if not can_read_branch(ctx, branch.id):
        raise Forbidden("No estás autorizado para ver esta sucursal")
    return branch

@router.put("/{branch_id}", response_model=BranchRead)
def update_branch(branch_id: int, branch: BranchUpdate, db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    _require_branch_manager(ctx, "Solo administradores globales pueden editar sucursales")
    return crud.update_branch(db, branch_id, branch.model_dump(exclude_unset=True))

@router.delete("/{branch_id}", response_model=MessageResponse)
def delete_branch(branch_id: int, db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    _require_branch_manager(ctx, "Solo administradores globales pueden eliminar sucursales")
    crud.delete_branch(db, branch_id)
    return {"message": "Sucursal eliminada correctamente"}
