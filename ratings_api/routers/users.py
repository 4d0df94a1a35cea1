from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ratings_api.database import get_db
from ratings_api.crud import users as crud
from ratings_api.errors import BadRequest, Forbidden
from ratings_api.policies import can_delete_user, can_manage_users
from ratings_api.schemas.ratings import MessageResponse
from ratings_api.schemas.users import UserCreate, UserCreated, UserRead, UserUpdate
from ratings_api.security import AuthContext, get_auth_context

router = APIRouter()

# --- 1. LEER TODOS (READ) ---
@router.get("", response_model=List[UserRead])
def read_users(db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    if not can_manage_users(ctx):
        raise Forbidden("Acceso restringido a administradores globales")
    return crud.list_users(db)

# --- 2. CREAR USUARIO (CREATE) ---
@router.post("", response_model=UserCreated)
def create_user(user: UserCreate, db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    if not can_manage_users(ctx):
        raise Forbidden("Acceso denegado: solo administradores globales pueden crear usuarios")

    access = crud.resolve_authorization(user.role, user.branch_ids, user.client_branch_id)
    new_user = crud.create_user(
        db,
        username=user.username,
        password=user.password,
        access=access,
        is_super_admin=user.is_super_admin,
    )
    return {"message": "Usuario creado", "id": new_user.id}

# --- 3. ACTUALIZAR USUARIO (UPDATE) ---
@router.put("/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(get_auth_context),
):
    """
    Reemplaza rol y sucursales del usuario (no se mezclan con los anteriores).
    Si viene 'password', se actualiza la contraseña.
    """
    if not can_manage_users(ctx):
        raise Forbidden("Solo administradores globales pueden modificar usuarios")

    access = crud.resolve_authorization(user_in.role, user_in.branch_ids, user_in.client_branch_id)
    crud.update_user(
        db,
        user_id,
        access=access,
        is_super_admin=user_in.is_super_admin,
        password=user_in.password,
    )
    return {"message": "Usuario actualizado"}

# --- 4. ELIMINAR ---
@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, db: Session = Depends(get_db), ctx: AuthContext = Depends(get_auth_context)):
    # Se valida antes que el permiso: nadie se borra a sí mismo
    if not can_delete_user(ctx, user_id):
        raise BadRequest("No podés eliminar tu propio usuario")
    if not can_manage_users(ctx):
        raise Forbidden("Solo administradores globales pueden eliminar usuarios")

    crud.delete_user(db, user_id)
    return {"message": "Usuario eliminado"}
