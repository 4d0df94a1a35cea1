import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ratings_api.database import get_db
from ratings_api.crud.users import get_user_by_username
from ratings_api.errors import Unauthorized
from ratings_api.schemas.auth import LoginRequest, LoginResponse
from ratings_api.security import build_claims, create_access_token, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    user = get_user_by_username(db, credentials.username)

    # Mismo mensaje si no existe el usuario o si la contraseña no coincide
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.info("Login rechazado para usuario '%s'", credentials.username)
        raise Unauthorized("Credenciales inválidas")

    claims = build_claims(user)
    return LoginResponse(
        token=create_access_token(claims),
        is_super_admin=claims["isSuperAdmin"],
        role=user.role,
        client_branch=claims["clientBranch"],
    )
