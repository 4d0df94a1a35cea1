import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from ratings_api.config import get_settings
from ratings_api.errors import Unauthorized
from ratings_api.models import User, Role, AdminAccess

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error=False: sin token respondemos 401 con nuestro formato de error
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login", auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Lo que el token dice del usuario que llama. Se pasa explícito a handlers y políticas."""
    user_id: int
    is_super_admin: bool = False
    branch_ids: FrozenSet[int] = field(default_factory=frozenset)
    role: Role = Role.ADMIN
    client_branch: Optional[str] = None


def verify_password(plain_password, hashed_password):
    """Compara en tiempo constante contra el hash guardado."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)


def build_claims(user: User) -> dict:
    access = user.authorization
    branch_ids = sorted(access.branch_ids) if isinstance(access, AdminAccess) else []
    return {
        "sub": str(user.id),
        "userId": user.id,
        "isSuperAdmin": bool(user.is_super_admin),
        "role": user.role.value,
        "branchIds": branch_ids,
        "clientBranch": user.client_branch.name if user.client_branch else None,
    }


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)

    to_encode = data.copy()
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> AuthContext:
    """Valida firma y expiración y reconstruye el AuthContext."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return AuthContext(
            user_id=int(payload["userId"]),
            is_super_admin=bool(payload.get("isSuperAdmin", False)),
            branch_ids=frozenset(int(b) for b in payload.get("branchIds") or []),
            role=Role(payload.get("role", Role.ADMIN.value)),
            client_branch=payload.get("clientBranch"),
        )
    except JWTError:
        raise Unauthorized("Token inválido o expirado")
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Token inválido o expirado")


async def get_auth_context(token: Optional[str] = Depends(oauth2_scheme)) -> AuthContext:
    if not token:
        raise Unauthorized("Token no proporcionado")
    return decode_access_token(token)
