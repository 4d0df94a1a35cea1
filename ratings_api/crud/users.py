import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from ratings_api.errors import BadRequest, Conflict, NotFound
from ratings_api.models import AdminAccess, Branch, ClientAccess, Role, User, UserAuthorization, UserBranch
from ratings_api.security import get_password_hash

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Busca por username sin distinguir mayúsculas (se guardan en minúsculas)."""
    return (
        db.query(User)
        .options(selectinload(User.user_branches), joinedload(User.client_branch))
        .filter(User.username == username.strip().lower())
        .first()
    )


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFound("Usuario no encontrado")
    return user


def list_users(db: Session) -> List[User]:
    return (
        db.query(User)
        .options(
            selectinload(User.user_branches).joinedload(UserBranch.branch),
            joinedload(User.client_branch),
        )
        .order_by(User.id)
        .all()
    )


def resolve_authorization(
    role: Role,
    branch_ids: Iterable[int] = (),
    client_branch_id: Optional[int] = None,
) -> UserAuthorization:
    """Convierte los campos planos del request en la variante según rol."""
    if role == Role.CLIENT_USER:
        if not client_branch_id:
            raise BadRequest("clientUser requiere una sucursal asignada")
        return ClientAccess(branch_id=client_branch_id)
    return AdminAccess(branch_ids=frozenset(branch_ids or ()))


def _check_branches_exist(db: Session, access: UserAuthorization) -> None:
    wanted = {access.branch_id} if isinstance(access, ClientAccess) else set(access.branch_ids)
    if not wanted:
        return
    found = {row.id for row in db.query(Branch.id).filter(Branch.id.in_(wanted))}
    missing = wanted - found
    if missing:
        raise NotFound(f"Sucursal no encontrada: {min(missing)}")


def _apply_authorization(db: Session, user: User, access: UserAuthorization) -> None:
    # Reemplazo total: los vínculos anteriores se descartan siempre
    user.user_branches.clear()
    if user.id is not None:
        # Borrar antes de reinsertar: la PK (user_id, branch_id) puede repetirse
        db.flush()
    if isinstance(access, ClientAccess):
        user.role = Role.CLIENT_USER
        user.client_branch_id = access.branch_id
    else:
        user.role = Role.ADMIN
        user.client_branch_id = None
        user.user_branches.extend(UserBranch(branch_id=b) for b in sorted(access.branch_ids))


def create_user(
    db: Session,
    username: str,
    password: str,
    access: UserAuthorization,
    is_super_admin: bool = False,
) -> User:
    _check_branches_exist(db, access)

    user = User(
        username=username.strip().lower(),
        password_hash=get_password_hash(password),
        is_super_admin=is_super_admin,
    )
    _apply_authorization(db, user, access)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("El nombre de usuario ya existe")
    db.refresh(user)
    logger.info("Usuario creado: %s (id=%s)", user.username, user.id)
    return user


def update_user(
    db: Session,
    user_id: int,
    access: UserAuthorization,
    is_super_admin: bool = False,
    password: Optional[str] = None,
) -> User:
    user = get_user(db, user_id)
    _check_branches_exist(db, access)

    if password:
        user.password_hash = get_password_hash(password)
    user.is_super_admin = is_super_admin
    _apply_authorization(db, user, access)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    # Los vínculos user_branches caen con el usuario
    db.delete(user)
    db.commit()
    logger.info("Usuario eliminado: id=%s", user_id)
