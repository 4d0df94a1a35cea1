"""
Seed inicial: sucursal demo con empleados y el super admin.

Uso: python -m ratings_api.init_db
El super admin sale de SUPERADMIN_USERNAME / SUPERADMIN_PASSWORD (si no están, se omite).
"""
import logging

from sqlalchemy.orm import Session

from ratings_api.config import get_settings
from ratings_api.database import SessionLocal, engine, Base
from ratings_api.models import Branch, Employee, Role, User
from ratings_api.security import get_password_hash

logger = logging.getLogger(__name__)

DEMO_BRANCH = "Sucursal Centro"
DEMO_EMPLOYEES = [
    ("Juan Pérez", "/images/juan.jpeg"),
    ("Ana Gómez", "/images/ana.jpeg"),
    ("Carlos López", "/images/carlos.jpeg"),
]


def seed_demo_branch(db: Session) -> Branch:
    # 1. Sucursal
    branch = db.query(Branch).filter(Branch.name == DEMO_BRANCH).first()
    if not branch:
        branch = Branch(name=DEMO_BRANCH)
        db.add(branch)
        db.commit()
        db.refresh(branch)
        logger.info("Sucursal creada: %s", branch.name)

    # 2. Empleados (si ya existen solo se actualiza la foto)
    for name, photo_url in DEMO_EMPLOYEES:
        employee = db.query(Employee).filter_by(name=name, branch_id=branch.id).first()
        if employee:
            employee.photo_url = photo_url
        else:
            db.add(Employee(name=name, photo_url=photo_url, branch_id=branch.id))
    db.commit()
    logger.info("Empleados asegurados: %d", len(DEMO_EMPLOYEES))
    return branch


def seed_super_admin(db: Session, username: str, password: str) -> User:
    username = username.strip().lower()
    user = db.query(User).filter(User.username == username).first()
    if user:
        user.password_hash = get_password_hash(password)
        user.is_super_admin = True
        db.commit()
        logger.info("Super admin actualizado: %s", user.username)
        return user

    user = User(
        username=username,
        password_hash=get_password_hash(password),
        is_super_admin=True,
        role=Role.ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Super admin creado: %s (id=%s)", user.username, user.id)
    return user


def init_db():
    settings = get_settings()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_demo_branch(db)
        if settings.SUPERADMIN_USERNAME and settings.SUPERADMIN_PASSWORD:
            seed_super_admin(db, settings.SUPERADMIN_USERNAME, settings.SUPERADMIN_PASSWORD)
        else:
            logger.warning("SUPERADMIN_USERNAME/SUPERADMIN_PASSWORD no definidos: no se crea super admin")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_db()
