# ratings_api/models/users.py
import enum
from dataclasses import dataclass
from typing import FrozenSet, Union

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from ratings_api.database import Base

class Role(str, enum.Enum):
    ADMIN = "admin"
    CLIENT_USER = "clientUser"


# --- Autorización según rol ---
# Un admin se vincula a N sucursales (user_branches); un clientUser queda
# fijo a una sola sucursal. Nunca ambas cosas a la vez.

@dataclass(frozen=True)
class AdminAccess:
    branch_ids: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class ClientAccess:
    branch_id: int


UserAuthorization = Union[AdminAccess, ClientAccess]


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "(role = 'clientUser' AND client_branch_id IS NOT NULL) "
            "OR (role = 'admin' AND client_branch_id IS NULL)",
            name="ck_user_role_branch",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    # Se guarda siempre en minúsculas: la unicidad es case-insensitive
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    is_super_admin = Column(Boolean, default=False, nullable=False)
    role = Column(
        Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        default=Role.ADMIN,
        nullable=False,
    )
    client_branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    client_branch = relationship("Branch", back_populates="client_users")
    user_branches = relationship(
        "UserBranch",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def authorization(self) -> UserAuthorization:
        if self.role == Role.CLIENT_USER:
            return ClientAccess(branch_id=self.client_branch_id)
        return AdminAccess(branch_ids=frozenset(ub.branch_id for ub in self.user_branches))

    @property
    def branches(self):
        """Sucursales visibles del usuario (para listados)."""
        if self.role == Role.CLIENT_USER:
            return [self.client_branch] if self.client_branch else []
        return [ub.branch for ub in self.user_branches]


class UserBranch(Base):
    """Tabla puente: su existencia autoriza al admin sobre la sucursal."""
    __tablename__ = "user_branches"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    branch_id = Column(Integer, ForeignKey("branches.id", ondelete="CASCADE"), primary_key=True)

    user = relationship("User", back_populates="user_branches")
    branch = relationship("Branch", back_populates="user_links")
