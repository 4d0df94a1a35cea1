# ratings_api/models/employees.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from ratings_api.database import Base


def utc_now() -> datetime:
    """UTC sin tzinfo: así se guarda y se compara en todas las bases."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        # Dos empleados con el mismo nombre no pueden convivir en una sucursal
        UniqueConstraint("name", "branch_id", name="uq_employee_name_branch"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    photo_url = Column(String, nullable=False)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False)

    branch = relationship("Branch", back_populates="employees")
    ratings = relationship(
        "Rating",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Rating.created_at.desc()",
    )


class Rating(Base):
    """Calificación pública. No se edita una vez creada."""
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    stars = Column(Integer, nullable=False)
    comment = Column(String, nullable=True)
    email = Column(String, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)

    employee = relationship("Employee", back_populates="ratings")
