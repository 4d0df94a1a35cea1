# ratings_api/models/organization.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ratings_api.database import Base

class Branch(Base):
    """
    Representa una Sucursal física. Es dueña de sus empleados.
    """
    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, index=True)
    # El nombre es único a nivel global (lo garantiza la base, no el handler)
    name = Column(String, unique=True, index=True, nullable=False)
    address = Column(String, nullable=True)

    employees = relationship("Employee", back_populates="branch")
    # Los vínculos admin<->sucursal se borran en cascada desde la base
    user_links = relationship("UserBranch", back_populates="branch", passive_deletes=True)
    client_users = relationship("User", back_populates="client_branch")
