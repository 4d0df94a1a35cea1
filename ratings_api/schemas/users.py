from pydantic import Field
from typing import List, Optional

from ratings_api.models import Role
from ratings_api.schemas.base import CamelModel, NonBlankStr
from ratings_api.schemas.branches import BranchRead

# --- Los campos de sucursal dependen del rol ---
# admin      -> branchIds (lista, puede ser vacía)
# clientUser -> clientBranchId (obligatorio)

class UserAccessFields(CamelModel):
    is_super_admin: bool = False
    role: Role = Role.ADMIN
    branch_ids: List[int] = Field(default_factory=list)
    client_branch_id: Optional[int] = None

class UserCreate(UserAccessFields):
    username: NonBlankStr
    password: str = Field(min_length=1)

class UserUpdate(UserAccessFields):
    # Si no viene password se conserva la actual
    password: Optional[str] = None

class UserRead(CamelModel):
    id: int
    username: str
    role: Role
    is_super_admin: bool
    branches: List[BranchRead] = Field(default_factory=list)

class UserCreated(CamelModel):
    message: str
    id: int
