from pydantic import Field
from typing import Optional

from ratings_api.models import Role
from ratings_api.schemas.base import CamelModel

class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class LoginResponse(CamelModel):
    token: str
    is_super_admin: bool
    role: Role
    client_branch: Optional[str] = None
