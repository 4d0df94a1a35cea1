from pydantic import EmailStr, Field, field_validator
from typing import Optional

from ratings_api.schemas.base import CamelModel

class RatingCreate(CamelModel):
    employee_id: int
    stars: int = Field(ge=1, le=5)
    comment: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("comment", "email", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        # El formulario público manda "" cuando el campo queda vacío
        if isinstance(value, str) and not value.strip():
            return None
        return value

class MessageResponse(CamelModel):
    message: str
