import enum
from datetime import datetime, timezone
from pydantic import Field, field_serializer
from typing import List, Optional

from ratings_api.schemas.base import CamelModel
from ratings_api.schemas.branches import BranchRead

class EmployeeRead(CamelModel):
    id: int
    name: str
    photo_url: str
    branch_id: int
    active: bool

class EmployeeWithBranch(EmployeeRead):
    branch: BranchRead

class EmployeeBranchChange(CamelModel):
    branch_id: int

class RatingsSummary(CamelModel):
    employee_id: int
    total: int
    average: Optional[float] = None

class EmployeeComment(CamelModel):
    stars: int
    comment: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime

    @field_serializer("created_at")
    def as_utc(self, value: datetime) -> str:
        # Se guarda en UTC sin tzinfo; al cliente le llega con el offset explícito
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

class EmployeeStats(CamelModel):
    id: int
    name: str
    photo_url: str
    branch: str
    average: float
    count: int
    comments: List[EmployeeComment] = Field(default_factory=list)

class RatingPeriod(str, enum.Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
