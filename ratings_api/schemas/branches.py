from typing import Optional

from ratings_api.schemas.base import CamelModel, NonBlankStr

class BranchBase(CamelModel):
    name: NonBlankStr
    address: Optional[str] = None

class BranchCreate(BranchBase):
    pass

class BranchUpdate(BranchBase):
    name: Optional[NonBlankStr] = None
    address: Optional[str] = None

class BranchRead(BranchBase):
    id: int
