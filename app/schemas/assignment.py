from typing import List
from uuid import UUID
from pydantic import BaseModel, Field


class AssignmentToggleRequest(BaseModel):
    staff_uid: str = Field(..., min_length=1)
    customer_ids: List[UUID] = Field(..., min_length=1)


class AssignmentToggleResult(BaseModel):
    """Both lists are reported; a mixed selection yields entries in each."""
    staff_uid: str
    assigned: List[UUID]
    unassigned: List[UUID]
