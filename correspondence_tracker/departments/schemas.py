## correspondence_tracker/departments/schemas.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DepartmentSummary(BaseModel):
    """Department reference embedded in correspondence responses"""
    id: int
    name: str
    code: str

    model_config = ConfigDict(from_attributes=True)


class DepartmentResponse(DepartmentSummary):
    """Department lookup row"""
    description: Optional[str] = None


class DepartmentListResponse(BaseModel):
    """Department lookup list"""
    items: List[DepartmentResponse]
    total_items: int
