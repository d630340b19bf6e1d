from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from app.schemas.common import PartialUpdate


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(PartialUpdate):
    """Schema for a partial job update. The id and company cannot change."""
    non_nullable = ("title",)

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    class Config:
        extra = "forbid"


class JobFilter(BaseModel):
    """Search filters for listing jobs"""
    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0, alias="minSalary")
    max_salary: Optional[int] = Field(None, ge=0, alias="maxSalary")

    class Config:
        populate_by_name = True

    def to_filters(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str = Field(..., alias="companyHandle")

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
        populate_by_name = True


class JobDeleteResponse(BaseModel):
    deleted: int
