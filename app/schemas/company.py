"""
Pydantic schemas for companies.

Request and response bodies use the camelCase field names of the public API
(numEmployees, logoUrl); the Python attributes stay snake_case.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from app.schemas.common import PartialUpdate


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyUpdateRequest(PartialUpdate):
    """Schema for a partial company update; only the fields sent are changed"""
    non_nullable = ("name", "description")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyFilter(BaseModel):
    """Search filters for listing companies"""
    name_like: Optional[str] = Field(None, min_length=1, alias="nameLike")
    min_employees: Optional[int] = Field(None, ge=0, alias="minEmployees")
    max_employees: Optional[int] = Field(None, ge=0, alias="maxEmployees")

    class Config:
        populate_by_name = True

    def to_filters(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)


class CompanyJob(BaseModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None

    class Config:
        from_attributes = True


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models
        populate_by_name = True


class CompanyDetailResponse(CompanyResponse):
    """Company with its jobs"""
    jobs: List[CompanyJob] = []


class CompanyDeleteResponse(BaseModel):
    deleted: str
