import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin
from app.core.permissions import Principal
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDeleteResponse,
    CompanyDetailResponse,
    CompanyFilter,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Create a company.

    Authorization required: admin
    """
    if company_crud.get_by_handle(db, request.handle):
        raise HTTPException(status_code=400, detail=f"Duplicate company: {request.handle}")

    company = company_crud.create(db, request)
    logger.info(f"Admin {admin.username} created company {company.handle}")
    return company


@router.get("/", response_model=List[CompanyResponse])
def list_companies(
    name_like: Optional[str] = Query(None, alias="nameLike", min_length=1),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name.

    Can filter on:
    - nameLike: case-insensitive partial match on the name
    - minEmployees / maxEmployees: employee count range (min must not exceed max)

    Authorization required: none
    """
    filters = CompanyFilter(
        name_like=name_like,
        min_employees=min_employees,
        max_employees=max_employees,
    ).to_filters()

    return company_crud.get_multi(db, filters)


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.

    Authorization required: none
    """
    company = company_crud.get_by_handle(db, handle)

    if not company:
        raise HTTPException(status_code=404, detail=f"No company: {handle}")

    return company


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Partially update a company: any of name, description, numEmployees, logoUrl.

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.changes())

    if not company:
        raise HTTPException(status_code=404, detail=f"No company: {handle}")

    return company


@router.delete("/{handle}", response_model=CompanyDeleteResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: Principal = Depends(ensure_admin),
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    deleted = company_crud.delete(db, handle)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"No company: {handle}")

    logger.info(f"Admin {admin.username} deleted company {handle}")
    return CompanyDeleteResponse(deleted=handle)
