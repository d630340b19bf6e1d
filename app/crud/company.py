"""
CRUD operations for Company model.

Searches and partial updates are built with the fragment helpers in
app.core.sql and executed as text statements through the session.
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import dialect_name
from app.core.exceptions import InvalidInputError
from app.core.sql import COMPANY_FILTERS, ensure_ordered_range, sql_for_partial_update, sql_for_query_filter
from app.models.company import Company
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

# API field name -> column name
UPDATE_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

FILTER_COLUMNS = {
    "nameLike": "name",
    "minEmployees": "num_employees",
    "maxEmployees": "num_employees",
}


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company in the database.

    Raises:
        InvalidInputError: If another company already uses the name
    """
    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"Duplicate company: {company_data.name}")
    db.refresh(db_company)

    return db_company


def get_by_handle(db: Session, handle: str) -> Optional[Company]:
    """
    Retrieve a company (with its jobs) by handle.

    Returns:
        Company instance if found, None otherwise
    """
    return db.query(Company).filter(Company.handle == handle).first()


def get_multi(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Company]:
    """
    Retrieve companies ordered by name, optionally filtered.

    Args:
        db: Database session
        filters: Any of nameLike (case-insensitive substring of the name),
            minEmployees, maxEmployees

    Raises:
        InvalidInputError: If minEmployees > maxEmployees or a filter is unknown
    """
    filters = filters or {}
    ensure_ordered_range(filters, "minEmployees", "maxEmployees")

    query = db.query(Company)
    if filters:
        fragment = sql_for_query_filter(filters, FILTER_COLUMNS, COMPANY_FILTERS)
        where, params = fragment.bind(dialect_name(db))
        query = query.filter(text(where)).params(**params)

    return query.order_by(Company.name).all()


def update(db: Session, handle: str, data: Dict[str, Any]) -> Optional[Company]:
    """
    Partially update a company; only the fields in `data` change.

    Args:
        db: Database session
        handle: Company to update
        data: Changed fields keyed by API name (name, description, numEmployees, logoUrl)

    Returns:
        Updated Company instance if found, None otherwise

    Raises:
        InvalidInputError: If `data` is empty or the new name is taken
    """
    fragment = sql_for_partial_update(data, UPDATE_COLUMNS)
    set_cols, params = fragment.bind(dialect_name(db))

    try:
        result = db.execute(
            text(f"UPDATE companies SET {set_cols} WHERE handle = :handle"),
            {**params, "handle": handle},
        )
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"Duplicate company: {data.get('name')}")

    if result.rowcount == 0:
        db.rollback()
        return None

    db.commit()
    logger.info(f"Updated company {handle}: {sorted(data)}")
    return get_by_handle(db, handle)


def delete(db: Session, handle: str) -> bool:
    """
    Delete a company and its jobs.

    Returns:
        True if deleted, False if not found
    """
    company = get_by_handle(db, handle)
    if not company:
        return False

    db.delete(company)
    db.commit()

    return True
