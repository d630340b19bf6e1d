"""
CRUD operations for Job model.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import select, text
from sqlalchemy.orm import Session

from app.core.database import dialect_name
from app.core.sql import JOB_FILTERS, ensure_ordered_range, sql_for_partial_update, sql_where_clause
from app.models.job import Job
from app.schemas.job import JobCreateRequest

# API field names match the columns for updates
UPDATE_COLUMNS: Dict[str, str] = {}

FILTER_COLUMNS = {
    "title": "title",
    "minSalary": "salary",
    "maxSalary": "salary",
}


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def get_multi(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[Job]:
    """
    Retrieve jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        filters: Any of title (case-insensitive substring), minSalary, maxSalary

    Raises:
        InvalidInputError: If minSalary > maxSalary or a filter is unknown
    """
    filters = filters or {}
    ensure_ordered_range(filters, "minSalary", "maxSalary")

    where, params = sql_where_clause(filters, FILTER_COLUMNS, JOB_FILTERS).bind(dialect_name(db))
    statement = text(
        f"SELECT id, title, salary, equity, company_handle FROM jobs {where} ORDER BY title, id"
    )

    return list(db.execute(select(Job).from_statement(statement), params).scalars().all())


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Optional[Job]:
    """
    Partially update a job (title, salary, equity).

    Returns:
        Updated Job instance if found, None otherwise

    Raises:
        InvalidInputError: If `data` is empty
    """
    set_cols, params = sql_for_partial_update(data, UPDATE_COLUMNS).bind(dialect_name(db))
    result = db.execute(
        text(f"UPDATE jobs SET {set_cols} WHERE id = :job_id"),
        {**params, "job_id": job_id},
    )

    if result.rowcount == 0:
        db.rollback()
        return None

    db.commit()
    return get_by_id(db, job_id)


def delete(db: Session, job_id: int) -> bool:
    """
    Delete a job by ID.

    Returns:
        True if deleted, False if not found
    """
    job = get_by_id(db, job_id)
    if not job:
        return False

    db.delete(job)
    db.commit()

    return True
