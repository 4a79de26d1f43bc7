# jobboard/services/listing.py

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from jobboard.db.models import Company, Job

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Keeps the row offset inside a 32-bit integer for any page size.
MAX_PAGE = 1_000_000


@dataclass
class JobFilters:
    search: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None


def escape_like(term: str) -> str:
    """Escapes LIKE wildcards so user input is matched literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def job_filter_criteria(filters: JobFilters) -> list:
    """One case-insensitive substring condition per filter that was given."""
    criteria = []
    for column, term in (
        (Job.title, filters.search),
        (Job.location, filters.location),
        (Job.category, filters.category),
    ):
        if term:
            criteria.append(column.ilike(f"%{escape_like(term)}%", escape="\\"))
    return criteria


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0


def list_jobs(
    db: Session,
    filters: JobFilters,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Tuple[List[Job], int]:
    """
    Returns one page of jobs, newest first, and the total matching count.

    Both queries share the same predicate; rows inserted between them can make
    the count drift by a little, which is acceptable for a listing.
    """
    criteria = job_filter_criteria(filters)
    skip = (page - 1) * page_size

    items = (
        db.query(Job)
        .options(joinedload(Job.company))
        .filter(*criteria)
        .order_by(Job.created_at.desc(), Job.id.desc())
        .offset(skip)
        .limit(page_size)
        .all()
    )
    total = db.query(Job).filter(*criteria).count()
    return items, total


def list_companies(db: Session) -> List[Company]:
    """Every company, newest first. job_count is loaded with the row."""
    return db.query(Company).order_by(Company.created_at.desc(), Company.id.desc()).all()
