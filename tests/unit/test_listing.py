"""Tests for job listing filters and pagination."""

import math
from datetime import datetime, timedelta

import pytest

from jobboard.db.models import Company, Job, User, UserRole
from jobboard.services.listing import JobFilters, escape_like, list_companies, list_jobs, page_count

JOBS = [
    ("Backend Engineer", "Berlin", "Technology"),
    ("Frontend Engineer", "Remote", "technology"),
    ("Data Scientist", "berlin", "Data & Technology"),
    ("Accountant", "Paris", "Finance"),
    ("100% Remote Recruiter", "Remote", "HR"),
]


@pytest.fixture
def seeded(db):
    user = User(name="Acme HR", email="hr@acme.com", password_hash="x", role=UserRole.COMPANY)
    user.company = Company(name="Acme", description="")
    db.add(user)
    start = datetime(2024, 1, 1)
    for offset, (title, location, category) in enumerate(JOBS):
        db.add(Job(
            title=title, description="d", location=location, category=category,
            company=user.company, created_at=start + timedelta(days=offset),
        ))
    db.commit()
    return user.company


class TestFilters:
    def test_no_filters_returns_everything_newest_first(self, db, seeded):
        items, total = list_jobs(db, JobFilters())

        assert total == len(JOBS)
        assert [job.title for job in items] == [title for title, _, _ in reversed(JOBS)]

    def test_category_is_case_insensitive_substring(self, db, seeded):
        items, total = list_jobs(db, JobFilters(category="Technology"))

        assert total == 3
        assert all("technology" in job.category.lower() for job in items)

    def test_filters_and_together(self, db, seeded):
        items, total = list_jobs(db, JobFilters(search="engineer", location="BERLIN"))

        assert total == 1
        assert items[0].title == "Backend Engineer"

    def test_search_matches_title_only(self, db, seeded):
        _, total = list_jobs(db, JobFilters(search="Berlin"))
        assert total == 0

    def test_wildcards_are_literal(self, db, seeded):
        items, total = list_jobs(db, JobFilters(search="100%"))
        assert total == 1
        assert items[0].title == "100% Remote Recruiter"

        _, total = list_jobs(db, JobFilters(search="%"))
        assert total == 1

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestPagination:
    def test_pages_split_results(self, db, seeded):
        first, total = list_jobs(db, JobFilters(), page=1, page_size=2)
        second, _ = list_jobs(db, JobFilters(), page=2, page_size=2)
        last, _ = list_jobs(db, JobFilters(), page=3, page_size=2)

        assert total == 5
        assert len(first) == 2 and len(second) == 2 and len(last) == 1
        assert not {j.id for j in first} & {j.id for j in second}

    def test_page_past_the_end_is_empty_but_counts(self, db, seeded):
        items, total = list_jobs(db, JobFilters(), page=10, page_size=2)
        assert items == []
        assert total == 5

    @pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 99, 100, 101])
    @pytest.mark.parametrize("limit", [1, 3, 10, 100])
    def test_page_count_is_ceiling(self, total, limit):
        assert page_count(total, limit) == math.ceil(total / limit)


class TestCompanies:
    def test_job_count(self, db, seeded):
        companies = list_companies(db)
        assert len(companies) == 1
        assert companies[0].job_count == len(JOBS)
