# jobboard/db/models.py

import enum
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint,
    Enum, func, select
)
from sqlalchemy.orm import relationship, declarative_base, column_property

# Base class for declarative models
Base = declarative_base()


class UserRole(str, enum.Enum):
    APPLICANT = "APPLICANT"
    COMPANY = "COMPANY"
    ADMIN = "ADMIN"


class ApplicationStatus(str, enum.Enum):
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.APPLICANT)
    created_at = Column(DateTime, default=datetime.utcnow)

    company = relationship("Company", back_populates="user", uselist=False)
    applications = relationship("Application", back_populates="applicant")


class Company(Base):
    """
    Profile of a COMPANY-role user. Exactly one per owning user, enforced by
    the unique user_id column.
    """
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    website = Column(String, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="company")
    jobs = relationship(
        "Job",
        back_populates="company",
        order_by=lambda: [Job.created_at.desc(), Job.id.desc()],
        cascade="all, delete-orphan",
    )


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    category = Column(String, nullable=False)
    salary = Column(String, nullable=True)
    type = Column(String, nullable=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="jobs")
    # Deleting a job removes its applications with it.
    applications = relationship(
        "Application",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_application_job_applicant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    resume_url = Column(String, nullable=False)
    cover_letter = Column(Text, nullable=False, default="")
    status = Column(
        Enum(ApplicationStatus, name="application_status"),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")


# --- Derived counts ---
# Correlated subqueries so list endpoints get counts without loading children.
Job.application_count = column_property(
    select(func.count(Application.id))
    .where(Application.job_id == Job.id)
    .correlate_except(Application)
    .scalar_subquery()
)

Company.job_count = column_property(
    select(func.count(Job.id))
    .where(Job.company_id == Company.id)
    .correlate_except(Job)
    .scalar_subquery()
)
