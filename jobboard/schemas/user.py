# jobboard/schemas/user.py

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from jobboard.db.models import UserRole
from jobboard.schemas.base import CamelModel


class UserBase(CamelModel):
    email: EmailStr


# Schema for registration (POST /auth/register)
class UserCreate(UserBase):
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.APPLICANT
    # Only used when role is COMPANY
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    website: Optional[str] = None


class UserLogin(UserBase):
    password: str
    role: Optional[UserRole] = None


class UserCompany(CamelModel):
    id: int
    name: str
    description: str
    website: Optional[str] = None


# Returned user data never includes password_hash
class UserResponse(UserBase):
    id: int
    name: str
    role: UserRole
    created_at: Optional[datetime] = None
    company: Optional[UserCompany] = None


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    user: UserResponse
