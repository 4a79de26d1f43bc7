# jobboard/api/v1/auth.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.db.database import get_db
from jobboard.schemas.user import UserCreate, UserLogin, AuthResponse, MeResponse
from jobboard.security.auth import issue_token
from jobboard.security.dependencies import get_current_actor
from jobboard.security.policy import Action, Actor, require
from jobboard.services import users as user_service

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


def _token_for(user) -> str:
    return issue_token(user.id, user.role.value, user.email)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new applicant or company account.
    Company accounts that send companyName get their profile created too.
    """
    user = user_service.register_user(db, data)
    return {"message": "User created successfully", "token": _token_for(user), "user": user}


@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    """
    Exchange email and password for a bearer token.
    When `role` is sent the account must have that role.
    """
    user = user_service.authenticate_user(db, data.email, data.password, data.role)
    return {"message": "Login successful", "token": _token_for(user), "user": user}


@router.get("/me", response_model=MeResponse)
def read_me(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    """The authenticated user, with their company profile if any."""
    require(actor, Action.VIEW_SELF)
    return {"user": user_service.get_user_with_company(db, actor.user_id)}
