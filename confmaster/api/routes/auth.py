from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from confmaster.api.deps import get_caller
from confmaster.db.session import get_db
from confmaster.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from confmaster.schemas.user import UserRead
from confmaster.services import accounts
from confmaster.services.workflow import Caller

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    token, user = accounts.register(db, email=payload.email, password=payload.password, name=payload.name)
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    token, user = accounts.authenticate(db, email=payload.email, password=payload.password)
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.get("/me", response_model=UserRead)
def me(caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    return accounts.current_user(db, caller)
