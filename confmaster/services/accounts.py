from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from confmaster.core.errors import Conflict, NotFound, Unauthorized
from confmaster.core.logging import get_logger
from confmaster.core.security import hash_password, issue_token, verify_password
from confmaster.models import User
from confmaster.services.workflow import policy
from confmaster.services.workflow.models import Action, Caller, Role

logger = get_logger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def token_for(user: User) -> str:
    return issue_token(user_id=user.id, role=user.role, name=user.name, email=user.email)


def register(db: Session, *, email: str, password: str, name: str) -> tuple[str, User]:
    email = _normalize_email(email)
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise Conflict("email already registered")

    # self-registration never grants admin
    user = User(email=email, password_hash=hash_password(password), name=name.strip(), role=Role.USER.value)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("email already registered") from None

    logger.info("user registered", extra={"fields": {"user_id": user.id}})
    return token_for(user), user


def authenticate(db: Session, *, email: str, password: str) -> tuple[str, User]:
    user = db.scalar(select(User).where(User.email == _normalize_email(email)))
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("login rejected")
        raise Unauthorized("invalid credentials")
    return token_for(user), user


def current_user(db: Session, caller: Caller) -> User:
    user = db.get(User, caller.id)
    if user is None:
        raise Unauthorized("account no longer exists")
    return user


def update_profile(
    db: Session,
    caller: Caller,
    *,
    name: str | None = None,
    affiliation: str | None = None,
    bio: str | None = None,
    profile_picture: str | None = None,
) -> User:
    """Overwrite the fields that were supplied; omitted ones stay as they are."""
    user = current_user(db, caller)
    if name is not None and name.strip():
        user.name = name.strip()
    if affiliation is not None:
        user.affiliation = affiliation
    if bio is not None:
        user.bio = bio
    if profile_picture is not None:
        user.profile_picture = profile_picture
    db.commit()
    logger.info("profile updated", extra={"fields": {"user_id": user.id}})
    return user


def list_users(db: Session, caller: Caller) -> list[User]:
    policy.require_admin(caller)
    return list(db.scalars(select(User).order_by(User.created_at, User.id)))


def picture_ref(db: Session, caller: Caller, user_id: uuid.UUID) -> str:
    """Stored profile picture of ``user_id``; visible to that user and to admins."""
    policy.require(caller, user_id, Action.READ)
    user = db.get(User, user_id)
    if user is None or not user.profile_picture:
        raise NotFound("profile picture not found")
    return user.profile_picture
