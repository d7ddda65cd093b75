from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class DocumentStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DocumentType(str, Enum):
    USER_UPLOAD = "user_upload"
    ADMIN_UPLOAD = "admin_upload"


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    # verify, assign, set status, record review
    ADMINISTER = "administer"
    ACCEPT = "accept"


@dataclass(frozen=True)
class Caller:
    """Identity taken from a verified bearer credential."""

    id: uuid.UUID
    role: Role
    name: str = ""
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_claims(cls, claims: dict) -> "Caller":
        try:
            role = Role(str(claims.get("role", "")))
        except ValueError:
            role = Role.USER
        return cls(
            id=claims["sub"],
            role=role,
            name=str(claims.get("name") or ""),
            email=str(claims.get("email") or ""),
        )
