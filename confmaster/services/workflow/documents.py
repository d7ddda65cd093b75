"""Document verification and acceptance rules.

Verification (admin): pending -> verified | rejected, re-settable.
Acceptance (owner):   0 -> 1, admin uploads only, never reset.
"""
from __future__ import annotations

import uuid

from confmaster.core.errors import InvalidStatus

from .models import Caller, DocumentStatus, DocumentType

INITIAL_STATUS = DocumentStatus.PENDING
VERIFICATION_STATUSES = frozenset({DocumentStatus.VERIFIED, DocumentStatus.REJECTED})


def parse_verification(value: str | None) -> DocumentStatus:
    try:
        status = DocumentStatus((value or "").strip())
    except ValueError:
        status = None
    if status not in VERIFICATION_STATUSES:
        raise InvalidStatus(f"unknown verification status {value!r}; expected verified or rejected")
    return status


def resolve_owner(caller: Caller, target_user_id: uuid.UUID | None) -> tuple[uuid.UUID, DocumentType]:
    """Who owns a new upload, and whether it was issued by an admin."""
    if caller.is_admin and target_user_id is not None:
        return target_user_id, DocumentType.ADMIN_UPLOAD
    return caller.id, DocumentType.USER_UPLOAD


def mark_accepted(document) -> bool:
    """Flip acceptance on; returns False when it was already set."""
    if document.accepted:
        return False
    document.accepted = 1
    return True
