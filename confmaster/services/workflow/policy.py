"""Role and ownership rules for reading and mutating workflow records.

Every WorkflowService operation asks this module before it touches storage.
Rules, first match wins:

1. admins may read anything and perform every administrative mutation;
2. anyone may read or create records they own;
3. the owner of a document may accept it;
4. everything else is denied.
"""
from __future__ import annotations

import uuid

from sqlalchemy import Select

from confmaster.core.errors import Forbidden

from .models import Action, Caller

_ADMIN_ACTIONS = frozenset({Action.READ, Action.ADMINISTER})
_OWNER_ACTIONS = frozenset({Action.READ, Action.CREATE})


def is_allowed(caller: Caller, owner_id: uuid.UUID | None, action: Action) -> bool:
    if caller.is_admin and action in _ADMIN_ACTIONS:
        return True
    is_owner = owner_id is not None and owner_id == caller.id
    if is_owner and action in _OWNER_ACTIONS:
        return True
    if is_owner and action == Action.ACCEPT:
        return True
    return False


def require(caller: Caller, owner_id: uuid.UUID | None, action: Action) -> None:
    if not is_allowed(caller, owner_id, action):
        raise Forbidden(f"{action.value} not permitted")


def require_admin(caller: Caller) -> None:
    require(caller, None, Action.ADMINISTER)


def scope_to_caller(stmt: Select, caller: Caller, owner_column) -> Select:
    """Narrow a listing to the rows the caller may read."""
    if caller.is_admin:
        return stmt
    return stmt.where(owner_column == caller.id)
