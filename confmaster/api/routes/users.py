import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from confmaster.api.deps import file_response, get_caller
from confmaster.db.session import get_db
from confmaster.schemas.user import UserRead
from confmaster.services import accounts
from confmaster.services.storage import BlobStore, get_blob_store
from confmaster.services.workflow import Caller

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
def list_users(caller: Caller = Depends(get_caller), db: Session = Depends(get_db)):
    """Admin-only directory, used to pick reviewers and document recipients."""
    return accounts.list_users(db, caller)


@router.get("/{user_id}/picture", response_model=None)
def profile_picture(
    user_id: uuid.UUID,
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    return file_response(store, accounts.picture_ref(db, caller, user_id))
