from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from confmaster.api.deps import get_caller, store_upload
from confmaster.db.session import get_db
from confmaster.schemas.user import UserRead
from confmaster.services import accounts
from confmaster.services.storage import BlobStore, get_blob_store
from confmaster.services.workflow import Caller

router = APIRouter(prefix="/profile", tags=["profile"])


@router.patch("", response_model=UserRead)
def update_profile(
    name: str | None = Form(None),
    affiliation: str | None = Form(None),
    bio: str | None = Form(None),
    profile_picture: UploadFile | None = File(None),
    caller: Caller = Depends(get_caller),
    db: Session = Depends(get_db),
    store: BlobStore = Depends(get_blob_store),
):
    picture_ref = store_upload(store, profile_picture, prefix="avatars")
    return accounts.update_profile(
        db,
        caller,
        name=name,
        affiliation=affiliation,
        bio=bio,
        profile_picture=picture_ref,
    )
