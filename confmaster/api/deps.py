from __future__ import annotations

from fastapi import Depends, UploadFile
from fastapi.responses import FileResponse, RedirectResponse, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from confmaster.core.errors import Unauthorized
from confmaster.core.security import decode_token
from confmaster.db.session import get_db
from confmaster.services.storage import BlobStore, display_name
from confmaster.services.workflow import Caller, WorkflowService

bearer_scheme = HTTPBearer(auto_error=False)


def get_caller(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> Caller:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("missing bearer token")
    return Caller.from_claims(decode_token(credentials.credentials))


def get_workflow(db: Session = Depends(get_db)) -> WorkflowService:
    return WorkflowService(db)


def store_upload(store: BlobStore, upload: UploadFile | None, *, prefix: str) -> str | None:
    """Push an optional upload to the blob store; None when nothing was sent."""
    if upload is None or not upload.filename:
        return None
    return store.put(
        upload.file,
        original_name=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        prefix=prefix,
    )


def file_response(store: BlobStore, object_key: str) -> Response:
    """Serve a stored file: straight from disk, or by redirecting to a signed url."""
    link = store.link(object_key)
    if link.path is not None:
        return FileResponse(link.path, filename=display_name(object_key), content_disposition_type="inline")
    return RedirectResponse(link.url, status_code=307)
