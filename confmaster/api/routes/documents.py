import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile

from confmaster.api.deps import file_response, get_caller, get_workflow, store_upload
from confmaster.schemas.common import CreatedResponse, SuccessResponse
from confmaster.schemas.document import VerifyRequest
from confmaster.services.storage import BlobStore, get_blob_store
from confmaster.services.workflow import Caller, WorkflowService

router = APIRouter(prefix="/documents", tags=["documents"])


@router.get("", response_model=None)
def list_documents(
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    return workflow.list_documents(caller)


@router.post("", response_model=CreatedResponse)
def upload_document(
    title: str = Form(""),
    user_id: uuid.UUID | None = Form(None),
    file: UploadFile | None = File(None),
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
    store: BlobStore = Depends(get_blob_store),
):
    """
    Admins may pass ``user_id`` to issue a document to that user;
    for everyone else the document is their own upload.
    """
    workflow.check_document(caller, title=title, target_user_id=user_id)
    file_ref = store_upload(store, file, prefix="documents")
    document = workflow.upload_document(caller, title=title, file_ref=file_ref, target_user_id=user_id)
    return CreatedResponse(id=document.id)


@router.patch("/{document_id}/verify", response_model=SuccessResponse)
def verify_document(
    document_id: uuid.UUID,
    payload: VerifyRequest,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    workflow.verify_document(caller, document_id, payload.status)
    return SuccessResponse()


@router.patch("/{document_id}/accept", response_model=SuccessResponse)
def accept_document(
    document_id: uuid.UUID,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    workflow.accept_document(caller, document_id)
    return SuccessResponse()


@router.get("/{document_id}/file", response_model=None)
def download_document(
    document_id: uuid.UUID,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
    store: BlobStore = Depends(get_blob_store),
):
    """The owner opens a certificate before accepting it; admins open IDs to verify them."""
    return file_response(store, workflow.document_file(caller, document_id))
