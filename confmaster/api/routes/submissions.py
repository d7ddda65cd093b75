import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile

from confmaster.api.deps import file_response, get_caller, get_workflow, store_upload
from confmaster.schemas.common import CreatedResponse, SuccessResponse
from confmaster.schemas.submission import AssignReviewerRequest, StatusUpdate
from confmaster.services.storage import BlobStore, get_blob_store
from confmaster.services.workflow import Caller, WorkflowService

router = APIRouter(prefix="/submissions", tags=["submissions"])


# response_model=None: admins and authors get differently shaped rows
@router.get("", response_model=None)
def list_submissions(
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    return workflow.list_submissions(caller)


@router.post("", response_model=CreatedResponse)
def create_submission(
    conference_id: uuid.UUID = Form(...),
    title: str = Form(""),
    abstract: str | None = Form(None),
    file: UploadFile | None = File(None),
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
    store: BlobStore = Depends(get_blob_store),
):
    workflow.check_submission(caller, conference_id=conference_id, title=title)
    file_ref = store_upload(store, file, prefix="submissions")
    submission = workflow.create_submission(
        caller,
        conference_id=conference_id,
        title=title,
        abstract=abstract,
        file_ref=file_ref,
    )
    return CreatedResponse(id=submission.id)


@router.patch("/{submission_id}/status", response_model=SuccessResponse)
def set_status(
    submission_id: uuid.UUID,
    payload: StatusUpdate,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    workflow.set_submission_status(caller, submission_id, payload.status)
    return SuccessResponse()


@router.post("/{submission_id}/assign", response_model=SuccessResponse)
def assign_reviewer(
    submission_id: uuid.UUID,
    payload: AssignReviewerRequest,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    workflow.assign_reviewer(caller, submission_id, payload.reviewer_id)
    return SuccessResponse()


@router.get("/{submission_id}/reviews", response_model=None)
def list_reviews(
    submission_id: uuid.UUID,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    return workflow.list_reviews(caller, submission_id)


@router.get("/{submission_id}/file", response_model=None)
def download_submission(
    submission_id: uuid.UUID,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
    store: BlobStore = Depends(get_blob_store),
):
    return file_response(store, workflow.submission_file(caller, submission_id))
