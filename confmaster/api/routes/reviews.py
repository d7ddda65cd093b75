from fastapi import APIRouter, Depends

from confmaster.api.deps import get_caller, get_workflow
from confmaster.schemas.common import SuccessResponse
from confmaster.schemas.submission import ReviewCreate
from confmaster.services.workflow import Caller, WorkflowService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("", response_model=SuccessResponse)
def record_review(
    payload: ReviewCreate,
    caller: Caller = Depends(get_caller),
    workflow: WorkflowService = Depends(get_workflow),
):
    workflow.record_review(caller, payload.submission_id, comments=payload.comments, score=payload.score)
    return SuccessResponse()
