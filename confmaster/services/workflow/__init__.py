from .models import Action, Caller, DocumentStatus, DocumentType, Role, SubmissionStatus
from .service import WorkflowService

__all__ = [
    "Action",
    "Caller",
    "DocumentStatus",
    "DocumentType",
    "Role",
    "SubmissionStatus",
    "WorkflowService",
]
