import uuid

from pydantic import BaseModel, ConfigDict


class SubmissionRead(BaseModel):
    """What an author sees of their own submission."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    conference_id: uuid.UUID
    user_id: uuid.UUID
    title: str
    abstract: str | None = None
    file_path: str
    status: str
    conference_title: str


class SubmissionAdminRead(SubmissionRead):
    author_name: str
    reviewers: str | None = None


class StatusUpdate(BaseModel):
    status: str


class AssignReviewerRequest(BaseModel):
    reviewer_id: uuid.UUID


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    submission_id: uuid.UUID
    comments: str | None = None
    score: int | None = None


class ReviewAdminRead(ReviewRead):
    reviewer_id: uuid.UUID
    reviewer_name: str


class ReviewCreate(BaseModel):
    submission_id: uuid.UUID
    comments: str | None = None
    score: int | None = None
