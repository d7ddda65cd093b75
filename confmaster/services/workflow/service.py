from __future__ import annotations

import uuid
from collections import defaultdict

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from confmaster.core.errors import Conflict, NotFound, ValidationFailed
from confmaster.core.logging import get_logger
from confmaster.models import Conference, Document, Review, Submission, User
from confmaster.schemas.document import DocumentAdminRead, DocumentRead
from confmaster.schemas.submission import (
    ReviewAdminRead,
    ReviewRead,
    SubmissionAdminRead,
    SubmissionRead,
)

from . import documents, policy, submissions
from .models import Action, Caller, DocumentType

logger = get_logger(__name__)


def _required(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationFailed(f"{field} is required")
    return cleaned


def _submission_fields(submission: Submission) -> dict:
    return {
        "id": submission.id,
        "conference_id": submission.conference_id,
        "user_id": submission.user_id,
        "title": submission.title,
        "abstract": submission.abstract,
        "file_path": submission.file_path,
        "status": submission.status,
    }


class WorkflowService:
    """Submission and document operations for one request.

    Each public method checks the caller against the access policy, applies
    the relevant lifecycle rule and commits a single transaction. Failures
    raise one of the ``confmaster.core.errors`` kinds; nothing is partially
    applied.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------------- submissions ----------------

    def create_submission(
        self,
        caller: Caller,
        *,
        conference_id: uuid.UUID,
        title: str | None,
        abstract: str | None,
        file_ref: str | None,
    ) -> Submission:
        title = self.check_submission(caller, conference_id=conference_id, title=title)
        file_ref = _required(file_ref, "file")

        submission = Submission(
            conference_id=conference_id,
            user_id=caller.id,
            title=title,
            abstract=abstract,
            file_path=file_ref,
            status=submissions.INITIAL_STATUS.value,
        )
        self.db.add(submission)
        self.db.commit()
        logger.info(
            "submission created",
            extra={"fields": {"submission_id": submission.id, "user_id": caller.id, "conference_id": conference_id}},
        )
        return submission

    def check_submission(self, caller: Caller, *, conference_id: uuid.UUID, title: str | None) -> str:
        """Everything create_submission checks except the file; returns the cleaned title."""
        policy.require(caller, caller.id, Action.CREATE)
        title = _required(title, "title")
        if self.db.get(Conference, conference_id) is None:
            raise NotFound("conference not found")
        return title

    def submission_file(self, caller: Caller, submission_id: uuid.UUID) -> str:
        submission = self._get_submission(submission_id)
        policy.require(caller, submission.user_id, Action.READ)
        return submission.file_path

    def set_submission_status(self, caller: Caller, submission_id: uuid.UUID, status: str | None) -> Submission:
        policy.require_admin(caller)
        submission = self._get_submission(submission_id)
        new_status = submissions.parse_status(status)

        previous = submission.status
        submission.status = new_status.value
        self.db.commit()
        if submissions.is_terminal(previous) and previous != new_status.value:
            logger.warning(
                "submission reopened from terminal status",
                extra={"fields": {"submission_id": submission_id, "from": previous, "to": new_status.value}},
            )
        else:
            logger.info(
                "submission status set",
                extra={"fields": {"submission_id": submission_id, "from": previous, "to": new_status.value}},
            )
        return submission

    def assign_reviewer(self, caller: Caller, submission_id: uuid.UUID, reviewer_id: uuid.UUID) -> Review:
        policy.require_admin(caller)
        self._get_submission(submission_id)
        if self.db.get(User, reviewer_id) is None:
            raise NotFound("reviewer not found")

        # the unique constraint on (submission_id, reviewer_id) decides races
        review = Review(
            submission_id=submission_id,
            reviewer_id=reviewer_id,
            assignment_order=self._next_assignment_order(submission_id),
        )
        self.db.add(review)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("reviewer already assigned to this submission") from None

        logger.info(
            "reviewer assigned",
            extra={"fields": {"submission_id": submission_id, "reviewer_id": reviewer_id, "by": caller.id}},
        )
        return review

    def list_submissions(self, caller: Caller) -> list[SubmissionRead]:
        stmt = (
            select(Submission, User.name, Conference.title)
            .join(User, Submission.user_id == User.id)
            .join(Conference, Submission.conference_id == Conference.id)
            .order_by(Submission.created_at, Submission.id)
        )
        stmt = policy.scope_to_caller(stmt, caller, Submission.user_id)
        rows = self.db.execute(stmt).all()

        if not caller.is_admin:
            return [
                SubmissionRead(**_submission_fields(s), conference_title=conference_title)
                for s, _author, conference_title in rows
            ]

        names = self._reviewer_names([s.id for s, _a, _c in rows])
        return [
            SubmissionAdminRead(
                **_submission_fields(s),
                conference_title=conference_title,
                author_name=author,
                reviewers=submissions.join_reviewer_names(names.get(s.id, [])),
            )
            for s, author, conference_title in rows
        ]

    def list_reviews(self, caller: Caller, submission_id: uuid.UUID) -> list[ReviewRead]:
        submission = self._get_submission(submission_id)
        policy.require(caller, submission.user_id, Action.READ)

        stmt = (
            select(Review, User.name)
            .join(User, Review.reviewer_id == User.id)
            .where(Review.submission_id == submission_id)
            .order_by(Review.assignment_order, Review.created_at)
        )
        rows = self.db.execute(stmt).all()
        if caller.is_admin:
            return [
                ReviewAdminRead(
                    id=r.id,
                    submission_id=r.submission_id,
                    comments=r.comments,
                    score=r.score,
                    reviewer_id=r.reviewer_id,
                    reviewer_name=name,
                )
                for r, name in rows
            ]
        # authors get the content, not who wrote it
        return [ReviewRead.model_validate(r) for r, _name in rows]

    def record_review(
        self,
        caller: Caller,
        submission_id: uuid.UUID,
        *,
        comments: str | None,
        score: int | None,
    ) -> Review:
        policy.require_admin(caller)
        self._get_submission(submission_id)

        review = self.db.scalar(
            select(Review).where(Review.submission_id == submission_id, Review.reviewer_id == caller.id)
        )
        if review is None:
            review = Review(
                submission_id=submission_id,
                reviewer_id=caller.id,
                assignment_order=self._next_assignment_order(submission_id),
            )
            self.db.add(review)
        review.comments = comments
        review.score = score
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("review was recorded concurrently; retry") from None

        logger.info("review recorded", extra={"fields": {"submission_id": submission_id, "reviewer_id": caller.id}})
        return review

    # ---------------- documents ----------------

    def upload_document(
        self,
        caller: Caller,
        *,
        title: str | None,
        file_ref: str | None,
        target_user_id: uuid.UUID | None = None,
    ) -> Document:
        title = self.check_document(caller, title=title, target_user_id=target_user_id)
        owner_id, doc_type = documents.resolve_owner(caller, target_user_id)
        file_ref = _required(file_ref, "file")

        document = Document(
            user_id=owner_id,
            title=title,
            file_path=file_ref,
            status=documents.INITIAL_STATUS.value,
            type=doc_type.value,
            accepted=0,
        )
        self.db.add(document)
        self.db.commit()
        logger.info(
            "document uploaded",
            extra={"fields": {"document_id": document.id, "owner_id": owner_id, "type": doc_type.value, "by": caller.id}},
        )
        return document

    def check_document(self, caller: Caller, *, title: str | None, target_user_id: uuid.UUID | None = None) -> str:
        owner_id, doc_type = documents.resolve_owner(caller, target_user_id)
        if doc_type == DocumentType.ADMIN_UPLOAD:
            policy.require_admin(caller)
        else:
            policy.require(caller, owner_id, Action.CREATE)
        title = _required(title, "title")
        if doc_type == DocumentType.ADMIN_UPLOAD and self.db.get(User, owner_id) is None:
            raise NotFound("target user not found")
        return title

    def document_file(self, caller: Caller, document_id: uuid.UUID) -> str:
        document = self.db.get(Document, document_id)
        if document is None:
            raise NotFound("document not found")
        policy.require(caller, document.user_id, Action.READ)
        return document.file_path

    def verify_document(self, caller: Caller, document_id: uuid.UUID, status: str | None) -> Document:
        policy.require_admin(caller)
        document = self.db.get(Document, document_id)
        if document is None:
            raise NotFound("document not found")
        new_status = documents.parse_verification(status)

        document.status = new_status.value
        self.db.commit()
        logger.info("document verified", extra={"fields": {"document_id": document_id, "status": new_status.value}})
        return document

    def accept_document(self, caller: Caller, document_id: uuid.UUID) -> Document:
        # scoped lookup: a document owned by someone else looks absent
        document = self.db.scalar(
            select(Document).where(
                Document.id == document_id,
                Document.user_id == caller.id,
                Document.type == DocumentType.ADMIN_UPLOAD.value,
            )
        )
        if document is None:
            raise NotFound("document not found")
        policy.require(caller, document.user_id, Action.ACCEPT)

        if documents.mark_accepted(document):
            self.db.commit()
            logger.info("document accepted", extra={"fields": {"document_id": document_id, "user_id": caller.id}})
        return document

    def list_documents(self, caller: Caller) -> list[DocumentRead]:
        stmt = (
            select(Document, User.name)
            .join(User, Document.user_id == User.id)
            .order_by(Document.created_at, Document.id)
        )
        stmt = policy.scope_to_caller(stmt, caller, Document.user_id)
        rows = self.db.execute(stmt).all()
        if caller.is_admin:
            return [DocumentAdminRead(**DocumentRead.model_validate(d).model_dump(), user_name=name) for d, name in rows]
        return [DocumentRead.model_validate(d) for d, _name in rows]

    # ---------------- internal ----------------

    def _get_submission(self, submission_id: uuid.UUID) -> Submission:
        submission = self.db.get(Submission, submission_id)
        if submission is None:
            raise NotFound("submission not found")
        return submission

    def _next_assignment_order(self, submission_id: uuid.UUID) -> int:
        stmt = select(func.max(Review.assignment_order)).where(Review.submission_id == submission_id)
        current = self.db.scalar(stmt)
        return (current or 0) + 1

    def _reviewer_names(self, submission_ids: list[uuid.UUID]) -> dict[uuid.UUID, list[str]]:
        if not submission_ids:
            return {}
        stmt = (
            select(Review.submission_id, User.name)
            .join(User, Review.reviewer_id == User.id)
            .where(Review.submission_id.in_(submission_ids))
            .order_by(Review.assignment_order, Review.created_at)
        )
        names: dict[uuid.UUID, list[str]] = defaultdict(list)
        for submission_id, name in self.db.execute(stmt):
            names[submission_id].append(name)
        return names
