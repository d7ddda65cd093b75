"""Submission status machine and reviewer-assignment helpers.

    pending -> under_review -> accepted | rejected

The four values are a closed set. Ordering between them is not enforced:
an admin may move a submission to any status at any time.
"""
from __future__ import annotations

from collections.abc import Iterable

from confmaster.core.errors import InvalidStatus

from .models import SubmissionStatus

INITIAL_STATUS = SubmissionStatus.PENDING
TERMINAL_STATUSES = frozenset({SubmissionStatus.ACCEPTED, SubmissionStatus.REJECTED})


def parse_status(value: str | None) -> SubmissionStatus:
    try:
        return SubmissionStatus((value or "").strip())
    except ValueError:
        allowed = ", ".join(s.value for s in SubmissionStatus)
        raise InvalidStatus(f"unknown submission status {value!r}; expected one of: {allowed}") from None


def is_terminal(status: str) -> bool:
    return status in {s.value for s in TERMINAL_STATUSES}


def join_reviewer_names(names: Iterable[str]) -> str | None:
    joined = ", ".join(n for n in names if n)
    return joined or None
