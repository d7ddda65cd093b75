import pytest

from confmaster.core.errors import InvalidStatus, ValidationFailed
from confmaster.services.workflow import SubmissionStatus
from confmaster.services.workflow import submissions


def test_new_submissions_start_pending():
    assert submissions.INITIAL_STATUS is SubmissionStatus.PENDING


@pytest.mark.parametrize("value", ["pending", "under_review", "accepted", "rejected", " accepted "])
def test_parse_status_accepts_the_closed_set(value):
    assert submissions.parse_status(value).value == value.strip()


@pytest.mark.parametrize("value", ["", None, "approved", "ACCEPTED", "withdrawn"])
def test_parse_status_rejects_unknown_values(value):
    with pytest.raises(InvalidStatus) as excinfo:
        submissions.parse_status(value)
    assert excinfo.value.code == "invalid_status"
    assert isinstance(excinfo.value, ValidationFailed)


def test_terminal_statuses():
    assert submissions.is_terminal("accepted")
    assert submissions.is_terminal("rejected")
    assert not submissions.is_terminal("pending")
    assert not submissions.is_terminal("under_review")


def test_join_reviewer_names_keeps_order():
    assert submissions.join_reviewer_names(["Grace", "Alan"]) == "Grace, Alan"
    assert submissions.join_reviewer_names([]) is None
