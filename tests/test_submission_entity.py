import pytest

from app.domain.entities.submission import Submission
from app.domain.entities.user import User
from app.domain.enums import SubmissionStatus
from app.domain.events.submission_events import SubmissionReviewed
from app.domain.exceptions import Conflict, Forbidden, InvalidInput
from app.domain.value_objects.email import Email
from app.domain.value_objects.entity_ids import UserId
from app.domain.value_objects.review import ReviewScore


@pytest.fixture
def artist():
    return User.register_artist(UserId("artist-a"), Email("a@example.com"), "Alpha", "DJ Alpha")


@pytest.fixture
def admin():
    return User.register_admin(UserId("admin-1"), Email("admin@example.com"), "Admin")


@pytest.fixture
def submission(artist):
    s = Submission.create(artist, "Demo")
    s.get_events()
    return s


def test_new_submission_is_pending(artist):
    s = Submission.create(artist, "  Demo  ")
    assert s.status == SubmissionStatus.PENDING
    assert s.title == "Demo"
    assert s.tracks == []
    assert s.artist_name == "DJ Alpha"


def test_admin_cannot_own_submission(admin):
    with pytest.raises(Forbidden):
        Submission.create(admin, "Demo")


def test_decision_needs_score(submission, admin):
    with pytest.raises(InvalidInput):
        submission.set_status(SubmissionStatus.APPROVED, admin)
    assert submission.status == SubmissionStatus.PENDING
    assert submission.reviewed_by is None


def test_only_admins_decide(submission, artist):
    with pytest.raises(Forbidden):
        submission.set_status(SubmissionStatus.IN_REVIEW, artist)


def test_status_strings_are_parsed(submission, admin):
    submission.set_status("in-review", admin)
    assert submission.status == SubmissionStatus.IN_REVIEW
    with pytest.raises(InvalidInput):
        submission.set_status("archived", admin)


def test_decision_emits_event(submission, admin):
    submission.set_status(SubmissionStatus.REJECTED, admin, ReviewScore(4), review_notes="Mix is muddy")
    events = submission.get_events()
    assert len(events) == 1
    event = events[0]
    assert isinstance(event, SubmissionReviewed)
    assert event.status == SubmissionStatus.REJECTED
    assert event.feedback == "Mix is muddy"
    assert event.artist_email == "a@example.com"
    assert submission.reviewed_at is not None


def test_non_decision_emits_nothing(submission, admin):
    submission.set_status(SubmissionStatus.IN_REVIEW, admin)
    assert submission.get_events() == []
    assert submission.reviewed_by == admin.id
    assert submission.reviewed_at is None


def test_event_payload_survives_queue(submission, admin):
    submission.set_status(SubmissionStatus.APPROVED, admin, ReviewScore(9))
    event = submission.get_events()[0]
    assert SubmissionReviewed.from_payload(event.to_payload()) == event


def test_locked_decisions(submission, admin):
    submission.set_status(SubmissionStatus.APPROVED, admin, ReviewScore(6), lock_decisions=True)
    with pytest.raises(Conflict):
        submission.set_status(SubmissionStatus.PENDING, admin, lock_decisions=True)
    submission.set_status(SubmissionStatus.APPROVED, admin, ReviewScore(8), lock_decisions=True)
    assert submission.review_score == 8


def test_only_pending_can_be_deleted(submission, admin, artist):
    submission.ensure_deletable_by(artist.id)
    with pytest.raises(Forbidden):
        submission.ensure_deletable_by(UserId("someone-else"))
    submission.set_status(SubmissionStatus.IN_REVIEW, admin)
    with pytest.raises(InvalidInput):
        submission.ensure_deletable_by(artist.id)


@pytest.mark.parametrize("raw", [None, 0])
def test_missing_scores(raw):
    assert ReviewScore.parse(raw) is None


@pytest.mark.parametrize("raw", [11, -3, "8", True])
def test_bad_scores(raw):
    with pytest.raises(InvalidInput):
        ReviewScore.parse(raw)
