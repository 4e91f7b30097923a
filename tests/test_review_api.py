import pytest
from conftest import create_submission, upload

from app.core.config import settings


def set_status(client, headers, sid, **body):
    return client.put(f"/api/submissions/admin/{sid}/status", json=body, headers=headers)


def current(client, headers, sid):
    return client.get(f"/api/submissions/{sid}", headers=headers).json()


def test_approve_without_score_is_rejected(client, artist, admin):
    sid = create_submission(client, artist)
    resp = set_status(client, admin, sid, status="approved")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Rating is required for approval or rejection"
    assert current(client, admin, sid)["status"] == "pending"


def test_zero_score_counts_as_missing(client, artist, admin):
    sid = create_submission(client, artist)
    assert set_status(client, admin, sid, status="rejected", reviewScore=0).status_code == 400


@pytest.mark.parametrize("score", [11, -1])
def test_score_out_of_range(client, artist, admin, score):
    sid = create_submission(client, artist)
    assert set_status(client, admin, sid, status="approved", reviewScore=score).status_code == 400
    assert current(client, admin, sid)["status"] == "pending"


def test_unknown_status(client, artist, admin):
    sid = create_submission(client, artist)
    resp = set_status(client, admin, sid, status="archived")
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid status"


def test_approve_sends_email_and_records_it(client, artist, admin, primary_provider):
    sid = create_submission(client, artist)
    upload(client, artist, sid)

    resp = set_status(client, admin, sid, status="approved", reviewScore=8, reviewNotes="Huge drop")
    assert resp.status_code == 200
    submission = resp.json()["submission"]
    assert submission["status"] == "approved"
    assert submission["reviewScore"] == 8
    assert submission["reviewedBy"] == "admin-1"
    assert submission["reviewedAt"] is not None

    assert len(primary_provider.sent) == 1
    email = primary_provider.sent[0]
    assert email.to_email == "a@example.com"
    assert "approved" in email.html
    assert "Huge drop" in email.html

    history = client.get(f"/api/email/history/{sid}", headers=admin).json()["emailHistory"]
    assert history["emailSent"] is True
    assert history["emailMethod"] == "sendgrid"
    assert history["status"] == "approved"
    assert history["feedback"] == "Huge drop"


def test_reject_falls_back_to_smtp(client, artist, admin, primary_provider, fallback_provider):
    primary_provider.fail = True
    sid = create_submission(client, artist)
    assert set_status(client, admin, sid, status="rejected", reviewScore=3).status_code == 200
    assert len(fallback_provider.sent) == 1
    history = client.get(f"/api/email/history/{sid}", headers=admin).json()["emailHistory"]
    assert history["emailMethod"] == "smtp"


def test_email_failure_does_not_undo_decision(client, artist, admin, primary_provider, fallback_provider):
    primary_provider.fail = True
    fallback_provider.fail = True
    sid = create_submission(client, artist)

    resp = set_status(client, admin, sid, status="approved", reviewScore=9)
    assert resp.status_code == 200

    assert current(client, admin, sid)["status"] == "approved"
    history = client.get(f"/api/email/history/{sid}", headers=admin).json()["emailHistory"]
    assert history["emailSent"] is False
    assert "smtp is down" in history["emailError"]


def test_non_decision_moves_send_nothing(client, artist, admin, primary_provider):
    sid = create_submission(client, artist)
    resp = set_status(client, admin, sid, status="in-review")
    assert resp.status_code == 200
    assert resp.json()["submission"]["status"] == "in-review"
    assert primary_provider.sent == []


def test_artist_cannot_review(client, artist, primary_provider):
    sid = create_submission(client, artist)
    resp = set_status(client, artist, sid, status="approved", reviewScore=10)
    assert resp.status_code == 403
    assert current(client, artist, sid)["status"] == "pending"
    assert primary_provider.sent == []


def test_review_missing_submission(client, admin):
    resp = set_status(client, admin, "6f1c2f0e-1b7a-4d0a-9d7e-3f0e1c2b4a59", status="in-review")
    assert resp.status_code == 404


def test_decisions_can_be_reopened_by_default(client, artist, admin):
    sid = create_submission(client, artist)
    set_status(client, admin, sid, status="rejected", reviewScore=4)
    resp = set_status(client, admin, sid, status="pending")
    assert resp.status_code == 200
    assert resp.json()["submission"]["status"] == "pending"
    assert resp.json()["submission"]["reviewScore"] == 4


def test_locked_decisions(client, artist, admin, monkeypatch):
    monkeypatch.setattr(settings, "LOCK_REVIEWED_SUBMISSIONS", True)
    sid = create_submission(client, artist)
    set_status(client, admin, sid, status="approved", reviewScore=7)

    resp = set_status(client, admin, sid, status="pending")
    assert resp.status_code == 409
    assert current(client, admin, sid)["status"] == "approved"

    rescored = set_status(client, admin, sid, status="approved", reviewScore=9)
    assert rescored.status_code == 200
    assert rescored.json()["submission"]["reviewScore"] == 9
