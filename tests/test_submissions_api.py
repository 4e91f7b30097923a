from conftest import add_user, auth, create_submission, force_review, upload

from app.domain.enums import SubmissionStatus, UserRole, UserStatus


def test_create_requires_token(client):
    resp = client.post("/api/submissions/create", json={"title": "Demo"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "No token provided"


def test_create_rejects_garbage_token(client):
    resp = client.post("/api/submissions/create", json={"title": "Demo"}, headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


def test_create_submission(client, artist):
    resp = client.post("/api/submissions/create", json={"title": "Summer Demo"}, headers=artist)
    assert resp.status_code == 201
    body = resp.json()
    assert body["submission"]["status"] == "pending"
    assert body["submission"]["tracks"] == []
    assert body["submission"]["artistName"] == "DJ Alpha"
    assert body["submission"]["artistEmail"] == "a@example.com"
    assert body["submissionId"] == body["submission"]["id"]


def test_create_requires_title(client, artist):
    resp = client.post("/api/submissions/create", json={"title": "  "}, headers=artist)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Submission title is required"


def test_admin_cannot_create(client, admin):
    resp = client.post("/api/submissions/create", json={"title": "Demo"}, headers=admin)
    assert resp.status_code == 403
    assert resp.json()["error"] == "Artist access required"


def test_inactive_artist_is_forbidden(client):
    add_user("sleepy", "sleepy@example.com", UserRole.ARTIST, status=UserStatus.INACTIVE)
    resp = client.post("/api/submissions/create", json={"title": "Demo"}, headers=auth("sleepy"))
    assert resp.status_code == 403


def test_upload_track(client, artist, storage):
    sid = create_submission(client, artist)
    resp = upload(client, artist, sid, bpm="124", trackKey="A minor")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["submission"] == {"id": sid, "totalTracks": 1}
    assert body["track"]["bpm"] == 124
    assert body["track"]["key"] == "A minor"
    assert body["track"]["storagePath"].startswith(f"artist-a/{sid}/")
    assert body["track"]["storagePath"].endswith("_demo.mp3")
    assert body["track"]["fileSize"] == 1027
    assert body["track"]["id"].startswith("track_")
    assert list(storage.objects) == [body["track"]["storagePath"]]

    detail = client.get(f"/api/submissions/{sid}", headers=artist).json()
    assert detail["totalTracks"] == 1
    assert detail["tracks"][0]["title"] == "Opening"


def test_upload_sanitizes_filename(client, artist):
    sid = create_submission(client, artist)
    resp = upload(client, artist, sid, filename="my song (final).wav")
    assert resp.status_code == 200
    assert resp.json()["track"]["storageFilename"].endswith("_my_song__final_.wav")


def test_download_urls_are_signed_per_response(client, artist, admin, storage):
    sid = create_submission(client, artist)
    uploaded = upload(client, artist, sid).json()["track"]
    path = uploaded["storagePath"]
    assert uploaded["downloadUrl"] == f"memory://tracks/{path}?signature=1"

    first = client.get(f"/api/submissions/{sid}", headers=artist).json()["tracks"][0]["downloadUrl"]
    second = client.get(f"/api/submissions/{sid}", headers=admin).json()["tracks"][0]["downloadUrl"]
    assert first == f"memory://tracks/{path}?signature=2"
    assert second == f"memory://tracks/{path}?signature=3"

    listed = client.get("/api/submissions/admin/all", headers=admin).json()["submissions"][0]
    assert listed["tracks"][0]["downloadUrl"] == f"memory://tracks/{path}?signature=4"


def test_upload_keeps_decision_made_while_storing(client, artist, admin, storage):
    sid = create_submission(client, artist)
    original_upload = storage.upload_file

    async def review_during_upload(file_data, object_name, content_type, length=None):
        force_review(sid, SubmissionStatus.APPROVED, 9)
        return await original_upload(file_data, object_name, content_type, length)

    storage.upload_file = review_during_upload
    assert upload(client, artist, sid).status_code == 200

    detail = client.get(f"/api/submissions/{sid}", headers=admin).json()
    assert detail["status"] == "approved"
    assert detail["reviewScore"] == 9
    assert detail["totalTracks"] == 1


def test_upload_two_tracks_keeps_both(client, artist):
    sid = create_submission(client, artist)
    assert upload(client, artist, sid, title="One").status_code == 200
    assert upload(client, artist, sid, title="Two", filename="two.flac").status_code == 200
    detail = client.get(f"/api/submissions/{sid}", headers=artist).json()
    assert [t["title"] for t in detail["tracks"]] == ["One", "Two"]


def test_upload_rejects_file_type(client, artist, storage):
    sid = create_submission(client, artist)
    resp = upload(client, artist, sid, filename="notes.txt")
    assert resp.status_code == 400
    assert resp.json()["constraint"] == "type"
    assert storage.objects == {}


def test_upload_rejects_oversize_file_before_storing(client, artist, storage):
    sid = create_submission(client, artist)
    resp = upload(client, artist, sid, content=b"\x00" * (60 * 1024 * 1024))
    assert resp.status_code == 400
    assert resp.json()["constraint"] == "size"
    assert storage.objects == {}
    assert client.get(f"/api/submissions/{sid}", headers=artist).json()["totalTracks"] == 0


def test_upload_requires_title_and_genre(client, artist, storage):
    sid = create_submission(client, artist)
    resp = upload(client, artist, sid, genre="")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Track title and genre are required", "constraint": "fields"}
    assert storage.objects == {}


def test_upload_rejects_empty_file(client, artist, storage):
    sid = create_submission(client, artist)
    resp = upload(client, artist, sid, content=b"")
    assert resp.status_code == 400
    assert storage.objects == {}


def test_upload_without_file(client, artist):
    sid = create_submission(client, artist)
    resp = client.post(f"/api/submissions/upload/{sid}", data={"trackTitle": "x", "genre": "y"}, headers=artist)
    assert resp.status_code == 400
    assert resp.json()["error"] == "No file uploaded"


def test_upload_to_someone_elses_submission(client, artist, other_artist, storage):
    sid = create_submission(client, artist)
    resp = upload(client, other_artist, sid)
    assert resp.status_code == 403
    assert storage.objects == {}


def test_upload_to_missing_submission(client, artist):
    resp = upload(client, artist, "6f1c2f0e-1b7a-4d0a-9d7e-3f0e1c2b4a59")
    assert resp.status_code == 404
    assert upload(client, artist, "not-a-uuid").status_code == 404


def test_my_submissions_are_scoped_to_caller(client, artist, other_artist):
    for title in ("One", "Two", "Three"):
        create_submission(client, artist, title=title)
    create_submission(client, other_artist, title="Theirs")

    resp = client.get("/api/submissions/my-submissions?limit=2", headers=artist)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert body["hasMore"] is True
    assert [s["title"] for s in body["submissions"]] == ["Three", "Two"]

    rest = client.get("/api/submissions/my-submissions?limit=2&offset=2", headers=artist).json()
    assert [s["title"] for s in rest["submissions"]] == ["One"]
    assert rest["hasMore"] is False


def test_my_submissions_rejects_unknown_status(client, artist):
    resp = client.get("/api/submissions/my-submissions?status=archived", headers=artist)
    assert resp.status_code == 400


def test_admin_listing(client, artist, other_artist, admin):
    create_submission(client, artist)
    create_submission(client, other_artist)
    assert client.get("/api/submissions/admin/all", headers=artist).status_code == 403

    body = client.get("/api/submissions/admin/all?status=pending", headers=admin).json()
    assert body["total"] == 2
    assert {s["artistId"] for s in body["submissions"]} == {"artist-a", "artist-b"}


def test_read_access(client, artist, other_artist, admin):
    sid = create_submission(client, artist)
    assert client.get(f"/api/submissions/{sid}", headers=artist).status_code == 200
    assert client.get(f"/api/submissions/{sid}", headers=admin).status_code == 200
    resp = client.get(f"/api/submissions/{sid}", headers=other_artist)
    assert resp.status_code == 403
    assert resp.json()["error"] == "Access denied"


def test_delete_by_other_artist_is_forbidden(client, artist, other_artist):
    sid = create_submission(client, artist)
    resp = client.delete(f"/api/submissions/{sid}", headers=other_artist)
    assert resp.status_code == 403
    assert client.get(f"/api/submissions/{sid}", headers=artist).status_code == 200


def test_delete_removes_record_and_blobs(client, artist, storage):
    sid = create_submission(client, artist)
    path = upload(client, artist, sid).json()["track"]["storagePath"]

    resp = client.delete(f"/api/submissions/{sid}", headers=artist)
    assert resp.status_code == 200
    assert storage.deleted == [path]
    assert storage.objects == {}
    assert client.get(f"/api/submissions/{sid}", headers=artist).status_code == 404


def test_delete_reviewed_submission_is_refused(client, artist, admin):
    sid = create_submission(client, artist)
    client.put(f"/api/submissions/admin/{sid}/status", json={"status": "in-review"}, headers=admin)
    resp = client.delete(f"/api/submissions/{sid}", headers=artist)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Cannot delete submission that is not pending"


def test_admin_notes_hidden_from_artist(client, artist, admin):
    sid = create_submission(client, artist)
    client.put(
        f"/api/submissions/admin/{sid}/status",
        json={"status": "in-review", "adminNotes": "label meeting"},
        headers=admin,
    )
    assert client.get(f"/api/submissions/{sid}", headers=artist).json()["adminNotes"] is None
    assert client.get(f"/api/submissions/{sid}", headers=admin).json()["adminNotes"] == "label meeting"


def test_demo_ep_with_one_track(client, artist):
    sid = create_submission(client, artist, title="Demo EP")
    resp = upload(client, artist, sid, title="Song 1", genre="Pop", content=b"\xff\xfb" * (1024 * 1024))
    assert resp.status_code == 200
    detail = client.get(f"/api/submissions/{sid}", headers=artist).json()
    assert len(detail["tracks"]) == 1
    assert detail["status"] == "pending"
