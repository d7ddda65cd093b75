from pathlib import Path

from tests.factories import auth_header, make_admin, make_conference, make_submission, make_user, pdf


def _register(client, email, name):
    resp = client.post("/api/auth/register", json={"email": email, "password": "hunter22", "name": name})
    assert resp.status_code == 200
    body = resp.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def test_submission_review_round_trip(client, db):
    admin_headers = auth_header(make_admin(db))
    conference = make_conference(db, title="Systems Conf")
    user, user_headers = _register(client, "u@uni.org", "Uma")
    reviewer, _ = _register(client, "r@uni.org", "Rita Reviewer")

    created = client.post(
        "/api/submissions",
        data={"conference_id": str(conference.id), "title": "Fast Paths", "abstract": "We go fast."},
        files=pdf(),
        headers=user_headers,
    )
    assert created.status_code == 200
    submission_id = created.json()["id"]

    mine = client.get("/api/submissions", headers=user_headers).json()
    assert [s["status"] for s in mine] == ["pending"]

    assign = client.post(
        f"/api/submissions/{submission_id}/assign", json={"reviewer_id": reviewer["id"]}, headers=admin_headers
    )
    assert assign.status_code == 200
    assert assign.json() == {"success": True}

    again = client.post(
        f"/api/submissions/{submission_id}/assign", json={"reviewer_id": reviewer["id"]}, headers=admin_headers
    )
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "conflict"

    decided = client.patch(f"/api/submissions/{submission_id}/status", json={"status": "accepted"}, headers=admin_headers)
    assert decided.status_code == 200

    user_rows = client.get("/api/submissions", headers=user_headers).json()
    assert len(user_rows) == 1
    assert user_rows[0]["status"] == "accepted"
    assert user_rows[0]["conference_title"] == "Systems Conf"
    assert "reviewers" not in user_rows[0]
    assert "author_name" not in user_rows[0]

    admin_rows = client.get("/api/submissions", headers=admin_headers).json()
    assert len(admin_rows) == 1
    assert admin_rows[0]["id"] == submission_id
    assert admin_rows[0]["status"] == "accepted"
    assert admin_rows[0]["reviewers"] == "Rita Reviewer"
    assert admin_rows[0]["author_name"] == "Uma"


def test_uploaded_file_lands_in_blob_store(client, db, blob_store):
    conference = make_conference(db)
    user = make_user(db, email="alice@uni.org", name="Alice")

    resp = client.post(
        "/api/submissions",
        data={"conference_id": str(conference.id), "title": "Paper"},
        files=pdf("final draft.pdf"),
        headers=auth_header(user),
    )
    assert resp.status_code == 200

    row = client.get("/api/submissions", headers=auth_header(user)).json()[0]
    assert row["file_path"].startswith("submissions/")
    assert row["file_path"].endswith("-final draft.pdf")
    assert (Path(blob_store.root) / row["file_path"]).read_bytes() == b"%PDF-1.4 test"


def test_create_submission_validation(client, db):
    conference = make_conference(db)
    headers = auth_header(make_user(db, email="alice@uni.org", name="Alice"))

    no_file = client.post("/api/submissions", data={"conference_id": str(conference.id), "title": "T"}, headers=headers)
    assert no_file.status_code == 422
    assert no_file.json()["error"]["code"] == "validation"

    no_title = client.post(
        "/api/submissions", data={"conference_id": str(conference.id)}, files=pdf(), headers=headers
    )
    assert no_title.status_code == 422

    no_conference = client.post("/api/submissions", data={"title": "T"}, files=pdf(), headers=headers)
    assert no_conference.status_code == 422

    unknown_conference = client.post(
        "/api/submissions",
        data={"conference_id": "00000000-0000-4000-8000-000000000000", "title": "T"},
        files=pdf(),
        headers=headers,
    )
    assert unknown_conference.status_code == 404


def test_status_update_errors(client, db):
    conference = make_conference(db)
    alice = make_user(db, email="alice@uni.org", name="Alice")
    admin_headers = auth_header(make_admin(db))
    submission = make_submission(db, user=alice, conference=conference)

    forbidden = client.patch(
        f"/api/submissions/{submission.id}/status", json={"status": "accepted"}, headers=auth_header(alice)
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["code"] == "forbidden"

    invalid = client.patch(f"/api/submissions/{submission.id}/status", json={"status": "maybe"}, headers=admin_headers)
    assert invalid.status_code == 422
    assert invalid.json()["error"]["code"] == "invalid_status"
    assert client.get("/api/submissions", headers=auth_header(alice)).json()[0]["status"] == "pending"

    missing = client.patch(
        "/api/submissions/00000000-0000-4000-8000-000000000000/status",
        json={"status": "accepted"},
        headers=admin_headers,
    )
    assert missing.status_code == 404


def test_assign_reviewer_requires_admin(client, db):
    conference = make_conference(db)
    alice = make_user(db, email="alice@uni.org", name="Alice")
    bob = make_user(db, email="bob@uni.org", name="Bob")
    submission = make_submission(db, user=alice, conference=conference)

    resp = client.post(
        f"/api/submissions/{submission.id}/assign", json={"reviewer_id": str(bob.id)}, headers=auth_header(alice)
    )
    assert resp.status_code == 403


def test_users_only_see_their_own_submissions(client, db):
    conference = make_conference(db)
    alice = make_user(db, email="alice@uni.org", name="Alice")
    bob = make_user(db, email="bob@uni.org", name="Bob")
    make_submission(db, user=alice, conference=conference, title="alice paper")
    make_submission(db, user=bob, conference=conference, title="bob paper")

    rows = client.get("/api/submissions", headers=auth_header(alice)).json()
    assert [r["title"] for r in rows] == ["alice paper"]
    assert all(r["user_id"] == str(alice.id) for r in rows)


def test_reviews_endpoints(client, db):
    conference = make_conference(db)
    alice = make_user(db, email="alice@uni.org", name="Alice")
    bob = make_user(db, email="bob@uni.org", name="Bob")
    admin = make_admin(db)
    submission = make_submission(db, user=alice, conference=conference)

    recorded = client.post(
        "/api/reviews",
        json={"submission_id": str(submission.id), "comments": "Clear and novel.", "score": 9},
        headers=auth_header(admin),
    )
    assert recorded.status_code == 200

    admin_view = client.get(f"/api/submissions/{submission.id}/reviews", headers=auth_header(admin)).json()
    assert admin_view[0]["reviewer_name"] == "Ada Admin"
    assert admin_view[0]["score"] == 9

    author_view = client.get(f"/api/submissions/{submission.id}/reviews", headers=auth_header(alice)).json()
    assert author_view[0]["comments"] == "Clear and novel."
    assert "reviewer_name" not in author_view[0]

    other = client.get(f"/api/submissions/{submission.id}/reviews", headers=auth_header(bob))
    assert other.status_code == 403

    by_user = client.post(
        "/api/reviews", json={"submission_id": str(submission.id), "score": 1}, headers=auth_header(bob)
    )
    assert by_user.status_code == 403


def test_rejected_submission_stores_no_file(client, db, blob_store):
    conference = make_conference(db)
    headers = auth_header(make_user(db, email="alice@uni.org", name="Alice"))

    no_title = client.post(
        "/api/submissions", data={"conference_id": str(conference.id)}, files=pdf(), headers=headers
    )
    unknown_conference = client.post(
        "/api/submissions",
        data={"conference_id": "00000000-0000-4000-8000-000000000000", "title": "T"},
        files=pdf(),
        headers=headers,
    )

    assert (no_title.status_code, unknown_conference.status_code) == (422, 404)
    assert [p for p in Path(blob_store.root).rglob("*") if p.is_file()] == []


def test_submission_file_download(client, db):
    admin = make_admin(db)
    conference = make_conference(db)
    alice = make_user(db, email="alice@uni.org", name="Alice")
    bob = make_user(db, email="bob@uni.org", name="Bob")
    created = client.post(
        "/api/submissions",
        data={"conference_id": str(conference.id), "title": "Paper"},
        files=pdf("paper.pdf"),
        headers=auth_header(alice),
    ).json()

    author = client.get(f"/api/submissions/{created['id']}/file", headers=auth_header(alice))
    assert author.status_code == 200
    assert author.content == b"%PDF-1.4 test"

    assert client.get(f"/api/submissions/{created['id']}/file", headers=auth_header(admin)).status_code == 200
    assert client.get(f"/api/submissions/{created['id']}/file", headers=auth_header(bob)).status_code == 403
