from datetime import datetime, timedelta, timezone

import pytest


def _verify(client, headers, user_id, action: str | None = "verify"):
    data = {"userId": str(user_id)}
    if action is not None:
        data["action"] = action
    return client.post("/api/admin/verify-ambassador", data=data, headers=headers)


def _submit_code(client, email: str, code: str):
    return client.post("/api/auth/verify-otp", json={"email": email, "code": code})


@pytest.fixture()
def admin(make_user):
    return make_user(email="admin@example.com", role="ADMIN", is_verified=True)


@pytest.fixture()
def ambassador(make_user):
    return make_user(email="amb@example.com", role="AMBASSADOR", name="Amb")


def _reload(db_session, user):
    db_session.expire_all()
    return db_session.get(type(user), user.id)


def test_verify_issues_code_and_emails_it(client, admin, ambassador, auth_headers, outbox, db_session):
    from backend.sufopoc.utils.validation import ensure_utc

    before = datetime.now(timezone.utc)
    r = _verify(client, auth_headers(admin), ambassador.id)
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "Verification code sent to user"}

    user = _reload(db_session, ambassador)
    assert user.is_verified is False
    assert len(user.verification_code) == 6 and user.verification_code.isdigit()
    expires = ensure_utc(user.verification_code_expires)
    assert before + timedelta(hours=23, minutes=59) < expires <= datetime.now(timezone.utc) + timedelta(hours=24)

    assert len(outbox) == 1
    mail = outbox[0]
    assert mail["to"] == "amb@example.com"
    assert mail["subject"] == "Ambassador Application Approved - Action Required"
    assert user.verification_code in mail["text"]
    assert "/verify-ambassador" in mail["text"]


def test_missing_action_means_verify(client, admin, ambassador, auth_headers, db_session):
    r = _verify(client, auth_headers(admin), ambassador.id, action=None)
    assert r.status_code == 200, r.text
    assert _reload(db_session, ambassador).verification_code is not None


def test_reissue_replaces_previous_code(client, admin, ambassador, auth_headers, db_session, monkeypatch):
    from backend.sufopoc.services import verification

    codes = iter(["111111", "222222"])
    monkeypatch.setattr(verification, "generate_verification_code", lambda: next(codes))

    _verify(client, auth_headers(admin), ambassador.id)
    _verify(client, auth_headers(admin), ambassador.id)
    assert _reload(db_session, ambassador).verification_code == "222222"

    assert _submit_code(client, "amb@example.com", "111111").status_code == 400
    assert _submit_code(client, "amb@example.com", "222222").status_code == 200


def test_correct_code_verifies_and_cannot_be_replayed(client, admin, ambassador, auth_headers, db_session):
    _verify(client, auth_headers(admin), ambassador.id)
    code = _reload(db_session, ambassador).verification_code

    r = _submit_code(client, "amb@example.com", code)
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "Account verified successfully"}

    user = _reload(db_session, ambassador)
    assert user.is_verified is True
    assert user.verification_code is None
    assert user.verification_code_expires is None

    replay = _submit_code(client, "amb@example.com", code)
    assert replay.status_code == 400
    assert replay.json()["error"] == "No verification pending"


def test_wrong_code_leaves_state_untouched(client, admin, ambassador, auth_headers, db_session, monkeypatch):
    from backend.sufopoc.services import verification

    monkeypatch.setattr(verification, "generate_verification_code", lambda: "123456")
    _verify(client, auth_headers(admin), ambassador.id)

    r = _submit_code(client, "amb@example.com", "654321")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid verification code"

    user = _reload(db_session, ambassador)
    assert user.is_verified is False
    assert user.verification_code == "123456"


def test_code_is_compared_verbatim(client, admin, ambassador, auth_headers, monkeypatch):
    from backend.sufopoc.services import verification

    monkeypatch.setattr(verification, "generate_verification_code", lambda: "123456")
    _verify(client, auth_headers(admin), ambassador.id)

    # Length is checked first, so pad to six characters.
    assert _submit_code(client, "amb@example.com", " 12345").status_code == 400
    assert _submit_code(client, "amb@example.com", "12345").status_code == 400


def test_unknown_email_is_not_found(client):
    r = _submit_code(client, "ghost@example.com", "123456")
    assert r.status_code == 404
    assert r.json()["error"] == "User not found"


def test_no_pending_code(client, ambassador):
    r = _submit_code(client, "amb@example.com", "123456")
    assert r.status_code == 400
    assert r.json()["error"] == "No verification pending"


def test_expired_code_is_rejected(db_session, ambassador):
    from backend.sufopoc.services.verification import confirm_ambassador_code, issue_ambassador_code
    from backend.sufopoc.utils.error_handlers import ValidationError

    issued_at = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    user, _ = issue_ambassador_code(db_session, ambassador.id, now=issued_at)
    code = user.verification_code

    # Expiry instant itself is already too late.
    with pytest.raises(ValidationError) as exc:
        confirm_ambassador_code(db_session, email=user.email, code=code, now=issued_at + timedelta(hours=24))
    assert exc.value.message == "Verification code expired"

    db_session.expire_all()
    assert db_session.get(type(user), user.id).is_verified is False

    confirmed = confirm_ambassador_code(
        db_session, email=user.email, code=code, now=issued_at + timedelta(hours=23, minutes=59)
    )
    assert confirmed.is_verified is True


def test_decline_reverts_to_student(client, admin, ambassador, auth_headers, outbox, db_session):
    _verify(client, auth_headers(admin), ambassador.id)
    outbox.clear()

    r = _verify(client, auth_headers(admin), ambassador.id, action="decline")
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "Ambassador application declined"}

    user = _reload(db_session, ambassador)
    assert user.role == "STUDENT"
    assert user.is_verified is False
    assert user.verification_code is None

    assert [m["subject"] for m in outbox] == ["Ambassador Application Update"]
    assert "decided not to proceed" in outbox[0]["text"]


def test_verified_ambassador_cannot_be_reprocessed(client, admin, make_user, auth_headers):
    done = make_user(email="done@example.com", role="AMBASSADOR", is_verified=True)
    assert _verify(client, auth_headers(admin), done.id).status_code == 409
    assert _verify(client, auth_headers(admin), done.id, action="decline").status_code == 409


def test_non_ambassador_target_is_rejected(client, admin, make_user, auth_headers, outbox):
    student = make_user(email="plain@example.com", role="STUDENT")
    r = _verify(client, auth_headers(admin), student.id)
    assert r.status_code == 400
    assert r.json()["error"] == "User is not an ambassador"
    assert outbox == []


def test_bad_requests(client, admin, ambassador, auth_headers):
    headers = auth_headers(admin)
    assert _verify(client, headers, "").status_code == 400
    assert _verify(client, headers, "abc").status_code == 400
    assert _verify(client, headers, ambassador.id, action="promote").status_code == 400
    assert _verify(client, headers, 99999).status_code == 404


def test_only_admin_may_verify(client, ambassador, make_user, auth_headers):
    other = make_user(email="other-amb@example.com", role="AMBASSADOR", is_verified=True)
    r = _verify(client, auth_headers(other), ambassador.id)
    assert r.status_code == 401
    assert r.json()["error"] == "Unauthorized"
    assert _verify(client, {}, ambassador.id).status_code == 401


def test_verification_unlocks_posting_immediately(client, admin, ambassador, auth_headers, db_session, job_payload):
    headers = auth_headers(ambassador)
    assert client.post("/api/jobs", json=job_payload(), headers=headers).status_code == 403

    _verify(client, auth_headers(admin), ambassador.id)
    code = _reload(db_session, ambassador).verification_code
    assert _submit_code(client, "amb@example.com", code).status_code == 200

    # Same token as before: flags are re-read per request.
    assert client.post("/api/jobs", json=job_payload(), headers=headers).status_code == 201


def test_oversized_user_id_is_a_bad_request(client, admin, auth_headers):
    r = _verify(client, auth_headers(admin), 10**20)
    assert r.status_code == 400
    assert r.json()["error"].startswith("User ID must not exceed")
    assert _verify(client, auth_headers(admin), 10**20, action="decline").status_code == 400


def test_declined_ambassador_token_no_longer_opens_dashboard(client, admin, ambassador, auth_headers):
    stale = auth_headers(ambassador)
    assert client.get("/ambassador", headers=stale, follow_redirects=False).status_code == 200

    _verify(client, auth_headers(admin), ambassador.id, action="decline")

    # The token still says AMBASSADOR; the stored role is now STUDENT.
    r = client.get("/ambassador", headers=stale, follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "/"
