import pytest


@pytest.fixture()
def creator(make_user):
    return make_user(email="amb@example.com", role="AMBASSADOR", name="Amb", is_verified=True)


@pytest.fixture()
def creator_headers(creator, auth_headers):
    return auth_headers(creator)


def _create_job(client, headers, payload):
    r = client.post("/api/jobs", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["job"]


def test_verified_ambassador_creates_job(client, creator, creator_headers, job_payload):
    job = _create_job(client, creator_headers, job_payload(currency="", city=" Utrecht "))
    assert job["title"] == "React Developer"
    assert job["createdById"] == creator.id
    assert job["isExpired"] is False
    assert job["requirements"] == ["React", "TypeScript"]
    assert job["currency"] is None
    assert job["city"] == "Utrecht"


def test_posting_creation_rules(client, make_user, auth_headers, job_payload, opleiding_payload):
    unverified = make_user(email="new-amb@example.com", role="AMBASSADOR")
    r = client.post("/api/jobs", json=job_payload(), headers=auth_headers(unverified))
    assert r.status_code == 403
    assert r.json()["error"] == "Your account must be verified to create postings"
    assert client.post("/api/opleidingen", json=opleiding_payload(), headers=auth_headers(unverified)).status_code == 403

    for role in ("STUDENT", "EXPERT"):
        user = make_user(email=f"{role.lower()}@example.com", role=role, is_verified=True)
        assert client.post("/api/jobs", json=job_payload(), headers=auth_headers(user)).status_code == 403

    admin = make_user(email="admin@example.com", role="ADMIN", is_verified=True)
    assert client.post("/api/jobs", json=job_payload(), headers=auth_headers(admin)).status_code == 201

    assert client.post("/api/jobs", json=job_payload()).status_code == 401


def test_job_payload_validation(client, creator_headers, job_payload):
    bad = job_payload()
    del bad["title"]
    assert client.post("/api/jobs", json=bad, headers=creator_headers).status_code == 400
    assert client.post("/api/jobs", json=job_payload(salaryMin=5000, salaryMax=100), headers=creator_headers).status_code == 400
    assert client.post("/api/jobs", json=job_payload(positionsAvailable=0), headers=creator_headers).status_code == 400


def test_public_listing_hides_expired_and_hidden_jobs(client, creator_headers, job_payload):
    open_job = _create_job(client, creator_headers, job_payload(title="Open role"))
    hidden = _create_job(client, creator_headers, job_payload(title="Hidden role", isVisible=False))
    expired = _create_job(client, creator_headers, job_payload(title="Old role"))
    client.patch(f"/api/jobs/{expired['id']}", json={"isExpired": True}, headers=creator_headers)

    r = client.get("/api/jobs")
    assert r.status_code == 200, r.text
    ids = [j["id"] for j in r.json()["jobs"]]
    assert ids == [open_job["id"]]

    # Direct lookup still works for hidden and expired postings.
    assert client.get(f"/api/jobs/{hidden['id']}").status_code == 200
    assert client.get(f"/api/jobs/{expired['id']}").json()["job"]["isExpired"] is True


def test_public_listing_filters(client, creator_headers, job_payload):
    _create_job(client, creator_headers, job_payload(title="Nurse", category="Healthcare", country="Germany"))
    _create_job(client, creator_headers, job_payload(title="Backend Engineer", category="IT", jobType="PART_TIME"))

    def titles(**params):
        return [j["title"] for j in client.get("/api/jobs", params=params).json()["jobs"]]

    assert titles(category="Healthcare") == ["Nurse"]
    assert titles(country="Germany") == ["Nurse"]
    assert titles(jobType="PART_TIME") == ["Backend Engineer"]
    assert titles(search="backend") == ["Backend Engineer"]


def test_job_detail_includes_creator(client, creator_headers, job_payload):
    job = _create_job(client, creator_headers, job_payload())
    r = client.get(f"/api/jobs/{job['id']}")
    assert r.status_code == 200, r.text
    assert r.json()["job"]["createdBy"] == {"name": "Amb", "email": "amb@example.com"}

    assert client.get("/api/jobs/99999").status_code == 404


def test_only_creator_or_admin_may_update(client, make_user, auth_headers, creator_headers, job_payload):
    job = _create_job(client, creator_headers, job_payload())
    other = make_user(email="other@example.com", role="AMBASSADOR", is_verified=True)
    admin = make_user(email="admin@example.com", role="ADMIN", is_verified=True)

    assert client.patch(f"/api/jobs/{job['id']}", json={"title": "Hijack"}, headers=auth_headers(other)).status_code == 403

    r = client.patch(f"/api/jobs/{job['id']}", json={"title": "Senior React Developer"}, headers=creator_headers)
    assert r.status_code == 200, r.text
    assert r.json()["job"]["title"] == "Senior React Developer"
    assert r.json()["job"]["companyName"] == "Acme BV"

    r = client.patch(f"/api/jobs/{job['id']}", json={"tags": ["remote", " "]}, headers=auth_headers(admin))
    assert r.status_code == 200, r.text
    assert r.json()["job"]["tags"] == ["remote"]


def test_update_rejects_null_for_required_column(client, creator_headers, job_payload):
    job = _create_job(client, creator_headers, job_payload())
    r = client.patch(f"/api/jobs/{job['id']}", json={"title": None}, headers=creator_headers)
    assert r.status_code == 400, r.text


def test_delete_job_cascades_applications(client, make_user, auth_headers, creator_headers, job_payload, db_session):
    from backend.sufopoc.models.application import Application

    job = _create_job(client, creator_headers, job_payload())
    student = make_user(email="stu@example.com")
    r = client.post(
        "/api/applications",
        json={"jobId": job["id"], "userId": student.id, "coverLetter": "Hire me"},
        headers=auth_headers(student),
    )
    assert r.status_code == 201, r.text

    other = make_user(email="other@example.com", role="AMBASSADOR", is_verified=True)
    assert client.delete(f"/api/jobs/{job['id']}", headers=auth_headers(other)).status_code == 403

    r = client.delete(f"/api/jobs/{job['id']}", headers=creator_headers)
    assert r.status_code == 200, r.text
    assert r.json()["deleted_job_id"] == job["id"]
    assert client.get(f"/api/jobs/{job['id']}").status_code == 404

    db_session.expire_all()
    assert db_session.query(Application).count() == 0


def test_job_applications_visible_to_creator_only(client, make_user, auth_headers, creator_headers, job_payload):
    job = _create_job(client, creator_headers, job_payload())
    student = make_user(email="stu@example.com", name="Stu")
    client.post(
        "/api/applications",
        json={"jobId": job["id"], "userId": student.id, "coverLetter": "Hire me"},
        headers=auth_headers(student),
    )

    r = client.get(f"/api/jobs/{job['id']}/applications", headers=creator_headers)
    assert r.status_code == 200, r.text
    apps = r.json()["applications"]
    assert len(apps) == 1
    assert apps[0]["user"] == {"name": "Stu", "email": "stu@example.com"}
    assert apps[0]["status"] == "SUBMITTED"

    assert client.get(f"/api/jobs/{job['id']}/applications", headers=auth_headers(student)).status_code == 403


def test_opleiding_crud(client, creator_headers, opleiding_payload, make_user, auth_headers):
    r = client.post("/api/opleidingen", json=opleiding_payload(location=""), headers=creator_headers)
    assert r.status_code == 201, r.text
    opleiding = r.json()["opleiding"]
    assert opleiding["requirements"] == "Basic technical skills"
    assert opleiding["location"] is None

    listed = client.get("/api/opleidingen").json()["opleidingen"]
    assert [o["id"] for o in listed] == [opleiding["id"]]

    detail = client.get(f"/api/opleidingen/{opleiding['id']}").json()["opleiding"]
    assert detail["createdBy"]["email"] == "amb@example.com"

    r = client.patch(f"/api/opleidingen/{opleiding['id']}", json={"isExpired": True}, headers=creator_headers)
    assert r.status_code == 200, r.text
    assert client.get("/api/opleidingen").json()["opleidingen"] == []

    other = make_user(email="other@example.com", role="AMBASSADOR", is_verified=True)
    assert client.delete(f"/api/opleidingen/{opleiding['id']}", headers=auth_headers(other)).status_code == 403
    assert client.delete(f"/api/opleidingen/{opleiding['id']}", headers=creator_headers).status_code == 200
    assert client.get(f"/api/opleidingen/{opleiding['id']}").status_code == 404


def test_verified_business_may_create_opleiding(client, make_user, auth_headers, opleiding_payload):
    business = make_user(email="biz@example.com", role="BUSINESS", is_business_verified=True)
    r = client.post("/api/opleidingen", json=opleiding_payload(), headers=auth_headers(business))
    assert r.status_code == 201, r.text


def test_oversized_path_ids_are_invalid_input(client, creator_headers):
    too_big = 10**20
    for path in (f"/api/jobs/{too_big}", f"/api/opleidingen/{too_big}"):
        r = client.get(path)
        assert r.status_code == 400, path
        assert r.json()["error"] == "Invalid input"
    assert client.patch(f"/api/jobs/{too_big}", json={"title": "X"}, headers=creator_headers).status_code == 400
    assert client.delete(f"/api/opleidingen/{too_big}", headers=creator_headers).status_code == 400
    assert client.get(f"/api/jobs/{too_big}/applications", headers=creator_headers).status_code == 400
