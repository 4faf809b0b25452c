"""Full request flows against an in-memory SQLite database with real tokens."""

from jobportal.core.security import decode_access_token
from jobportal.models.application import Application
from jobportal.models.job import Job

API = "/api/v1"


def _register(api, email, role="student", password="password123", **extra):
    payload = {
        "full_name": email.split("@")[0].title(),
        "email": email,
        "phone_number": "555-0100",
        "password": password,
        "role": role,
        **extra,
    }
    return api.post(f"{API}/user/register", json=payload)


def _login(api, email, password="password123"):
    resp = api.post(f"{API}/user/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _company(api, headers, name="ACME"):
    resp = api.post(
        f"{API}/company/register-company",
        json={"name": name, "description": "Anvils", "website": "https://acme.example.com", "location": "Berlin"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["company"]


def _post_job(api, headers, company_id, **overrides):
    payload = {
        "title": "Backend Engineer",
        "description": "Build APIs",
        "requirements": "python,sql",
        "salary": "120000",
        "location": "Remote",
        "job_type": "Full-time",
        "experience": "3",
        "position": "2",
        "company_id": company_id,
        **overrides,
    }
    return api.post(f"{API}/job/admin/post-job", json=payload, headers=headers)


def test_register_login_token_roundtrip(api):
    resp = _register(api, "una@example.com")
    assert resp.status_code == 201
    user_id = resp.json()["user"]["id"]

    headers = _login(api, "una@example.com")
    claims = decode_access_token(headers["Authorization"].split(" ", 1)[1])
    assert claims.user_id == user_id
    assert claims.role == "student"


def test_mixed_case_email_registers_and_logs_in(api):
    resp = _register(api, "Una@Example.COM")
    assert resp.status_code == 201
    assert resp.json()["user"]["email"] == "una@example.com"

    headers = _login(api, "Una@Example.COM")
    assert decode_access_token(headers["Authorization"].split(" ", 1)[1]).email == "una@example.com"
    _login(api, "una@example.com")
    assert _register(api, "UNA@example.com").status_code == 400


def test_wrong_password_and_unknown_email_share_one_error(api):
    _register(api, "una@example.com")
    wrong = api.post(f"{API}/user/login", json={"email": "una@example.com", "password": "nope"})
    unknown = api.post(f"{API}/user/login", json={"email": "ghost@example.com", "password": "nope"})
    assert wrong.status_code == unknown.status_code == 400
    assert wrong.json() == unknown.json()


def test_duplicate_email_rejected_regardless_of_other_fields(api):
    assert _register(api, "una@example.com").status_code == 201
    second = _register(api, "una@example.com", role="admin", password="different", phone_number="999")
    assert second.status_code == 400
    assert second.json()["success"] is False


def test_student_cannot_post_job(api, session_factory):
    _register(api, "boss@example.com", role="admin")
    company = _company(api, _login(api, "boss@example.com"))
    _register(api, "stu@example.com")

    resp = _post_job(api, _login(api, "stu@example.com"), company["id"])
    assert resp.status_code == 403
    with session_factory() as db:
        assert db.query(Job).count() == 0


def test_applying_twice_leaves_one_application(api, session_factory):
    _register(api, "boss@example.com", role="admin")
    admin = _login(api, "boss@example.com")
    job = _post_job(api, admin, _company(api, admin)["id"]).json()["job"]
    _register(api, "stu@example.com")
    student = _login(api, "stu@example.com")

    assert api.post(f"{API}/application/apply/{job['id']}", headers=student).status_code == 201
    again = api.post(f"{API}/application/apply/{job['id']}", headers=student)
    assert again.status_code == 400
    with session_factory() as db:
        assert db.query(Application).count() == 1


def test_invalid_status_leaves_stored_status(api, session_factory):
    _register(api, "boss@example.com", role="admin")
    admin = _login(api, "boss@example.com")
    job = _post_job(api, admin, _company(api, admin)["id"]).json()["job"]
    _register(api, "stu@example.com")
    application = api.post(
        f"{API}/application/apply/{job['id']}", headers=_login(api, "stu@example.com")
    ).json()["application"]

    resp = api.put(f"{API}/application/status/{application['id']}/update", json={"status": "hired"}, headers=admin)
    assert resp.status_code == 400
    with session_factory() as db:
        assert db.get(Application, application["id"]).status == "pending"


def test_empty_company_list(api):
    _register(api, "una@example.com")
    resp = api.get(f"{API}/company/get-companies", headers=_login(api, "una@example.com"))
    assert resp.status_code == 404
    assert resp.json() == {"message": "No companies found.", "success": False}


def test_company_update_with_only_location(api):
    _register(api, "boss@example.com", role="admin")
    admin = _login(api, "boss@example.com")
    company = _company(api, admin)

    resp = api.put(f"{API}/company/update-company/{company['id']}", json={"location": "Remote"}, headers=admin)
    assert resp.status_code == 200
    updated = api.get(f"{API}/company/get-company/{company['id']}", headers=admin).json()["company"]
    assert updated["location"] == "Remote"
    for field in ("name", "description", "website"):
        assert updated[field] == company[field]


def test_profile_update_is_partial(api):
    user_id = _register(api, "una@example.com", bio="hi", skills=["python"]).json()["user"]["id"]
    headers = _login(api, "una@example.com")

    resp = api.put(f"{API}/user/update-profile/{user_id}", json={"resume": "cv.pdf"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["profile"] == {
        "bio": "hi",
        "skills": ["python"],
        "resume": "cv.pdf",
        "resume_original_name": None,
    }


def test_hiring_flow(api):
    _register(api, "boss@example.com", role="admin")
    admin = _login(api, "boss@example.com")
    company = _company(api, admin)

    posted = _post_job(api, admin, company["id"])
    assert posted.status_code == 201
    job = posted.json()["job"]
    assert job["experience_level"] == 3
    assert job["requirements"] == ["python", "sql"]

    _register(api, "stu@example.com")
    student = _login(api, "stu@example.com")
    found = api.get(f"{API}/job/get/jobs", params={"keyword": "BACKEND"}, headers=student).json()["jobs"]
    assert [j["id"] for j in found] == [job["id"]]
    assert found[0]["company"]["name"] == "ACME"

    assert api.post(f"{API}/application/apply/{job['id']}", headers=student).status_code == 201

    applicants = api.get(f"{API}/application/{job['id']}/applicants", headers=admin)
    assert applicants.status_code == 200
    entries = applicants.json()["job"]["applications"]
    assert len(entries) == 1
    assert entries[0]["status"] == "pending"
    assert entries[0]["applicant"]["email"] == "stu@example.com"

    detail = api.get(f"{API}/job/get/jobs/{job['id']}", headers=student).json()["job"]
    assert [a["id"] for a in detail["applications"]] == [entries[0]["id"]]

    updated = api.put(
        f"{API}/application/status/{entries[0]['id']}/update",
        json={"status": "Accepted"},
        headers=admin,
    )
    assert updated.status_code == 200

    applied = api.get(f"{API}/application/get/appliedjobs", headers=student).json()["applications"]
    assert len(applied) == 1
    assert applied[0]["status"] == "accepted"
    assert applied[0]["job"]["company"]["name"] == "ACME"

    mine = api.get(f"{API}/job/admin/jobs", headers=admin).json()["jobs"]
    assert [j["id"] for j in mine] == [job["id"]]
