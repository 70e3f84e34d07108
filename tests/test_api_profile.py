from pydantic.alias_generators import to_camel


def _camel(profile):
    return {to_camel(name): value for name, value in profile.items()}


def _attach_resume(client):
    response = client.post("/api/resume/", files={"file": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")})
    assert response.status_code == 200, response.text


def test_new_profile_shows_empty_form(logged_in_client):
    data = logged_in_client.get("/api/profile/").json()
    assert data["state"] == "incomplete"
    assert data["summary"] is None
    assert data["form"]["first_name"] == ""
    assert data["completionPercentage"] == 0


def test_complete_profile_shows_summary(logged_in_client, complete_profile):
    response = logged_in_client.post("/api/profile/", json=_camel(complete_profile))
    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "complete"
    assert data["form"] is None
    assert data["summary"]["full_name"] == "Ada Lovelace"
    assert data["summary"]["education"]["university"] == "Universiti Malaya"

    assert logged_in_client.get("/api/profile/").json()["state"] == "complete"


def test_partial_save_then_missing_field_completes(logged_in_client, complete_profile):
    country = complete_profile.pop("country")

    data = logged_in_client.post("/api/profile/", json=_camel(complete_profile)).json()
    assert data["state"] == "incomplete"
    assert data["missingFields"] == ["country"]
    assert data["form"]["city"] == "Kuala Lumpur"

    data = logged_in_client.post("/api/profile/", json={"country": country}).json()
    assert data["state"] == "complete"


def test_snake_case_payload_is_accepted(logged_in_client):
    data = logged_in_client.post("/api/profile/", json={"first_name": "Ada"}).json()
    assert data["form"]["first_name"] == "Ada"


def test_invalid_save_returns_field_errors(logged_in_client):
    logged_in_client.post("/api/profile/", json={"firstName": "Ada"})

    response = logged_in_client.post("/api/profile/", json={"email": "nope", "firstName": "Grace"})

    assert response.status_code == 400
    assert "email" in response.json()["detail"]["errors"]
    assert logged_in_client.get("/api/profile/").json()["form"]["first_name"] == "Ada"


def test_other_university_requires_name(logged_in_client):
    response = logged_in_client.post("/api/profile/", json={"university": "other"})
    assert response.status_code == 400
    assert "other_university" in response.json()["detail"]["errors"]

    response = logged_in_client.post("/api/profile/", json={"university": "other", "otherUniversity": "Open University"})
    assert response.status_code == 200


def test_completion_details(logged_in_client):
    logged_in_client.post("/api/profile/", json={"firstName": "Ada", "lastName": "Lovelace"})
    data = logged_in_client.get("/api/profile/completion").json()
    assert data["filledFields"] == ["first_name", "last_name"]
    assert "country" in data["missingFields"]
    assert data["completionPercentage"] == 15


def test_identity_step_needs_resume(logged_in_client, complete_profile):
    identity = {name: complete_profile[name] for name in (
        "first_name", "last_name", "email", "phone", "date_of_birth", "address", "city", "country",
    )}

    data = logged_in_client.post("/api/profile/steps/1", json=_camel(identity)).json()
    assert data["canAdvance"] is False
    assert data["resumeRequired"] is True

    _attach_resume(logged_in_client)
    data = logged_in_client.post("/api/profile/steps/1", json=_camel(identity)).json()
    assert data["canAdvance"] is True


def test_step_check_reports_missing_fields(logged_in_client):
    data = logged_in_client.post("/api/profile/steps/2", json={"university": "um"}).json()
    assert data["canAdvance"] is False
    assert data["missingFields"] == ["course", "grade", "study_start", "graduation_date"]


def test_step_check_does_not_save(logged_in_client):
    logged_in_client.post("/api/profile/steps/2", json={"course": "Physics"})
    assert logged_in_client.get("/api/profile/").json()["form"]["course"] == ""


def test_unknown_step(logged_in_client):
    assert logged_in_client.post("/api/profile/steps/7", json={}).status_code == 404
