import pytest

MIB = 1024 * 1024
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _upload(client, name, content, mime_type, path="/api/resume/"):
    return client.post(path, files={"file": (name, content, mime_type)})


@pytest.mark.parametrize("name,mime_type", [
    ("cv.pdf", "application/pdf"),
    ("cv.doc", "application/msword"),
    ("cv.docx", DOCX),
])
def test_upload_supported_resume(logged_in_client, name, mime_type):
    response = _upload(logged_in_client, name, b"x" * 2048, mime_type)
    assert response.status_code == 200
    data = response.json()
    assert data["fileName"] == name
    assert data["fileSize"] == 2048
    assert data["fileType"] == mime_type
    assert data["sizeLabel"] == "2 KB"

    assert logged_in_client.get("/api/resume/").json()["fileName"] == name


def test_text_file_is_rejected(logged_in_client):
    response = _upload(logged_in_client, "notes.txt", b"hello", "text/plain")
    assert response.status_code == 400
    assert logged_in_client.get("/api/resume/").status_code == 404


def test_oversized_file_is_rejected(logged_in_client):
    response = _upload(logged_in_client, "big.pdf", b"x" * (6 * MIB), "application/pdf")
    assert response.status_code == 413
    assert response.json()["detail"] == "File size must be less than 5MB"
    assert logged_in_client.get("/api/resume/").status_code == 404


def test_file_at_limit_is_accepted(logged_in_client):
    response = _upload(logged_in_client, "exact.pdf", b"x" * (5 * MIB), "application/pdf")
    assert response.status_code == 200
    assert response.json()["sizeLabel"] == "5 MB"


def test_rejected_upload_keeps_previous_resume(logged_in_client):
    _upload(logged_in_client, "cv.pdf", b"x" * 100, "application/pdf")
    _upload(logged_in_client, "notes.txt", b"x", "text/plain")
    assert logged_in_client.get("/api/resume/").json()["fileName"] == "cv.pdf"


def test_missing_file_is_rejected(logged_in_client):
    response = logged_in_client.post("/api/resume/")
    assert response.status_code == 400


def test_delete_resume(logged_in_client):
    _upload(logged_in_client, "cv.pdf", b"x" * 100, "application/pdf")
    assert logged_in_client.delete("/api/resume/").status_code == 200
    assert logged_in_client.get("/api/resume/").status_code == 404


def test_parse_returns_autofill_without_storing(logged_in_client):
    response = _upload(logged_in_client, "cv.pdf", b"x" * 100, "application/pdf", path="/api/resume/parse")
    assert response.status_code == 200
    data = response.json()
    assert data["parsed"]["name"] == "John Doe"
    assert data["autofill"]["first_name"] == "John"
    assert data["autofill"]["skills"] == "JavaScript, Python, React, Node.js, SQL"

    assert logged_in_client.get("/api/resume/").status_code == 404
    assert logged_in_client.get("/api/profile/").json()["form"]["first_name"] == ""


def test_parse_applies_the_gate(logged_in_client):
    response = _upload(logged_in_client, "notes.txt", b"x", "text/plain", path="/api/resume/parse")
    assert response.status_code == 400
