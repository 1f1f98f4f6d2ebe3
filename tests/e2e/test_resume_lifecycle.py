from fastapi.testclient import TestClient

from resumeflow.api.app import create_app

OWNER_ID = "7a1f3c52-3d4e-4a8b-9f0e-2c6d8e1b5a40"
OWNER_HEADERS = {"X-User-Id": OWNER_ID}
SERVICE_HEADERS = {"Authorization": "Bearer test-service-key"}


def test_upload_process_and_poll_resume() -> None:
    client = TestClient(create_app())

    resume = client.post(
        "/api/resumes",
        json={"original_file_path": f"{OWNER_ID}/resume.pdf", "original_filename": "resume.pdf"},
        headers=OWNER_HEADERS,
    ).json()
    assert resume["status"] == "pending"

    processing = client.post(
        f"/api/webhooks/resumes/{resume['id']}",
        json={"status": "processing"},
        headers=SERVICE_HEADERS,
    ).json()
    assert processing["status"] == "processing"
    assert processing["webhook_attempts"] == 0

    # A retried delivery of the same outcome is counted twice.
    for _ in range(2):
        done = client.post(
            f"/api/webhooks/resumes/{resume['id']}",
            json={
                "status": "completed",
                "optimized_file_path": f"{OWNER_ID}/resume-optimized.pdf.pdf",
                "webhook_response": {"score": 87},
            },
            headers=SERVICE_HEADERS,
        )
        assert done.status_code == 200

    polled = client.get(f"/api/resumes/{resume['id']}", headers=OWNER_HEADERS).json()
    assert polled["status"] == "completed"
    assert polled["optimized_file_path"] == f"{OWNER_ID}/resume-optimized.pdf"
    assert polled["webhook_attempts"] == 2
    assert polled["webhook_response"] == {"score": 87}
    assert polled["user_id"] == OWNER_ID
    assert polled["original_file_path"] == f"{OWNER_ID}/resume.pdf"


def test_failed_generation_is_visible_to_owner() -> None:
    client = TestClient(create_app())

    letter = client.post(
        "/api/cover-letters",
        json={"resume_file_path": f"{OWNER_ID}/resume.pdf", "job_url": "https://example.com/jobs/5"},
        headers=OWNER_HEADERS,
    ).json()

    client.post(
        f"/api/webhooks/cover-letters/{letter['id']}",
        json={"status": "failed", "webhook_response": {"error": "job page unreachable"}},
        headers=SERVICE_HEADERS,
    )

    polled = client.get(f"/api/cover-letters/{letter['id']}", headers=OWNER_HEADERS).json()
    assert polled["status"] == "failed"
    assert polled["generated_file_path"] is None
    assert polled["webhook_response"] == {"error": "job page unreachable"}
    assert polled["webhook_attempts"] == 1
