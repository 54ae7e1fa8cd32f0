"""
End-to-end tests of the HTTP surface with a fake generation client.
"""
import io

from docx import Document

from app.core.exceptions import GenerationError
from app.tests.fakes import scripted_responder


def test_views_share_navigation(client):
    for path, heading in [("/", "Welcome to Prepify"), ("/resume", "Resume Builder"), ("/interview", "Technical Interview")]:
        response = client.get(path)
        assert response.status_code == 200
        assert heading in response.text
        assert 'href="/resume"' in response.text
        assert 'href="/interview"' in response.text


def test_resume_flow_with_download(client):
    session = client.post("/api/v1/resume/sessions").json()
    session_id = session["session_id"]
    assert session["preview"]["generated"] is False
    assert session["preview"]["lines"][0] == "Your Name"

    client.patch(f"/api/v1/resume/sessions/{session_id}/personal-info", json={"field": "name", "value": "Grace"})
    state = client.put(f"/api/v1/resume/sessions/{session_id}/sections/skills", json={"value": "COBOL"}).json()
    assert state["draft"]["personal_info"]["name"] == "Grace"
    assert "COBOL" in state["preview"]["lines"]

    preview = client.post(f"/api/v1/resume/sessions/{session_id}/generate").json()
    assert preview == {"generated": True, "lines": ["Polished resume", "", "EXPERIENCE"], "notice": None}

    download = client.get(f"/api/v1/resume/sessions/{session_id}/export")
    assert download.status_code == 200
    assert 'filename="Prepify_Resume.docx"' in download.headers["content-disposition"]
    paragraphs = [p.text for p in Document(io.BytesIO(download.content)).paragraphs]
    assert paragraphs == ["Polished resume", "", "EXPERIENCE"]


def test_resume_generation_failure_is_a_notice(client, fake_generator):
    fake_generator.responder = lambda prompt: GenerationError("no key")
    session_id = client.post("/api/v1/resume/sessions").json()["session_id"]

    response = client.post(f"/api/v1/resume/sessions/{session_id}/generate")

    assert response.status_code == 200
    assert response.json()["generated"] is False
    assert response.json()["notice"]


def test_invalid_field_and_template_are_rejected(client):
    session_id = client.post("/api/v1/resume/sessions").json()["session_id"]

    assert client.patch(
        f"/api/v1/resume/sessions/{session_id}/personal-info", json={"field": "age", "value": "30"}
    ).status_code == 422
    assert client.put(f"/api/v1/resume/sessions/{session_id}/template", json={"template": "fancy"}).status_code == 422
    assert client.put(
        f"/api/v1/resume/sessions/{session_id}/template", json={"template": "classic"}
    ).json()["draft"]["selected_template"] == "classic"


def test_discarded_session_is_gone(client):
    session_id = client.post("/api/v1/resume/sessions").json()["session_id"]

    assert client.delete(f"/api/v1/resume/sessions/{session_id}").status_code == 204
    response = client.get(f"/api/v1/resume/sessions/{session_id}")
    assert response.status_code == 404
    assert response.json()["error_type"] == "SessionNotFoundError"


def test_interview_flow(client):
    created = client.post(
        "/api/v1/interview/sessions",
        json={"capabilities": {"speech_recognition": True, "camera": False}},
    ).json()
    session_id = created["session_id"]
    base = f"/api/v1/interview/sessions/{session_id}"
    assert created["state"] == {"phase": "not_started"}
    assert created["notice"] is None

    state = client.post(f"{base}/start").json()["state"]
    assert state["phase"] == "in_progress"
    assert state["questions"] == ["Q one", "Q two"]

    blank = client.post(f"{base}/next")
    assert blank.status_code == 422
    assert blank.json()["error_type"] == "BlankAnswerError"

    client.post(f"{base}/recording")
    client.post(f"{base}/transcript", json={"transcript": "spoken"})
    state = client.post(f"{base}/next").json()["state"]
    assert state["current_index"] == 1
    assert state["answers"][0]["text"] == "spoken"
    assert state["recording_active"] is True

    client.post(f"{base}/recording")

    client.put(f"{base}/answer", json={"text": "typed"})
    done = client.post(f"{base}/next").json()["state"]
    assert done["phase"] == "complete"
    assert done["score"] == 80
    assert done["feedback_lines"] == ["- Good structure", "- Add examples"]

    assert client.put(f"{base}/answer", json={"text": "more"}).status_code == 409


def test_interview_without_speech_reports_notice(client):
    created = client.post("/api/v1/interview/sessions").json()

    assert created["capabilities"] == {"speech_recognition": False, "camera": False}
    assert "not supported" in created["notice"]

    base = f"/api/v1/interview/sessions/{created['session_id']}"
    client.post(f"{base}/start")
    assert client.post(f"{base}/recording").json()["state"]["recording_active"] is False


def test_evaluation_outage_keeps_session_interactable(client, fake_generator):
    responder = scripted_responder(questions="Single question")

    def respond(prompt):
        if prompt.startswith("Evaluate the following answer"):
            return GenerationError("upstream 503")
        return responder(prompt)

    fake_generator.responder = respond
    base = f"/api/v1/interview/sessions/{client.post('/api/v1/interview/sessions').json()['session_id']}"
    client.post(f"{base}/start")
    client.put(f"{base}/answer", json={"text": "answer"})

    response = client.post(f"{base}/next")

    assert response.status_code == 502
    assert response.json()["error_type"] == "EvaluationError"
    state = client.get(base).json()["state"]
    assert state["phase"] == "in_progress"
    assert state["answers"][0]["text"] == "answer"
