import json

import pytest
import requests

from streamlit_ui import clients


def _response(status, body=None, content=None, headers=None):
    response = requests.models.Response()
    response.status_code = status
    response.url = "http://service.test"
    response.reason = "OK" if status < 400 else "Error"
    response._content = json.dumps(body).encode("utf-8") if body is not None else content
    response.headers.update(headers or {})
    return response


@pytest.fixture
def posts(monkeypatch):
    """Records outgoing POSTs and answers with the queued responses."""
    calls, queue = [], []

    def fake_post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        answer = queue.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    monkeypatch.setattr(clients.requests, "post", fake_post)
    return calls, queue


def test_structurize_posts_text(posts):
    calls, queue = posts
    queue.append(_response(200, {"title": "Q1 Plan", "slides": []}))
    assert clients.structurize("notes")["title"] == "Q1 Plan"
    assert calls[0]["url"].endswith("/generate-content")
    assert calls[0]["json"] == {"text": "notes"}


def test_http_error_detail_becomes_failure_message(posts):
    _, queue = posts
    queue.append(_response(502, {"detail": "Failed to structure presentation data."}))
    with pytest.raises(clients.GenerationFailure, match="Failed to structure"):
        clients.structurize("notes")


def test_non_json_error_body_is_used_verbatim(posts):
    _, queue = posts
    queue.append(_response(500, content=b"Internal Server Error"))
    with pytest.raises(clients.ImageGenerationFailure, match="Internal Server Error"):
        clients.synthesize_image("Skyline")


def test_connection_errors_are_service_errors(posts):
    _, queue = posts
    queue.append(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(clients.ServiceError, match="Could not connect"):
        clients.export_presentation({"title": "x", "slides": []}, "modern")


def test_synthesize_image_requires_image(posts):
    _, queue = posts
    queue.append(_response(200, {"imageUrl": None}))
    with pytest.raises(clients.ImageGenerationFailure):
        clients.synthesize_image("Skyline")


def test_synthesize_images_returns_results(posts):
    calls, queue = posts
    queue.append(_response(200, {"results": [{"id": "s1", "imageUrl": "data:x", "error": None}]}))
    results = clients.synthesize_images([{"id": "s1", "description": "Skyline"}])
    assert results[0]["id"] == "s1"
    assert calls[0]["json"] == {"items": [{"id": "s1", "description": "Skyline"}]}


def test_export_reads_filename_from_header(posts):
    calls, queue = posts
    queue.append(_response(200, content=b"PK\x03\x04", headers={
        "Content-Disposition": "attachment; filename=\"Plan_f?r.pptx\"; filename*=UTF-8''Plan_f%C3%BCr.pptx",
    }))
    filename, payload = clients.export_presentation({"title": "Plan für", "slides": []}, "elegant")
    assert filename == "Plan_für.pptx"
    assert payload == b"PK\x03\x04"
    assert calls[0]["json"]["theme"] == "elegant"


@pytest.mark.parametrize("header, expected", [
    ('attachment; filename="Q1_Plan.pptx"', "Q1_Plan.pptx"),
    (None, "presentation.pptx"),
    ("attachment", "presentation.pptx"),
])
def test_filename_from_disposition(header, expected):
    assert clients.filename_from_disposition(header, "presentation.pptx") == expected


def test_validation_error_details_are_flattened(posts):
    _, queue = posts
    queue.append(_response(422, {"detail": [
        {"loc": ["body", "text"], "msg": "String should have at least 1 character", "type": "string_too_short"},
        {"loc": ["body"], "msg": "Field required", "type": "missing"},
    ]}))
    with pytest.raises(clients.GenerationFailure) as excinfo:
        clients.structurize("")
    assert str(excinfo.value) == "String should have at least 1 character; Field required"
