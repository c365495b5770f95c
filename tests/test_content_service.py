import asyncio
import json
import logging
import re

import pytest
from fastapi.testclient import TestClient
from google.genai import errors

from content_generation_service import main
from content_generation_service.structurer import (
    GenerationFailure,
    ensure_unique_ids,
    extract_json_from_string,
    parse_deck,
    structurize,
)
from content_generation_service.models import Slide

DECK_JSON = {
    "title": "Q1 Plan",
    "slides": [
        {"id": "s1", "title": "Intro", "content": ["A", "B"], "speakerNotes": "n1",
         "imageDescription": "A calm office"},
        {"id": "s2", "title": "Next", "content": ["C"], "speakerNotes": "n2"},
    ],
}


def test_extract_json_handles_fences_and_nesting():
    fenced = "Here you go:\n```json\n" + json.dumps(DECK_JSON) + "\n```\nEnjoy!"
    assert json.loads(extract_json_from_string(fenced)) == DECK_JSON
    assert json.loads(extract_json_from_string(json.dumps(DECK_JSON))) == DECK_JSON
    assert extract_json_from_string("no json here") == ""


def test_parse_deck_maps_camel_case_fields():
    deck = parse_deck(json.dumps(DECK_JSON))
    assert deck.title == "Q1 Plan"
    assert deck.slides[0].speaker_notes == "n1"
    assert deck.slides[0].image_description == "A calm office"
    assert deck.slides[1].image_description is None
    assert deck.slides[0].generated_image_url is None


@pytest.mark.parametrize("text", [
    "",
    "not json at all",
    "{broken json",
    '{"title": "x"}',
    '{"title": "x", "slides": [{"id": "s1", "title": "t", "content": []}]}',
])
def test_parse_deck_rejects_malformed_responses(text):
    with pytest.raises(GenerationFailure):
        parse_deck(text)


def test_duplicate_ids_are_made_unique():
    slides = [
        Slide(id=i, title="t", content=[], speakerNotes="")
        for i in ["a", "a", "a-2", "b", "a"]
    ]
    assert [s.id for s in ensure_unique_ids(slides)] == ["a", "a-3", "a-2", "b", "a-4"]


def test_structurize_sends_prompt_and_schema(fake_genai):
    client = fake_genai(text=json.dumps(DECK_JSON))
    deck = asyncio.run(structurize(client, "gemini-test", "Quarterly goals"))

    call = client.aio.models.calls[0]
    assert call["model"] == "gemini-test"
    assert "Quarterly goals" in call["contents"]
    assert call["config"].response_mime_type == "application/json"
    assert [s.id for s in deck.slides] == ["s1", "s2"]


def test_endpoint_returns_wire_format(monkeypatch, fake_genai):
    monkeypatch.setattr(main, "client", fake_genai(text=json.dumps(DECK_JSON)))
    response = TestClient(main.app).post("/generate-content", json={"text": "Quarterly goals"})

    assert response.status_code == 200
    body = response.json()
    assert body["slides"][0]["speakerNotes"] == "n1"
    assert body["slides"][0]["imageDescription"] == "A calm office"


def test_endpoint_reports_generation_failure(monkeypatch, fake_genai):
    monkeypatch.setattr(main, "client", fake_genai(text="Sorry, I cannot help with that."))
    response = TestClient(main.app).post("/generate-content", json={"text": "Quarterly goals"})
    assert response.status_code == 502


def test_endpoint_without_model(monkeypatch):
    monkeypatch.setattr(main, "client", None)
    response = TestClient(main.app).post("/generate-content", json={"text": "Quarterly goals"})
    assert response.status_code == 503


def test_endpoint_rejects_blank_text(monkeypatch, fake_genai):
    monkeypatch.setattr(main, "client", fake_genai(text=json.dumps(DECK_JSON)))
    app_client = TestClient(main.app)
    assert app_client.post("/generate-content", json={"text": ""}).status_code == 422
    assert app_client.post("/generate-content", json={"text": "   "}).status_code == 422


def test_endpoint_reports_model_api_errors(monkeypatch, fake_genai):
    quota = errors.APIError(429, {"error": {"message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}})
    monkeypatch.setattr(main, "client", fake_genai(error=quota))
    response = TestClient(main.app).post("/generate-content", json={"text": "Quarterly goals"})

    assert response.status_code == 502
    assert response.json()["detail"].startswith("Content API error:")
    assert "Quota exceeded" in response.json()["detail"]


def test_request_logs_share_a_job_id(monkeypatch, fake_genai, caplog):
    monkeypatch.setattr(main, "client", fake_genai(text=json.dumps(DECK_JSON)))
    with caplog.at_level(logging.INFO, logger=main.logger.name):
        TestClient(main.app).post("/generate-content", json={"text": "Quarterly goals"})

    job_ids = {re.match(r"\[([0-9a-f-]{36})\] ", r.getMessage()).group(1)
               for r in caplog.records if r.name == main.logger.name}
    assert len(job_ids) == 1
