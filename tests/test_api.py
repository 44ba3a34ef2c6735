"""Tests for the FastAPI gloss API.

WHY: Validates the HTTP surface: happy paths, validation errors, and
the result board lifecycle (format → view → close).

HOW: FastAPI TestClient exercises each endpoint in-process. The result
board is cleared before and after every test.

RULES:
- All tests use the FastAPI TestClient (synchronous)
- Each test is independent; the board is reset around each test
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import gloss_converter.server.app as app_module
from gloss_converter.presenter import build_display_blocks
from gloss_converter.server.app import app, result_board

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_board():
    """Clear all displayed results before each test to ensure isolation."""
    result_board.reset()
    yield
    result_board.reset()


@pytest.fixture
def client():
    return TestClient(app)


# ---------------------------------------------------------------------------
# POST /format
# ---------------------------------------------------------------------------


class TestFormat:
    def test_demo_request(self, client, demo_request, demo_latex, page_url):
        demo_request["page_url"] = page_url
        response = client.post("/format", json=demo_request)

        assert response.status_code == 200
        data = response.json()
        assert data["sentence_id"] == "3"
        assert data["story_id"] == "demo_story"
        assert data["title"] == "Demo"
        assert data["sentence_url"] == "http://example.org/story/demo?3"
        assert data["latex"] == demo_latex
        assert data["blocks"][0] == "Format result: "
        assert data["blocks"][2] == "Story ID: demo\\_story\n"
        assert data["blocks"][-1] == demo_latex
        assert [o["format"] for o in data["outputs"]] == ["gb4e", "plain_text"]

    def test_referer_used_for_permalink(self, client, demo_request):
        response = client.post(
            "/format",
            json=demo_request,
            headers={"Referer": "https://stories.example/view/demo?mode=edit"},
        )
        assert response.status_code == 200
        assert response.json()["sentence_url"] == "https://stories.example/view/demo?3"

    def test_escaped_tier_names_resolve(self, client, kofan_request, page_url):
        kofan_request["page_url"] = page_url
        response = client.post("/format", json=kofan_request)

        assert response.status_code == 200
        latex = response.json()["latex"]
        assert "\\gll cundyi-'je='fa tsampi \\\\" in latex
        assert response.json()["sentence_url"].endswith("?42000")

    def test_selected_formats_only(self, client, demo_request):
        demo_request["formats"] = ["plain_text"]
        response = client.post("/format", json=demo_request)
        outputs = response.json()["outputs"]
        assert [o["format"] for o in outputs] == ["plain_text"]
        assert outputs[0]["suffix"] == "-gloss.txt"

    def test_unknown_format_returns_400(self, client, demo_request):
        demo_request["formats"] = ["docx"]
        response = client.post("/format", json=demo_request)
        assert response.status_code == 400
        assert "docx" in response.json()["detail"]

    def test_missing_tier_map_returns_422(self, client, demo_request):
        del demo_request["tierMap"]
        response = client.post("/format", json=demo_request)
        assert response.status_code == 422

    def test_missing_default_title_returns_422(self, client, demo_request):
        demo_request["metadata"]["title"] = {"es": "Demostración"}
        response = client.post("/format", json=demo_request)
        assert response.status_code == 422
        assert "_default" in response.json()["detail"]


# ---------------------------------------------------------------------------
# Results board
# ---------------------------------------------------------------------------


class TestResults:
    def test_result_served_as_html(self, client, demo_request):
        client.post("/format", json=demo_request)
        response = client.get("/results/3")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'sentenceId="3"' in response.text
        assert response.text.count("<pre>") == 6

    def test_unknown_sentence_returns_404(self, client):
        response = client.get("/results/404")
        assert response.status_code == 404

    def test_close_discards_results(self, client, demo_request):
        client.post("/format", json=demo_request)
        response = client.delete("/results")
        assert response.status_code == 204
        assert client.get("/results/3").status_code == 404


class TestBoardRaces:
    def test_close_between_format_and_display(self, client, demo_request, monkeypatch):
        def blocks_then_close(result, latex):
            result_board.reset()
            return build_display_blocks(result, latex)

        monkeypatch.setattr(app_module, "build_display_blocks", blocks_then_close)
        response = client.post("/format", json=demo_request)

        assert response.status_code == 200
        assert client.get("/results/3").text.count("<pre>") == 6

    def test_interleaved_writer_is_replaced_not_mixed(self, client, demo_request, monkeypatch):
        def blocks_after_other_writer(result, latex):
            result_board.publish("3", ["other request"] * 6)
            return build_display_blocks(result, latex)

        monkeypatch.setattr(app_module, "build_display_blocks", blocks_after_other_writer)
        response = client.post("/format", json=demo_request)

        assert result_board.find_container("3").blocks == response.json()["blocks"]
        assert "other request" not in client.get("/results/3").text


# ---------------------------------------------------------------------------
# Formats and health
# ---------------------------------------------------------------------------


class TestInfo:
    def test_list_formats(self, client):
        response = client.get("/formats")
        assert response.status_code == 200
        formats = {f["key"]: f for f in response.json()}
        assert formats["gb4e"]["suffix"] == "-gb4e.tex"
        assert formats["plain_text"]["name"] == "Plain Text"

    def test_422_documents_string_and_list_detail(self, client):
        schema = client.get("/openapi.json").json()
        content = schema["paths"]["/format"]["post"]["responses"]["422"]["content"]
        ref = content["application/json"]["schema"]["$ref"]
        assert ref.endswith("/UnprocessableResponse")
        detail = schema["components"]["schemas"]["UnprocessableResponse"]["properties"]["detail"]
        assert {"type": "string"} in detail["anyOf"]

    def test_schema_validation_422_has_list_detail(self, client, demo_request):
        del demo_request["tierMap"]
        response = client.post("/format", json=demo_request)
        assert isinstance(response.json()["detail"], list)

    def test_health(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "ok", "version": "0.1.0"}
