#!/usr/bin/env python3
"""
HTTP tests for the Prepress Report API.
"""
import json

import pytest
from fastapi.testclient import TestClient

import main
from common.config_store import PromptConfigStore
from test_pipeline import sample_log


client = TestClient(main.app)


@pytest.fixture
def prompt_config(tmp_path, monkeypatch):
    config_file = tmp_path / "prompt-config.json"
    config_file.write_text(json.dumps({
        "helpBaseUrl": "https://help.printer.test",
        "ctaText": "Questions? Reply to this message.",
        "sections": {"fixesTitle": "=== FIXED FOR YOU ==="},
    }), encoding="utf-8")
    store = PromptConfigStore(config_file)
    monkeypatch.setattr(main, "prompt_config", store)
    return store


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_report():
    response = client.post("/report", json=sample_log())
    assert response.status_code == 200

    body = response.json()
    assert body["meta"]["fileName"] == "brochure.pdf"
    assert body["stats"] == {"errorCount": 1, "warningCount": 2, "infoCount": 2, "fixesCount": 3}
    assert [fix["code"] for fix in body["fixes"]] == ["pageResize", "richBlackFix", "bleedAdded"]
    assert body["format"]["autoResizeDone"] is True


def test_report_from_json_string():
    structured = client.post("/report", json=sample_log()).json()
    as_string = client.post("/report", json=json.dumps(sample_log())).json()
    assert as_string == structured


def test_report_for_log_without_result():
    response = client.post("/report", json={"unexpected": True})
    assert response.status_code == 200
    body = response.json()
    assert body["errors"] == [] and body["fixes"] == []
    assert body["stats"]["errorCount"] == 0


def test_report_pipeline_failure_is_500(monkeypatch):
    def boom(raw_log):
        raise RuntimeError("boom")

    monkeypatch.setattr(main.report_pipeline, "run", boom)
    response = client.post("/report", json=sample_log())
    assert response.status_code == 500
    assert response.json()["detail"] == "Unable to build report"


def test_summary_with_explicit_language(prompt_config):
    response = client.post("/report/summary", params={"lang": "en"}, json=sample_log())
    assert response.status_code == 200

    body = response.json()
    assert body["language"] == "en"
    assert body["summary"].startswith("File: brochure.pdf\n")
    assert "=== FIXED FOR YOU ===" in body["summary"]
    assert body["summary"].endswith("Questions? Reply to this message.\n")
    assert body["stats"]["fixesCount"] == 3


def test_summary_language_from_header(prompt_config):
    response = client.post(
        "/report/summary",
        headers={"Accept-Language": "es-ES,es;q=0.9"},
        json=sample_log(),
    )
    assert response.json()["language"] == "es"
    assert "Archivo: brochure.pdf" in response.json()["summary"]


def test_summary_defaults_to_french(prompt_config):
    response = client.post("/report/summary", params={"lang": "it"}, json=sample_log())
    assert response.json()["language"] == "fr"
    assert "Fichier : brochure.pdf" in response.json()["summary"]


def test_help_links(prompt_config):
    response = client.post("/report/help-links", params={"lang": "en"}, json=sample_log())
    assert response.status_code == 200

    body = response.json()
    assert body["language"] == "en"
    codes = [link["code"] for link in body["helpLinks"]]
    assert codes[:2] == ["imageResolution", "richBlack"]
    assert "bleed" in codes
    assert all(link["url"].startswith("https://help.printer.test/") for link in body["helpLinks"])
