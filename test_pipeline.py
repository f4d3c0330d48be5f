#!/usr/bin/env python3
"""
End-to-end tests for report assembly.
"""
import json

import pytest

from preflight.models import FixCode, IssueTag, Report, Severity
from preflight.pipeline import ReportPipeline, parse_prepress_log


def sample_log():
    """A realistic log: a preflight workflow with findings and a fix workflow."""
    return {
        "result": {
            "pdfInfo": {"fileName": "brochure.pdf", "pageCount": 4},
            "runtimeVariables": [
                {"key": "Largeur", "value": "200"},
                {"key": "Hauteur", "value": "280"},
                {"key": "Impression", "value": "Quadri recto/verso"},
            ],
            "results": {
                "validations": json.dumps([
                    {"Message": "Document is password protected", "Level": 1},
                ])
            },
            "workflowLogs": [
                {
                    "name": "Preflight",
                    "type": 1,
                    "steps": [{
                        "actions": [
                            {
                                "name": "CheckImages",
                                "validations": json.dumps([
                                    {"Message": "Image resolution too low", "Level": 2},
                                    {"Message": "Rich black detected", "Level": 1},
                                ]),
                            },
                            {
                                "name": "CheckFonts",
                                "validations": [{"message": "Fonts embedded", "level": 0}],
                            },
                        ]
                    }],
                },
                {
                    "name": "Fix",
                    "type": 4,
                    "steps": [{
                        "actions": [
                            {
                                "name": "Resize",
                                "results": json.dumps({
                                    "Pages": [{"OriginalTrimBox": {"W": 200}, "NewTrimBox": {"W": 210}}],
                                    "Success": True,
                                    "NewWidth": 210,
                                    "NewHeight": 297,
                                }),
                            },
                            {"name": "RichBlack", "status": 3},
                            {
                                "name": "AddBleed",
                                "args": {"BleedSize": 3},
                                "results": {"BleedPageInfo": [{"Page": 1, "Success": True, "BleedAdded": True}]},
                                "validations": [{"Message": "Bleed added", "Level": 0}],
                            },
                        ]
                    }],
                },
            ],
            "originalLink": "https://files/original/brochure.pdf",
            "status": "Completed",
        }
    }


def test_full_report():
    report = parse_prepress_log(sample_log())

    assert report.meta.file_name == "brochure.pdf"
    assert report.meta.page_count == 4
    assert report.meta.impression == "Quadri recto/verso"

    assert [e.message for e in report.errors] == ["Image resolution too low"]
    assert report.errors[0].tag == IssueTag.IMAGE_RESOLUTION
    assert report.errors[0].source == "Preflight › CheckImages"

    # Global validations come first
    assert [w.message for w in report.warnings] == ["Document is password protected", "Rich black detected"]
    assert report.warnings[0].source == "Global"
    assert report.warnings[0].tag == IssueTag.PASSWORD

    assert [i.message for i in report.infos] == ["Fonts embedded", "Bleed added"]
    assert report.infos[1].source == "Fix › AddBleed"

    assert [f.code for f in report.fixes] == [FixCode.PAGE_RESIZE, FixCode.RICH_BLACK_FIX, FixCode.BLEED_ADDED]

    assert report.format.final.width_mm == 210
    assert report.format.auto_resize_done is True
    assert report.format.auto_resize_blocked is False
    assert report.format.proportion_gap_percent == pytest.approx(6.07, abs=0.01)

    assert report.stats.error_count == 1
    assert report.stats.warning_count == 2
    assert report.stats.info_count == 2
    assert report.stats.fixes_count == 3


def test_stats_match_sequence_lengths():
    for log in (sample_log(), {"result": {}}, {}, None, "garbage"):
        report = parse_prepress_log(log)
        assert report.stats.error_count == len(report.errors)
        assert report.stats.warning_count == len(report.warnings)
        assert report.stats.info_count == len(report.infos)
        assert report.stats.fixes_count == len(report.fixes)


def test_minimal_log():
    report = parse_prepress_log({"result": {"workflowLogs": []}})

    assert report.errors == [] and report.warnings == [] and report.infos == [] and report.fixes == []
    assert report.stats.model_dump() == {"error_count": 0, "warning_count": 0, "info_count": 0, "fixes_count": 0}
    assert report.format.requested is None
    assert report.format.final is None
    assert report.format.auto_resize_blocked is False
    assert report.format.proportion_gap_percent is None


def test_missing_result_short_circuits():
    for log in ({}, {"result": None}, {"result": "text"}, {"other": {}}, [], None, "", "{not json"):
        print(f'  Log {log!r}')
        assert parse_prepress_log(log) == Report.empty()


def test_no_result_skips_raw_text_fallback():
    report = parse_prepress_log({"FileName": "hidden.pdf"})
    assert report.meta.file_name is None


def test_string_and_double_encoded_input():
    structured = parse_prepress_log(sample_log())
    as_string = parse_prepress_log(json.dumps(sample_log()))
    double = parse_prepress_log(json.dumps(json.dumps(sample_log())))

    assert as_string == structured
    assert double == structured


def test_raw_text_file_name_fallback_in_pipeline():
    log = {
        "result": {
            "workflowLogs": [{"name": "Preflight", "steps": [{"actions": [
                {"name": "Inspect", "results": {"FileInfo": {"FileName": "menu.ai"}}},
            ]}]}]
        }
    }
    assert parse_prepress_log(log).meta.file_name == "menu.ai"
    assert parse_prepress_log(json.dumps(log)).meta.file_name == "menu.ai"


def test_action_validation_scenario():
    log = {"result": {"workflowLogs": [{"name": "Preflight", "steps": [{"actions": [
        {"name": "Images", "validations": '[{"Message":"Image resolution too low","Level":2}]'},
    ]}]}]}}
    report = parse_prepress_log(log)

    assert len(report.errors) == 1
    assert report.errors[0].severity == Severity.ERROR
    assert report.errors[0].tag == IssueTag.IMAGE_RESOLUTION


def test_default_source_labels():
    log = {"result": {"workflowLogs": [{"steps": [{"actions": [{"validations": [{"Message": "m", "Level": 2}]}]}]}]}}
    assert parse_prepress_log(log).errors[0].source == "Workflow › Action"


def test_rich_black_scenario_without_results():
    log = {"result": {"workflowLogs": [{"name": "Fix", "steps": [{"actions": [{"name": "RichBlack", "status": 3}]}]}]}}
    report = parse_prepress_log(log)

    assert len(report.fixes) == 1
    assert report.fixes[0].code == FixCode.RICH_BLACK_FIX
    assert report.fixes[0].success is True


def test_format_safety_without_resize_evidence():
    log = sample_log()
    log["result"]["workflowLogs"][1]["steps"][0]["actions"].pop(0)
    report = parse_prepress_log(log)

    assert report.format.requested is not None
    assert report.format.auto_resize_blocked is False
    assert report.format.proportion_gap_percent is None


def test_deterministic_output():
    pipeline = ReportPipeline()
    first = pipeline.run(sample_log()).to_json_dict()
    second = pipeline.run(sample_log()).to_json_dict()
    assert first == second
    assert json.dumps(first) == json.dumps(second)


def test_input_is_not_mutated():
    log = sample_log()
    snapshot = json.dumps(log, sort_keys=True)
    parse_prepress_log(log)
    assert json.dumps(log, sort_keys=True) == snapshot


def test_json_output_shape():
    data = parse_prepress_log(sample_log()).to_json_dict()

    assert set(data) == {"meta", "errors", "warnings", "infos", "fixes", "format", "stats"}
    assert set(data["meta"]) == {
        "fileName", "pageCount", "trimWidthMm", "trimHeightMm", "allPagesSameDimension",
        "impression", "originalLink", "finalLink", "status",
    }
    assert data["format"]["requested"] == {"widthMm": 200, "heightMm": 280}
    assert data["format"]["final"] == {"widthMm": 210, "heightMm": 297}
    assert set(data["stats"]) == {"errorCount", "warningCount", "infoCount", "fixesCount"}
    assert data["fixes"][0]["code"] == "pageResize"
    assert data["fixes"][2]["pages"] == [1]
    assert data["errors"][0]["severity"] == "error"


def test_empty_report_is_fully_populated():
    data = Report.empty().to_json_dict()
    assert data["meta"]["fileName"] is None
    assert data["format"] == {
        "requested": None,
        "final": None,
        "autoResizeDone": False,
        "autoResizeBlocked": False,
        "wouldExceedMaxSkew": False,
        "proportionGapPercent": None,
    }
    assert data["stats"]["fixesCount"] == 0


DEEP_JSON = "[" * 100000 + "]" * 100000


def test_deeply_nested_log_gives_empty_report():
    assert parse_prepress_log(DEEP_JSON) == Report.empty()


def test_deeply_nested_action_payloads_are_ignored():
    log = {"result": {"workflowLogs": [{"name": "Fix", "steps": [{"actions": [
        {"name": "RichBlack", "status": 3, "validations": DEEP_JSON, "results": DEEP_JSON},
        {"name": "Check", "validations": [{"Message": "Rich black detected", "Level": 1}]},
    ]}]}]}}
    report = parse_prepress_log(log)

    assert [w.message for w in report.warnings] == ["Rich black detected"]
    assert [f.code for f in report.fixes] == [FixCode.RICH_BLACK_FIX]
    assert report.fixes[0].success is True
