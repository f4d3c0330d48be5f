#!/usr/bin/env python3
"""
Tests for format reconciliation: requested vs. achieved trim size.
"""
import pytest

from preflight.format_reconciler import proportion_gap_percent, reconcile_format
from preflight.models import Dimensions, FixCode, FixRecord, FormatRecord, MetaRecord


def resize_fix(**results):
    return FixRecord(
        code=FixCode.PAGE_RESIZE,
        label="Pages automatically resized.",
        success=results.get("Success") is True,
        raw={"workflowName": "Fix", "actionName": "Resize", "results": results},
    )


def test_no_evidence_keeps_safe_defaults():
    meta = MetaRecord(trim_width_mm=200, trim_height_mm=280)
    record = reconcile_format(meta, [])

    assert record.requested == Dimensions(width_mm=200, height_mm=280)
    assert record.final is None
    assert record.auto_resize_done is False
    assert record.auto_resize_blocked is False
    assert record.would_exceed_max_skew is False
    assert record.proportion_gap_percent is None


def test_other_fixes_are_not_evidence():
    bleed = FixRecord(code=FixCode.BLEED_ADDED, label="Bleed added automatically.", success=True,
                      pages=[1], raw={"results": {"NewWidth": 1, "NewHeight": 1, "Success": False}})
    record = reconcile_format(MetaRecord(), [bleed])
    assert record == FormatRecord()


def test_resize_without_results_is_not_evidence():
    fix = FixRecord(code=FixCode.PAGE_RESIZE, label="x", success=False, raw={"results": None})
    record = reconcile_format(MetaRecord(), [fix])
    assert record.auto_resize_blocked is False


def test_successful_resize_with_gap():
    meta = MetaRecord(trim_width_mm=200, trim_height_mm=280)
    record = reconcile_format(meta, [resize_fix(Success=True, NewWidth=210, NewHeight=297)])

    assert record.final == Dimensions(width_mm=210, height_mm=297)
    assert record.auto_resize_done is True
    assert record.auto_resize_blocked is False
    expected = max(10 / 200, 17 / 280) * 100
    assert record.proportion_gap_percent == pytest.approx(expected)
    assert record.proportion_gap_percent == pytest.approx(6.07, abs=0.01)


def test_failed_resize_is_blocked():
    record = reconcile_format(MetaRecord(), [resize_fix(Success=False, NewWidth=210, NewHeight=297)])
    assert record.auto_resize_done is False
    assert record.auto_resize_blocked is True
    assert record.requested is None
    assert record.proportion_gap_percent is None


def test_skew_blocks_even_when_successful():
    record = reconcile_format(MetaRecord(), [resize_fix(Success=True, WouldExceedMaxSkew=True)])
    assert record.auto_resize_done is True
    assert record.would_exceed_max_skew is True
    assert record.auto_resize_blocked is True
    assert record.final is None


def test_first_resize_fix_is_used():
    fixes = [
        resize_fix(Success=True, NewWidth=210, NewHeight=297),
        resize_fix(Success=False, NewWidth=100, NewHeight=100),
    ]
    record = reconcile_format(MetaRecord(), fixes)
    assert record.final == Dimensions(width_mm=210, height_mm=297)
    assert record.auto_resize_blocked is False


def test_partial_requested_size_is_ignored():
    meta = MetaRecord(trim_width_mm=200)
    record = reconcile_format(meta, [resize_fix(Success=True, NewWidth=210, NewHeight=297)])
    assert record.requested is None
    assert record.proportion_gap_percent is None


def test_non_numeric_final_size_counts_as_absent():
    meta = MetaRecord(trim_width_mm=200, trim_height_mm=280)
    record = reconcile_format(meta, [resize_fix(Success=True, NewWidth="wide", NewHeight=297)])
    assert record.final is None
    assert record.proportion_gap_percent is None


def test_gap_uses_the_binding_axis():
    requested = Dimensions(width_mm=100, height_mm=100)
    assert proportion_gap_percent(requested, Dimensions(width_mm=90, height_mm=103)) == pytest.approx(10)
    assert proportion_gap_percent(requested, Dimensions(width_mm=101, height_mm=120)) == pytest.approx(20)
    assert proportion_gap_percent(requested, requested) == 0
