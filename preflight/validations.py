from typing import Any, List
import logging
import math

from common.json_coercion import parse_maybe_json, to_number
from common.terminology import PrepressTerminology
from preflight.models import IssueRecord
from preflight.tagging import classify_severity, tag_message

logger = logging.getLogger(__name__)

GLOBAL_SOURCE = "Global"


def _coerce_entries(raw_validations: Any) -> List[Any]:
    """Accept a list or a JSON-encoded list; any other shape yields no entries."""
    if isinstance(raw_validations, list):
        return raw_validations

    parsed = parse_maybe_json(raw_validations)
    if isinstance(parsed, list):
        return parsed

    if parsed is not None:
        logger.debug(f"Ignoring validations payload of type {type(parsed).__name__}")
    return []


def _is_blank_entry(entry: Any) -> bool:
    """Only null, false, zero and empty-string entries are skipped; empty objects and lists are kept."""
    if entry is None or entry is False or entry == "":
        return True
    if isinstance(entry, (int, float)) and not isinstance(entry, bool):
        return entry == 0 or math.isnan(entry)
    return False


def extract_validations(raw_validations: Any, source: str = "") -> List[IssueRecord]:
    """
    Normalize a raw "validations" payload into issue records.

    Upstream entries mix PascalCase and camelCase keys; PascalCase is tried first.

    Args:
        raw_validations: List, JSON string of a list, or anything else
        source: Provenance label ("Global", "Workflow › Action")

    Returns:
        Issue records in payload order, with severity and tag computed
    """
    issues: List[IssueRecord] = []

    for entry in _coerce_entries(raw_validations):
        if _is_blank_entry(entry):
            continue
        if not isinstance(entry, dict):
            logger.debug(f"Non-object validation entry from {source!r} kept as empty: {repr(entry)[:200]}")
            entry = {}

        message = PrepressTerminology.validation_field(entry, "message")
        if not isinstance(message, str):
            message = str(message)

        level = to_number(PrepressTerminology.validation_field(entry, "level"))
        if level is None:
            level = 0

        issues.append(IssueRecord(
            message=message,
            level=level,
            severity=classify_severity(level),
            field_name=PrepressTerminology.validation_field(entry, "field_name"),
            type=PrepressTerminology.validation_field(entry, "type"),
            data=PrepressTerminology.validation_field(entry, "data"),
            source=source,
            tag=tag_message(message),
        ))

    return issues
