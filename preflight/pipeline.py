from typing import Any, Dict, Iterator, List, Optional, Tuple
import logging

from common.json_coercion import as_dict, dumps_compact, parse_maybe_json
from preflight.fix_detectors.factory import DetectorFactory
from preflight.fixes import detect_fixes
from preflight.format_reconciler import reconcile_format
from preflight.meta import extract_meta
from preflight.models import IssueRecord, Report, ReportStats, Severity
from preflight.traversal import iter_actions
from preflight.types import IssueBatch
from preflight.validations import GLOBAL_SOURCE, extract_validations

logger = logging.getLogger(__name__)


def _decode_raw_log(raw_log: Any) -> Tuple[Any, str]:
    """
    Decode the raw log and keep a text rendition for the file name fallback.

    Returns:
        (structured log or None, raw text)
    """
    if isinstance(raw_log, str):
        logs = parse_maybe_json(raw_log)
        # Double-encoded log: a JSON string whose content is itself JSON
        if isinstance(logs, str):
            return parse_maybe_json(logs), logs
        return logs, raw_log
    return raw_log, dumps_compact(raw_log if raw_log is not None else {})


def iter_issue_batches(result: Dict[str, Any]) -> Iterator[IssueBatch]:
    """Global validations first, then one batch per action in traversal order."""
    global_validations = as_dict(result.get("results")).get("validations")
    if global_validations:
        yield IssueBatch(
            source=GLOBAL_SOURCE,
            issues=extract_validations(global_validations, GLOBAL_SOURCE),
        )

    for ctx in iter_actions(result):
        source = ctx.source_label
        yield IssueBatch(source=source, issues=extract_validations(ctx.raw_validations, source))


def partition_by_severity(issues: List[IssueRecord]) -> Dict[Severity, List[IssueRecord]]:
    partitions: Dict[Severity, List[IssueRecord]] = {severity: [] for severity in Severity}
    for issue in issues:
        partitions[issue.severity].append(issue)
    return partitions


class ReportPipeline:
    """Turns one raw prepress log snapshot into a structured report."""

    def __init__(self, detector_factory: Optional[DetectorFactory] = None):
        """Initialize the pipeline with its fix detector registry."""
        self.detector_factory = detector_factory or DetectorFactory()

    def run(self, raw_log: Any) -> Report:
        """
        Build the report for a raw log.

        Never raises for malformed input: unexpected shapes degrade to empty
        defaults, and a log without a `result` object gives the empty report.

        Args:
            raw_log: JSON string or already-decoded log

        Returns:
            Fully populated Report
        """
        logs, raw_text = _decode_raw_log(raw_log)

        result = logs.get("result") if isinstance(logs, dict) else None
        if not isinstance(result, dict):
            logger.info("Log has no result object, returning empty report")
            return Report.empty()

        meta = extract_meta(result, raw_text)

        issues: List[IssueRecord] = []
        for batch in iter_issue_batches(result):
            issues.extend(batch.issues)
        partitions = partition_by_severity(issues)

        fixes = detect_fixes(result, self.detector_factory)
        format_record = reconcile_format(meta, fixes)

        errors = partitions[Severity.ERROR]
        warnings = partitions[Severity.WARNING]
        infos = partitions[Severity.INFO]

        logger.info(
            f"Report built: {len(errors)} error(s), {len(warnings)} warning(s), "
            f"{len(infos)} info(s), {len(fixes)} fix(es)"
        )

        return Report(
            meta=meta,
            errors=errors,
            warnings=warnings,
            infos=infos,
            fixes=fixes,
            format=format_record,
            stats=ReportStats(
                error_count=len(errors),
                warning_count=len(warnings),
                info_count=len(infos),
                fixes_count=len(fixes),
            ),
        )


def parse_prepress_log(raw_log: Any) -> Report:
    """Entry point: raw log in, structured report out."""
    return ReportPipeline().run(raw_log)
