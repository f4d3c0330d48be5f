"""
Fix detection over the full workflow tree.

Every registered detector runs on every action (rules are non-exclusive),
then records are deduplicated on (code, label), first occurrence wins.
"""
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
import logging

from preflight.fix_detectors.factory import DetectorFactory
from preflight.models import FixRecord
from preflight.traversal import iter_actions
from preflight.types import ActionContext

logger = logging.getLogger(__name__)


def detect_action_fixes(ctx: ActionContext, factory: Optional[DetectorFactory] = None) -> List[FixRecord]:
    """Run every detector against one action, in rule order."""
    factory = factory or DetectorFactory()
    fixes = []
    for detector in factory.get_detectors():
        record = detector.detect(ctx)
        if record is not None:
            fixes.append(record)
    return fixes


def deduplicate_fixes(fixes: Iterable[FixRecord]) -> List[FixRecord]:
    """Keep the first record per (code, label), preserving first-seen order."""
    seen: Set[Tuple[str, str]] = set()
    deduplicated = []
    for fix in fixes:
        key = (fix.code.value, fix.label)
        if key in seen:
            continue
        seen.add(key)
        deduplicated.append(fix)
    return deduplicated


def detect_fixes(result: Dict[str, Any], factory: Optional[DetectorFactory] = None) -> List[FixRecord]:
    """
    Detect automatic corrections applied by the prepress workflows.
    
    Args:
        result: The `result` object of the raw log
        factory: Detector registry (defaults to all six patterns)
        
    Returns:
        Deduplicated fix records in traversal order
    """
    factory = factory or DetectorFactory()
    
    detected: List[FixRecord] = []
    for ctx in iter_actions(result):
        detected.extend(detect_action_fixes(ctx, factory))
    
    fixes = deduplicate_fixes(detected)
    if len(fixes) != len(detected):
        logger.debug(f"Fix deduplication: {len(detected)} → {len(fixes)}")
    return fixes
