"""
Requested vs. achieved page format.

Only evidence already captured on a pageResize fix is used. Without such
evidence the record stays at its non-alarming defaults: a format problem is
never reported unless the log proves it.
"""
from typing import Any, Dict, List, Optional
import logging

from common.json_coercion import to_number
from preflight.models import Dimensions, FixCode, FixRecord, FormatRecord, MetaRecord

logger = logging.getLogger(__name__)


def _requested_dimensions(meta: MetaRecord) -> Optional[Dimensions]:
    if not meta.trim_width_mm or not meta.trim_height_mm:
        return None
    return Dimensions(width_mm=meta.trim_width_mm, height_mm=meta.trim_height_mm)


def find_resize_evidence(fixes: List[FixRecord]) -> Optional[Dict[str, Any]]:
    """Raw results of the first pageResize fix that carries them."""
    for fix in fixes:
        if fix.code != FixCode.PAGE_RESIZE:
            continue
        results = fix.raw.get("results") if fix.raw else None
        if results:
            return results
    return None


def proportion_gap_percent(requested: Dimensions, final: Dimensions) -> float:
    """
    Largest per-axis deviation of the final size from the requested one, in percent.
    
    Args:
        requested: Requested trim size (non-zero)
        final: Size reported after resize
        
    Returns:
        max(|final - requested| / requested * 100) over width and height
    """
    gap_width = abs(final.width_mm - requested.width_mm) / requested.width_mm * 100
    gap_height = abs(final.height_mm - requested.height_mm) / requested.height_mm * 100
    return max(gap_width, gap_height)


def reconcile_format(meta: MetaRecord, fixes: List[FixRecord]) -> FormatRecord:
    """
    Build the format record from meta and detected fixes.
    
    Args:
        meta: Extracted metadata (requested trim size)
        fixes: Detected fixes
        
    Returns:
        FormatRecord; derived fields stay at defaults without resize evidence
    """
    requested = _requested_dimensions(meta)
    
    results = find_resize_evidence(fixes)
    if results is None:
        return FormatRecord(requested=requested)
    
    final = None
    final_width = to_number(results.get("NewWidth"))
    final_height = to_number(results.get("NewHeight"))
    if final_width is not None and final_height is not None:
        final = Dimensions(width_mm=final_width, height_mm=final_height)
    
    success = results.get("Success") is True
    would_exceed = results.get("WouldExceedMaxSkew") is True
    
    gap = None
    if requested is not None and final is not None:
        gap = proportion_gap_percent(requested, final)
    
    logger.debug(
        f"Format reconciled: requested={requested}, final={final}, "
        f"success={success}, skew={would_exceed}, gap={gap}"
    )
    
    return FormatRecord(
        requested=requested,
        final=final,
        auto_resize_done=success,
        # Either a failed resize or an excessive skew blocks the automatic resize
        auto_resize_blocked=not success or would_exceed,
        would_exceed_max_skew=would_exceed,
        proportion_gap_percent=gap,
    )
