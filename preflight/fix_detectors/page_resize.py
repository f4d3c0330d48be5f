#!/usr/bin/env python3
"""
Page resize detector
Recognises actions whose results describe original and new page boxes
"""
from typing import Any, Dict

from common.json_coercion import as_list, format_number
from preflight.fix_catalog import get_label
from preflight.models import FixCode, FixRecord
from preflight.signals import results_success_flag
from preflight.types import ActionContext
from .base import BaseFixDetector


def has_box_pair(page: Any) -> bool:
    """A page entry carries both an original and a new trim/media box."""
    if not isinstance(page, dict):
        return False
    has_original = bool(page.get("OriginalTrimBox") or page.get("OriginalMediaBox"))
    has_new = bool(page.get("NewTrimBox") or page.get("NewMediaBox"))
    return has_original and has_new


class PageResizeDetector(BaseFixDetector):
    """
    pageResize: results.Pages[0] has original and new box descriptors.
    
    Success is results.Success === true, with no fallback signal.
    """
    
    code = FixCode.PAGE_RESIZE
    success_signals = (results_success_flag,)
    
    def matches(self, ctx: ActionContext) -> bool:
        if not ctx.results:
            return False
        pages = as_list(ctx.results.get("Pages"))
        return bool(pages) and has_box_pair(pages[0])
    
    def build(self, ctx: ActionContext) -> FixRecord:
        results: Dict[str, Any] = ctx.results
        new_width = results.get("NewWidth")
        new_height = results.get("NewHeight")
        
        label = get_label(
            self.code,
            width=format_number(new_width) if new_width is not None else None,
            height=format_number(new_height) if new_height is not None else None,
        )
        
        return FixRecord(
            code=self.code,
            label=label,
            success=self.is_success(ctx),
            raw=ctx.snapshot(include_validations=False),
        )
