#!/usr/bin/env python3
"""
Bleed detector
Recognises per-page bleed reports where bleed was actually added
"""
from typing import Any, List

from common.json_coercion import as_list, format_number
from preflight.fix_catalog import get_label
from preflight.models import FixCode, FixRecord
from preflight.signals import always
from preflight.types import ActionContext
from .base import BaseFixDetector


def bleed_pages(ctx: ActionContext) -> List[Any]:
    """Entries of results.BleedPageInfo where bleed was added successfully."""
    if not ctx.results:
        return []
    return [
        info for info in as_list(ctx.results.get("BleedPageInfo"))
        if isinstance(info, dict) and info.get("Success") and info.get("BleedAdded")
    ]


class BleedAddedDetector(BaseFixDetector):
    """bleedAdded: at least one page reports Success and BleedAdded."""
    
    code = FixCode.BLEED_ADDED
    success_signals = (always,)
    
    def matches(self, ctx: ActionContext) -> bool:
        return bool(bleed_pages(ctx))
    
    def build(self, ctx: ActionContext) -> FixRecord:
        pages = bleed_pages(ctx)
        
        # Requested size from the action arguments wins over the reported one
        bleed_size = ctx.args.get("BleedSize")
        if bleed_size is None:
            bleed_size = ctx.results.get("BleedSizeAdded")
        
        return FixRecord(
            code=self.code,
            label=get_label(self.code, size=format_number(bleed_size) if bleed_size else None),
            success=self.is_success(ctx),
            pages=[info.get("Page") for info in pages if info.get("Page") is not None],
            raw=ctx.snapshot(include_validations=False),
        )
