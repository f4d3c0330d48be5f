from preflight.fix_catalog import get_label
from preflight.models import FixCode, FixRecord
from preflight.signals import TEXT_MARKERS
from preflight.types import ActionContext
from .base import BaseFixDetector, action_name_matches


class FlatteningDetector(BaseFixDetector):
    """flattening: transparency flattening action inside a fix workflow."""
    
    code = FixCode.FLATTENING
    fix_workflow_only = True
    success_signals = tuple(TEXT_MARKERS)
    
    def matches(self, ctx: ActionContext) -> bool:
        return action_name_matches(ctx, "FlatteningTransparencies", "flatten")
    
    def build(self, ctx: ActionContext) -> FixRecord:
        return FixRecord(
            code=self.code,
            label=get_label(self.code),
            success=self.is_success(ctx),
            raw=ctx.snapshot(),
        )
