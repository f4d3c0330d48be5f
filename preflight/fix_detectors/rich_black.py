from preflight.fix_catalog import get_label
from preflight.models import FixCode, FixRecord
from preflight.signals import TEXT_MARKERS, status_completed
from preflight.types import ActionContext
from .base import BaseFixDetector, action_name_matches


class RichBlackDetector(BaseFixDetector):
    """
    richBlackFix: rich black normalization inside a fix workflow.
    
    The upstream rarely reports an explicit success flag for this action,
    so the native status code comes first and the text markers are the fallback.
    """
    
    code = FixCode.RICH_BLACK_FIX
    fix_workflow_only = True
    success_signals = (status_completed,) + tuple(TEXT_MARKERS)
    
    def matches(self, ctx: ActionContext) -> bool:
        return action_name_matches(ctx, "RichBlack", "richblack")
    
    def build(self, ctx: ActionContext) -> FixRecord:
        return FixRecord(
            code=self.code,
            label=get_label(self.code),
            success=self.is_success(ctx),
            raw=ctx.snapshot(),
        )
