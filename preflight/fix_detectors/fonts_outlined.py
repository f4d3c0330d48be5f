from preflight.fix_catalog import get_label
from preflight.models import FixCode, FixRecord
from preflight.signals import results_success_flag, status_completed, text_success_marker
from preflight.types import ActionContext
from .base import BaseFixDetector, action_name_matches


class FontsOutlinedDetector(BaseFixDetector):
    """fontsOutlined: fonts converted to outlines inside a fix workflow."""
    
    code = FixCode.FONTS_OUTLINED
    fix_workflow_only = True
    # No "Status":"completed" fallback for this action
    success_signals = (results_success_flag, status_completed, text_success_marker)
    
    def matches(self, ctx: ActionContext) -> bool:
        return action_name_matches(ctx, "FontsOutline", "fontoutline")
    
    def build(self, ctx: ActionContext) -> FixRecord:
        return FixRecord(
            code=self.code,
            label=get_label(self.code),
            success=self.is_success(ctx),
            raw=ctx.snapshot(),
        )
