from preflight.fix_catalog import get_label
from preflight.models import FixCode, FixRecord
from preflight.signals import always
from preflight.types import ActionContext
from .base import BaseFixDetector

# Fixup set name the upstream writes into validations after an ICC/CMYK conversion
ATOMYX_FIXUPS_MARKER = "Atomyx_fixups"


class ColorConversionDetector(BaseFixDetector):
    """colorConversion: Atomyx fixups mentioned in a fix workflow's validations."""
    
    code = FixCode.COLOR_CONVERSION
    fix_workflow_only = True
    success_signals = (always,)
    
    def matches(self, ctx: ActionContext) -> bool:
        return ATOMYX_FIXUPS_MARKER in ctx.validations_text
    
    def build(self, ctx: ActionContext) -> FixRecord:
        return FixRecord(
            code=self.code,
            label=get_label(self.code),
            success=self.is_success(ctx),
            raw=ctx.snapshot(),
        )
