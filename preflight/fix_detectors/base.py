from abc import ABC, abstractmethod
from typing import Optional, Sequence

from preflight.models import FixCode, FixRecord
from preflight.signals import Signal, signals_met
from preflight.types import ActionContext


class BaseFixDetector(ABC):
    """Abstract base class for fix pattern detectors."""
    
    code: FixCode
    # Success signals in precedence order
    success_signals: Sequence[Signal] = ()
    # Rule only applies inside fix-flavored workflows
    fix_workflow_only: bool = False
    
    def detect(self, ctx: ActionContext) -> Optional[FixRecord]:
        """
        Inspect one action and return a fix record when the pattern matches.
        
        Args:
            ctx: Coerced evidence of the action
            
        Returns:
            FixRecord or None
        """
        if self.fix_workflow_only and not ctx.is_fix_workflow:
            return None
        if not self.matches(ctx):
            return None
        return self.build(ctx)
    
    @abstractmethod
    def matches(self, ctx: ActionContext) -> bool:
        """Whether the action carries evidence of this fix."""
        pass
    
    @abstractmethod
    def build(self, ctx: ActionContext) -> FixRecord:
        """Build the fix record for a matching action."""
        pass
    
    def is_success(self, ctx: ActionContext) -> bool:
        return signals_met(self.success_signals, ctx)


def action_name_matches(ctx: ActionContext, exact: str, fragment: str) -> bool:
    """Exact action name, or case-insensitive fragment of it."""
    name = ctx.action_name
    return name == exact or fragment in name.lower()
