from typing import TypedDict, Optional, List, Dict, Any
from dataclasses import dataclass, field

FIX_WORKFLOW_NAME = "Fix"
FIX_WORKFLOW_TYPE = 4


class RawSnapshot(TypedDict, total=False):
    """Evidence retained on a FixRecord for downstream inspection."""
    workflowName: str
    actionName: str
    results: Optional[Dict[str, Any]]
    validations: str


@dataclass
class ActionContext:
    """One action of the workflow tree, with its payloads already coerced."""
    workflow_name: str
    workflow_type: Any
    action_name: str
    results: Optional[Dict[str, Any]]
    validations_text: str
    raw_validations: Any = None
    status: Any = None
    args: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_fix_workflow(self) -> bool:
        """True for workflows performing automated corrections (name "Fix" or type 4)."""
        if self.workflow_name == FIX_WORKFLOW_NAME:
            return True
        return is_int_equal(self.workflow_type, FIX_WORKFLOW_TYPE)

    @property
    def source_label(self) -> str:
        """Provenance label used on issue records."""
        return f"{self.workflow_name or 'Workflow'} › {self.action_name or 'Action'}"

    def snapshot(self, include_validations: bool = True) -> RawSnapshot:
        snapshot: RawSnapshot = {
            "workflowName": self.workflow_name,
            "actionName": self.action_name,
            "results": self.results,
        }
        if include_validations:
            snapshot["validations"] = self.validations_text
        return snapshot


def is_int_equal(value: Any, expected: int) -> bool:
    """Strict numeric equality (booleans and numeric strings do not count)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == expected


@dataclass
class IssueBatch:
    """Issue records produced for one source, in payload order."""
    source: str
    issues: List[Any] = field(default_factory=list)
