"""
Walk the workflow -> step -> action tree of a prepress log.

Every level defaults to an empty list when missing or malformed, so partial
trees are processed as far as they go.
"""
from typing import Any, Dict, Iterator
import logging

from common.json_coercion import as_dict, as_list, dumps_compact, parse_maybe_json
from preflight.types import ActionContext

logger = logging.getLogger(__name__)


def _name_of(node: Dict[str, Any]) -> str:
    name = node.get("name")
    if not name:
        return ""
    return name if isinstance(name, str) else str(name)


def validations_as_text(raw_validations: Any) -> str:
    """
    Flatten a validations payload into searchable text.

    Strings are used verbatim, lists are re-serialized compactly; any other
    shape gives an empty string.
    """
    if isinstance(raw_validations, str):
        return raw_validations
    if isinstance(raw_validations, list):
        return dumps_compact(raw_validations)
    return ""


def build_action_context(workflow: Dict[str, Any], action: Dict[str, Any]) -> ActionContext:
    """Prepare the coerced evidence of one action."""
    results = parse_maybe_json(action.get("results"))
    if not isinstance(results, dict):
        results = None

    raw_validations = action.get("validations")

    return ActionContext(
        workflow_name=_name_of(workflow),
        workflow_type=workflow.get("type"),
        action_name=_name_of(action),
        results=results,
        validations_text=validations_as_text(raw_validations),
        raw_validations=raw_validations,
        status=action.get("status"),
        args=as_dict(action.get("args")),
    )


def iter_actions(result: Dict[str, Any]) -> Iterator[ActionContext]:
    """
    Yield every action of the log in tree traversal order.

    Args:
        result: The `result` object of the raw log

    Yields:
        ActionContext per action
    """
    for workflow in as_list(result.get("workflowLogs")):
        if not isinstance(workflow, dict):
            logger.debug(f"Skipping malformed workflow node: {repr(workflow)[:200]}")
            continue

        for step in as_list(workflow.get("steps")):
            if not isinstance(step, dict):
                continue

            for action in as_list(step.get("actions")):
                if not isinstance(action, dict):
                    continue
                yield build_action_context(workflow, action)
