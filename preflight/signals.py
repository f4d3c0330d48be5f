"""
Success signals for detected fixes.

The upstream reports success inconsistently: sometimes as a structured flag in
the results, sometimes as a numeric action status, sometimes only as text
buried in the serialized validations. Each signal is a named predicate; a
detector declares the ordered tuple of signals it trusts and succeeds when
any of them holds.
"""
from typing import Callable, Sequence

from preflight.types import ActionContext, is_int_equal

Signal = Callable[[ActionContext], bool]

COMPLETED_STATUS = 3
SUCCESS_MARKER = '"Success":true'
COMPLETED_MARKER = '"Status":"completed"'


def results_success_flag(ctx: ActionContext) -> bool:
    """results.Success is exactly true."""
    return bool(ctx.results) and ctx.results.get("Success") is True


def status_completed(ctx: ActionContext) -> bool:
    """Native action status code 3 (completed)."""
    return is_int_equal(ctx.status, COMPLETED_STATUS)


def text_success_marker(ctx: ActionContext) -> bool:
    return SUCCESS_MARKER in ctx.validations_text


def text_completed_marker(ctx: ActionContext) -> bool:
    return COMPLETED_MARKER in ctx.validations_text


def always(ctx: ActionContext) -> bool:
    """Unconditional success: the evidence that triggered the rule is itself the proof."""
    return True


TEXT_MARKERS: Sequence[Signal] = (text_success_marker, text_completed_marker)


def signals_met(signals: Sequence[Signal], ctx: ActionContext) -> bool:
    """Evaluate signals in declared precedence; True on the first one that holds."""
    return any(signal(ctx) for signal in signals)
