"""
Severity classification and issue tagging.

Tagging rules are a plain ordered catalog: adding a category only requires
a new TAG_RULES entry, not new branching logic. The first matching rule
wins, so order matters.
"""
from typing import Any, Optional, Sequence, Tuple

from common.json_coercion import to_number
from preflight.models import IssueTag, Severity

# Ordered (tag, keywords) pairs, matched case-insensitively as substrings.
# Keywords cover the upstream's English messages plus French wording ("police").
TAG_RULES: Sequence[Tuple[IssueTag, Tuple[str, ...]]] = (
    (IssueTag.IMAGE_RESOLUTION, ("image resolution",)),
    (IssueTag.RICH_BLACK, ("rich black",)),
    (IssueTag.BLEED, ("bleed",)),
    (IssueTag.PASSWORD, ("password",)),
    (IssueTag.FORM_FIELD, ("form field",)),
    (IssueTag.FONTS, ("font", "fonts", "police")),
)

ERROR_LEVEL = 2
WARNING_LEVEL = 1


def classify_severity(level: Any) -> Severity:
    """
    Map a raw validation level to a severity.

    Args:
        level: Raw level (number or numeric string)

    Returns:
        ERROR for level >= 2, WARNING for level == 1, INFO otherwise
    """
    number = to_number(level)
    if number is None:
        return Severity.INFO
    if number >= ERROR_LEVEL:
        return Severity.ERROR
    if number == WARNING_LEVEL:
        return Severity.WARNING
    return Severity.INFO


def tag_message(message: Any) -> Optional[IssueTag]:
    """Return the first tag whose keywords appear in the message, or None."""
    if not isinstance(message, str) or not message:
        return None

    lowered = message.lower()
    for tag, keywords in TAG_RULES:
        if any(keyword in lowered for keyword in keywords):
            return tag
    return None
