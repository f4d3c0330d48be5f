"""
Label catalog for detected fixes.

Labels are stable, human-readable sentences; the ones with a `{...}`
placeholder embed a measured value when the log provides it. Adding
wording for a fix only requires updating this catalog, not the detectors.
"""
from preflight.models import FixCode

FIX_CATALOG = {
    FixCode.PAGE_RESIZE: {
        "label": "Pages automatically resized.",
        "label_with_value": "Pages automatically resized to {width} x {height}.",
    },
    FixCode.BLEED_ADDED: {
        "label": "Bleed added automatically.",
        "label_with_value": "Bleed added automatically ({size} mm).",
    },
    FixCode.FLATTENING: {
        "label": "Transparencies flattened to secure printing.",
    },
    FixCode.RICH_BLACK_FIX: {
        "label": "Rich blacks normalized automatically.",
    },
    FixCode.FONTS_OUTLINED: {
        "label": "Fonts converted to outlines to secure printing.",
    },
    FixCode.COLOR_CONVERSION: {
        "label": "Automatic color conversion applied (standard CMYK and spot color handling).",
    },
}


def get_label(code: FixCode, **values) -> str:
    """
    Get the label for a fix, embedding measured values when all are known.
    
    Args:
        code: Fix code
        **values: Placeholder values (None means unknown)
        
    Returns:
        Label string
    """
    entry = FIX_CATALOG[code]
    template = entry.get("label_with_value")
    if template and values and all(v is not None for v in values.values()):
        return template.format(**values)
    return entry["label"]
