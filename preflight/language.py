from typing import Optional

SUPPORTED_LANGUAGES = ("fr", "en", "es", "nl", "de")
DEFAULT_LANGUAGE = "fr"


def resolve_language(explicit: Optional[str] = None, accept_language: Optional[str] = None) -> str:
    """
    Pick the response language.
    
    An explicit value wins even when unsupported (it then falls back to the
    default); the Accept-Language header is only consulted when no explicit
    value was given.
    
    Args:
        explicit: Language requested by the caller (e.g. "EN")
        accept_language: Raw Accept-Language header
        
    Returns:
        One of SUPPORTED_LANGUAGES
    """
    requested = (explicit or "").strip().lower()
    if requested:
        return requested if requested in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE
    
    header = (accept_language or "").strip().lower()
    for code in SUPPORTED_LANGUAGES:
        if header.startswith(code):
            return code
    return DEFAULT_LANGUAGE
