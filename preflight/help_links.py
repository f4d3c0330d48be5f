"""
Help-link resolution.

Maps detected issues and fixes to help articles, one link per topic, in the
order topics are first encountered in the report (errors, warnings, infos,
then fixes).
"""
from typing import Dict, Iterable, List, Optional, Set
import logging

from preflight.models import FixCode, FixRecord, HelpLink, IssueRecord, IssueTag, Report

logger = logging.getLogger(__name__)

DEFAULT_HELP_BASE_URL = "https://help.example.com"
FALLBACK_LANGUAGE = "fr"

# code -> language -> {path, label}
HELP_LINKS: Dict[str, Dict[str, Dict[str, str]]] = {
    "imageResolution": {
        "fr": {"path": "/resolution-image", "label": "En savoir plus sur la résolution d'image"},
        "es": {"path": "/es/resolucion-imagen", "label": "Más información sobre la resolución de imagen"},
        "en": {"path": "/en/image-resolution", "label": "More about image resolution"},
    },
    "richBlack": {
        "fr": {"path": "/noir-enrichi", "label": "Comprendre le noir enrichi (rich black)"},
        "es": {"path": "/es/negro-enriquecido", "label": "Más información sobre negro enriquecido (rich black)"},
        "en": {"path": "/en/rich-black", "label": "More about rich black"},
    },
    "fontsNotEmbedded": {
        "fr": {"path": "/polices-pdf", "label": "Polices non incorporées dans un PDF"},
        "es": {"path": "/es/fuentes-pdf", "label": "Fuentes no incrustadas en un PDF"},
        "en": {"path": "/en/fonts-pdf", "label": "Non-embedded fonts in a PDF"},
    },
    "distortion": {
        "fr": {"path": "/deformation", "label": "Déformations, mise à l'échelle et proportions"},
        "es": {"path": "/es/deformacion", "label": "Deformación, escala y proporciones"},
        "en": {"path": "/en/distortion", "label": "Distortion, scaling and proportions"},
    },
    "bleed": {
        "fr": {"path": "/fond-perdu", "label": "Qu'est-ce que le fond perdu ?"},
        "es": {"path": "/es/sangrado", "label": "¿Qué es el sangrado (bleed)?"},
        "en": {"path": "/en/bleed", "label": "What is bleed in print?"},
    },
}


def _topics_for_issue(issue: IssueRecord) -> List[str]:
    tag = issue.tag.value if issue.tag else ""
    message = (issue.message or "").lower()
    
    topics = []
    if tag == IssueTag.IMAGE_RESOLUTION.value or "dpi" in message:
        topics.append("imageResolution")
    if tag == IssueTag.RICH_BLACK.value or "rich black" in message:
        topics.append("richBlack")
    if "font" in message or "not embedded" in message:
        topics.append("fontsNotEmbedded")
    if "distortion" in message:
        topics.append("distortion")
    if tag == IssueTag.BLEED.value:
        topics.append("bleed")
    return topics


def _topics_for_fix(fix: FixRecord) -> List[str]:
    if fix.code == FixCode.BLEED_ADDED:
        return ["bleed"]
    return []


def build_link(code: str, lang: str, base_url: str = DEFAULT_HELP_BASE_URL) -> Optional[HelpLink]:
    """
    Build one help link, falling back to French wording.
    
    Args:
        code: Help topic code
        lang: Language code
        base_url: Help site root
        
    Returns:
        HelpLink or None for an unknown topic
    """
    by_language = HELP_LINKS.get(code)
    if not by_language:
        return None
    entry = by_language.get(lang) or by_language.get(FALLBACK_LANGUAGE)
    if not entry:
        return None
    return HelpLink(code=code, url=base_url.rstrip("/") + entry["path"], label=entry["label"])


def _iter_topics(report: Report) -> Iterable[str]:
    for issue in list(report.errors) + list(report.warnings) + list(report.infos):
        yield from _topics_for_issue(issue)
    for fix in report.fixes:
        yield from _topics_for_fix(fix)


def resolve_help_links(report: Optional[Report], lang: str = FALLBACK_LANGUAGE,
                       base_url: Optional[str] = None) -> List[HelpLink]:
    """
    Resolve the help links relevant to a report.
    
    Args:
        report: Structured report
        lang: Language code
        base_url: Help site root (defaults to DEFAULT_HELP_BASE_URL)
        
    Returns:
        Distinct help links in first-encountered order
    """
    if report is None:
        return []
    
    seen: Set[str] = set()
    links: List[HelpLink] = []
    for code in _iter_topics(report):
        if code in seen:
            continue
        seen.add(code)
        link = build_link(code, lang, base_url or DEFAULT_HELP_BASE_URL)
        if link is not None:
            links.append(link)
    
    logger.debug(f"Resolved {len(links)} help link(s) for language {lang}")
    return links
