"""
Plain-text summary of a structured report.

The summary is what gets injected as context for the assistant or shown to
the customer as a quick digest. Wording lives in SUMMARY_WORDING per language;
section headings can be overridden from the prompt configuration.
"""
from typing import Dict, List, Optional
import logging

from common.json_coercion import format_number
from preflight.language import DEFAULT_LANGUAGE
from preflight.models import Report

logger = logging.getLogger(__name__)

SUMMARY_WORDING: Dict[str, Dict[str, str]] = {
    "fr": {
        "file": "Fichier : {value}",
        "pages": "Nombre de pages : {value}",
        "trim": "Format final (Trimbox) : {width} x {height} mm",
        "impression": "Impression prévue : {value}",
        "overview": (
            "Résumé technique : {errors} erreur(s), {warnings} avertissement(s), "
            "{fixes} correction(s) automatique(s) détectée(s)."
        ),
        "fixesTitle": "=== CORRECTIONS AUTOMATIQUES APPLIQUÉES ===",
        "fixesEmpty": "Aucune correction automatique détectée dans ce rapport.",
        "errorsTitle": "=== ERREURS À EXPLIQUER AU CLIENT (bloquantes ou importantes) ===",
        "errorsEmpty": "Aucune erreur bloquante trouvée.",
        "warningsTitle": "=== AVERTISSEMENTS (à mentionner mais rassurer) ===",
        "warningsEmpty": "Aucun avertissement significatif.",
    },
    "en": {
        "file": "File: {value}",
        "pages": "Page count: {value}",
        "trim": "Final size (TrimBox): {width} x {height} mm",
        "impression": "Planned printing: {value}",
        "overview": (
            "Technical summary: {errors} error(s), {warnings} warning(s), "
            "{fixes} automatic fix(es) detected."
        ),
        "fixesTitle": "=== AUTOMATIC FIXES APPLIED ===",
        "fixesEmpty": "No automatic fix detected in this report.",
        "errorsTitle": "=== ERRORS TO EXPLAIN TO THE CUSTOMER (blocking or important) ===",
        "errorsEmpty": "No blocking error found.",
        "warningsTitle": "=== WARNINGS (mention them, but reassure) ===",
        "warningsEmpty": "No significant warning.",
    },
    "es": {
        "file": "Archivo: {value}",
        "pages": "Número de páginas: {value}",
        "trim": "Formato final (TrimBox): {width} x {height} mm",
        "impression": "Impresión prevista: {value}",
        "overview": (
            "Resumen técnico: {errors} error(es), {warnings} advertencia(s), "
            "{fixes} corrección(es) automática(s) detectada(s)."
        ),
        "fixesTitle": "=== CORRECCIONES AUTOMÁTICAS APLICADAS ===",
        "fixesEmpty": "No se ha detectado ninguna corrección automática en este informe.",
        "errorsTitle": "=== ERRORES QUE EXPLICAR AL CLIENTE (bloqueantes o importantes) ===",
        "errorsEmpty": "No se ha encontrado ningún error bloqueante.",
        "warningsTitle": "=== ADVERTENCIAS (mencionar, pero tranquilizar) ===",
        "warningsEmpty": "Ninguna advertencia significativa.",
    },
    "nl": {
        "file": "Bestand: {value}",
        "pages": "Aantal pagina's: {value}",
        "trim": "Eindformaat (TrimBox): {width} x {height} mm",
        "impression": "Geplande druk: {value}",
        "overview": (
            "Technisch overzicht: {errors} fout(en), {warnings} waarschuwing(en), "
            "{fixes} automatische correctie(s) gedetecteerd."
        ),
        "fixesTitle": "=== TOEGEPASTE AUTOMATISCHE CORRECTIES ===",
        "fixesEmpty": "Geen automatische correctie gevonden in dit rapport.",
        "errorsTitle": "=== FOUTEN OM AAN DE KLANT UIT TE LEGGEN (blokkerend of belangrijk) ===",
        "errorsEmpty": "Geen blokkerende fout gevonden.",
        "warningsTitle": "=== WAARSCHUWINGEN (vermelden, maar geruststellen) ===",
        "warningsEmpty": "Geen noemenswaardige waarschuwing.",
    },
    "de": {
        "file": "Datei: {value}",
        "pages": "Seitenanzahl: {value}",
        "trim": "Endformat (TrimBox): {width} x {height} mm",
        "impression": "Geplanter Druck: {value}",
        "overview": (
            "Technische Zusammenfassung: {errors} Fehler, {warnings} Warnung(en), "
            "{fixes} automatische Korrektur(en) erkannt."
        ),
        "fixesTitle": "=== ANGEWENDETE AUTOMATISCHE KORREKTUREN ===",
        "fixesEmpty": "In diesem Bericht wurde keine automatische Korrektur erkannt.",
        "errorsTitle": "=== DEM KUNDEN ZU ERKLÄRENDE FEHLER (blockierend oder wichtig) ===",
        "errorsEmpty": "Kein blockierender Fehler gefunden.",
        "warningsTitle": "=== WARNUNGEN (erwähnen, aber beruhigen) ===",
        "warningsEmpty": "Keine nennenswerte Warnung.",
    },
}

OVERRIDABLE_SECTIONS = ("fixesTitle", "errorsTitle", "warningsTitle")


def get_wording(lang: str, section_titles: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Wording for a language, with configured section headings applied.

    Args:
        lang: Language code (unknown codes use the default language)
        section_titles: Optional heading overrides keyed like OVERRIDABLE_SECTIONS

    Returns:
        Wording dictionary
    """
    wording = dict(SUMMARY_WORDING.get(lang) or SUMMARY_WORDING[DEFAULT_LANGUAGE])
    for key in OVERRIDABLE_SECTIONS:
        override = (section_titles or {}).get(key)
        if isinstance(override, str) and override.strip():
            wording[key] = override.strip()
    return wording


def _header_lines(report: Report, wording: Dict[str, str]) -> List[str]:
    meta = report.meta
    lines = []
    if meta.file_name:
        lines.append(wording["file"].format(value=meta.file_name))
    if meta.page_count is not None:
        lines.append(wording["pages"].format(value=format_number(meta.page_count)))
    if meta.trim_width_mm and meta.trim_height_mm:
        lines.append(wording["trim"].format(
            width=format_number(meta.trim_width_mm),
            height=format_number(meta.trim_height_mm),
        ))
    if meta.impression:
        lines.append(wording["impression"].format(value=meta.impression))
    return lines


def _section(title: str, items: List[str], empty: str) -> List[str]:
    return [title] + (items if items else [empty])


def format_report_summary(report: Report, lang: str = DEFAULT_LANGUAGE,
                          section_titles: Optional[Dict[str, str]] = None,
                          cta_text: Optional[str] = None) -> str:
    """
    Render a report as a plain-text digest.

    Args:
        report: Structured report
        lang: Language code
        section_titles: Optional heading overrides
        cta_text: Optional closing paragraph

    Returns:
        Summary text, newline-terminated
    """
    wording = get_wording(lang, section_titles)
    stats = report.stats

    lines = _header_lines(report, wording)
    lines.append("")
    lines.append(wording["overview"].format(
        errors=stats.error_count,
        warnings=stats.warning_count,
        fixes=stats.fixes_count,
    ))

    lines.append("")
    lines.extend(_section(
        wording["fixesTitle"],
        [f"{index}) {fix.label}" for index, fix in enumerate(report.fixes, start=1)],
        wording["fixesEmpty"],
    ))

    lines.append("")
    lines.extend(_section(
        wording["errorsTitle"],
        [f"- {issue.message}" for issue in report.errors],
        wording["errorsEmpty"],
    ))

    lines.append("")
    lines.extend(_section(
        wording["warningsTitle"],
        [f"- {issue.message}" for issue in report.warnings],
        wording["warningsEmpty"],
    ))

    if cta_text and cta_text.strip():
        lines.append("")
        lines.append(cta_text.strip())

    logger.debug(f"Formatted {lang} summary ({len(lines)} lines)")
    return "\n".join(lines) + "\n"
