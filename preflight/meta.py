"""
File identity and physical format extraction.

Four sources, ranked; each one only fills fields still left empty by the
sources before it:
1. structured info block (result.pdfInfo) and the result's own link/status fields
2. flat key/value list (result.runtimeVariables)
3. document title (pdfInfo.title) as file name
4. regex over the raw log text for a "FileName": "xxx.pdf" pair
"""
from typing import Any, Dict, Optional
import logging
import re

from common.json_coercion import as_dict, as_list, to_number
from common.terminology import (
    PrepressTerminology,
    RUNTIME_KEY_IMPRESSION,
    RUNTIME_KEY_PAGE_COUNT,
    RUNTIME_KEY_SAME_DIMENSION,
    RUNTIME_KEY_TRIM_HEIGHT,
    RUNTIME_KEY_TRIM_WIDTH,
)
from preflight.models import MetaRecord

logger = logging.getLogger(__name__)

FILE_NAME_PATTERN = re.compile(r'"FileName"\s*:\s*"([^"]+\.(?:pdf|eps|ps|ai|indd))"', re.IGNORECASE)


def _fill(fields: Dict[str, Any], name: str, value: Any) -> None:
    """Set a field only when it is still empty and the value is usable."""
    if fields.get(name) is None and value is not None and value != "":
        fields[name] = value


def _from_pdf_info(fields: Dict[str, Any], result: Dict[str, Any]) -> None:
    pdf_info = as_dict(result.get("pdfInfo"))
    
    file_name = PrepressTerminology.pdf_info_field(pdf_info, "file_name")
    if file_name is not None:
        _fill(fields, "file_name", str(file_name))
    
    page_count = PrepressTerminology.pdf_info_field(pdf_info, "page_count")
    _fill(fields, "page_count", to_number(page_count))
    
    for name in ("original_link", "final_link"):
        link = PrepressTerminology.result_field(result, name)
        if link is not None:
            _fill(fields, name, str(link))
    _fill(fields, "status", PrepressTerminology.result_field(result, "status"))


def _from_runtime_variables(fields: Dict[str, Any], result: Dict[str, Any]) -> None:
    for item in as_list(result.get("runtimeVariables")):
        key = PrepressTerminology.runtime_variable_field(item, "key")
        if not key:
            continue
        value = PrepressTerminology.runtime_variable_field(item, "value")
        
        if key == RUNTIME_KEY_TRIM_WIDTH:
            # Zero is not a trim size
            _fill(fields, "trim_width_mm", to_number(value) or None)
        elif key == RUNTIME_KEY_TRIM_HEIGHT:
            _fill(fields, "trim_height_mm", to_number(value) or None)
        elif key == RUNTIME_KEY_IMPRESSION:
            _fill(fields, "impression", value)
        elif key == RUNTIME_KEY_PAGE_COUNT:
            _fill(fields, "page_count", to_number(value))
        elif key == RUNTIME_KEY_SAME_DIMENSION:
            _fill(fields, "all_pages_same_dimension", value == "True" or value is True)


def _from_title(fields: Dict[str, Any], result: Dict[str, Any]) -> None:
    title = PrepressTerminology.pdf_info_field(as_dict(result.get("pdfInfo")), "title")
    if title:
        _fill(fields, "file_name", str(title))


def _from_raw_text(fields: Dict[str, Any], raw_text: Optional[str]) -> None:
    if fields.get("file_name") is not None or not raw_text:
        return
    match = FILE_NAME_PATTERN.search(raw_text)
    if match:
        logger.debug(f"File name recovered from raw log text: {match.group(1)}")
        _fill(fields, "file_name", match.group(1))


def extract_meta(result: Dict[str, Any], raw_text: Optional[str] = None) -> MetaRecord:
    """
    Extract file metadata from the best available source.
    
    Args:
        result: The `result` object of the raw log
        raw_text: Serialized raw log, used by the last-resort file name search
        
    Returns:
        MetaRecord with unresolved fields left as None
    """
    fields: Dict[str, Any] = {}
    
    _from_pdf_info(fields, result)
    _from_runtime_variables(fields, result)
    _from_title(fields, result)
    _from_raw_text(fields, raw_text)
    
    return MetaRecord(**fields)
