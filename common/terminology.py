#!/usr/bin/env python3
"""
Terminology definitions for prepress log field mappings
Centralizes upstream key names so that dual-casing lookups are not hardcoded at call sites
"""
from typing import Any, Dict, List, Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldMapping:
    """Mapping for a logical field with multiple candidate keys, tried in order."""
    canonical_name: str
    description: str
    key_strategies: List[str] = field(default_factory=list)
    default: Any = None


def lookup(obj: Any, mapping: FieldMapping) -> Any:
    """
    Resolve a logical field against a loosely-cased upstream object.

    The first candidate key whose value is present and not None wins,
    so PascalCase keys take precedence over camelCase ones.

    Args:
        obj: Upstream mapping (anything else resolves to the default)
        mapping: Field mapping with ordered key strategies

    Returns:
        Resolved value or mapping.default
    """
    if not isinstance(obj, Mapping):
        return mapping.default

    for key in mapping.key_strategies:
        value = obj.get(key)
        if value is not None:
            return value

    return mapping.default


def build_strategies(camel_name: str) -> List[str]:
    """Build [PascalCase, camelCase] key candidates from a camelCase name."""
    pascal_name = camel_name[:1].upper() + camel_name[1:]
    if pascal_name == camel_name:
        return [camel_name]
    return [pascal_name, camel_name]


class PrepressTerminology:
    """Centralized key mappings for the prepress workflow log."""

    # One entry of a "validations" payload
    VALIDATION_FIELDS: Dict[str, FieldMapping] = {
        'message': FieldMapping(
            canonical_name='message',
            description='Human-readable validation message',
            key_strategies=build_strategies('message'),
            default=''
        ),
        'level': FieldMapping(
            canonical_name='level',
            description='Raw severity code (2+ error, 1 warning, else info)',
            key_strategies=build_strategies('level'),
            default=0
        ),
        'field_name': FieldMapping(
            canonical_name='field_name',
            description='Upstream field the validation refers to',
            key_strategies=build_strategies('fieldName')
        ),
        'type': FieldMapping(
            canonical_name='type',
            description='Upstream validation type',
            key_strategies=build_strategies('type')
        ),
        'data': FieldMapping(
            canonical_name='data',
            description='Free-form validation payload',
            key_strategies=build_strategies('data')
        ),
    }

    # Structured file info block (result.pdfInfo)
    PDF_INFO_FIELDS: Dict[str, FieldMapping] = {
        'file_name': FieldMapping(
            canonical_name='file_name',
            description='Original file name',
            key_strategies=['fileName', 'FileName']
        ),
        'page_count': FieldMapping(
            canonical_name='page_count',
            description='Number of pages',
            key_strategies=['pageCount', 'PageCount']
        ),
        'title': FieldMapping(
            canonical_name='title',
            description='Document title from PDF metadata',
            key_strategies=['title', 'Title']
        ),
    }

    # Top-level result fields
    RESULT_FIELDS: Dict[str, FieldMapping] = {
        'original_link': FieldMapping(
            canonical_name='original_link',
            description='Link to the uploaded file',
            key_strategies=['originalLink', 'OriginalLink']
        ),
        'final_link': FieldMapping(
            canonical_name='final_link',
            description='Link to the corrected file',
            key_strategies=['finalLink', 'FinalLink']
        ),
        'status': FieldMapping(
            canonical_name='status',
            description='Workflow session status',
            key_strategies=['status', 'Status']
        ),
    }

    # One entry of result.runtimeVariables
    RUNTIME_VARIABLE_FIELDS: Dict[str, FieldMapping] = {
        'key': FieldMapping(
            canonical_name='key',
            description='Variable name',
            key_strategies=['key', 'Key']
        ),
        'value': FieldMapping(
            canonical_name='value',
            description='Variable value (usually a string)',
            key_strategies=['value', 'Value']
        ),
    }

    @classmethod
    def validation_field(cls, obj: Any, field_name: str) -> Any:
        """Resolve one validation field by canonical name."""
        return lookup(obj, cls.VALIDATION_FIELDS[field_name])

    @classmethod
    def pdf_info_field(cls, obj: Any, field_name: str) -> Any:
        """Resolve one pdfInfo field by canonical name."""
        return lookup(obj, cls.PDF_INFO_FIELDS[field_name])

    @classmethod
    def result_field(cls, obj: Any, field_name: str) -> Any:
        """Resolve one top-level result field by canonical name."""
        return lookup(obj, cls.RESULT_FIELDS[field_name])

    @classmethod
    def runtime_variable_field(cls, obj: Any, field_name: str) -> Any:
        """Resolve key/value of a runtime variable entry."""
        return lookup(obj, cls.RUNTIME_VARIABLE_FIELDS[field_name])


# Runtime variable keys understood by the meta extractor
RUNTIME_KEY_TRIM_WIDTH = 'Largeur'
RUNTIME_KEY_TRIM_HEIGHT = 'Hauteur'
RUNTIME_KEY_IMPRESSION = 'Impression'
RUNTIME_KEY_PAGE_COUNT = 'FileInfo.FileInfo.PageCount'
RUNTIME_KEY_SAME_DIMENSION = 'FileInfo.FileInfo.AllPagesSameDimension'
