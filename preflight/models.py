"""
Data models for the structured prepress report.
Python attributes are snake_case; JSON output is camelCase for downstream consumers.
"""
from typing import Any, Dict, List, Optional, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """Severity derived from the raw validation level."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class IssueTag(str, Enum):
    """Known issue categories, used for UI badges and help links."""
    IMAGE_RESOLUTION = "imageResolution"
    RICH_BLACK = "richBlack"
    BLEED = "bleed"
    PASSWORD = "password"
    FORM_FIELD = "formField"
    FONTS = "fonts"


class FixCode(str, Enum):
    """Automatic corrections recognised in the workflow tree."""
    PAGE_RESIZE = "pageResize"
    BLEED_ADDED = "bleedAdded"
    FLATTENING = "flattening"
    RICH_BLACK_FIX = "richBlackFix"
    FONTS_OUTLINED = "fontsOutlined"
    COLOR_CONVERSION = "colorConversion"


class ReportModel(BaseModel):
    """Base for all report records: immutable, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=False,
    )


class IssueRecord(ReportModel):
    """One normalized validation entry."""
    message: str = ""
    level: Union[int, float] = 0
    severity: Severity = Severity.INFO
    field_name: Optional[Any] = None
    type: Optional[Any] = None
    data: Optional[Any] = None
    source: str = ""
    tag: Optional[IssueTag] = None


class FixRecord(ReportModel):
    """One detected automatic correction."""
    code: FixCode
    label: str
    success: bool
    pages: Optional[List[Any]] = None  # Only present for bleedAdded
    raw: Dict[str, Any] = {}  # Evidence snapshot, not interpreted further


class MetaRecord(ReportModel):
    """File identity and physical format."""
    file_name: Optional[str] = None
    page_count: Optional[Union[int, float]] = None
    trim_width_mm: Optional[Union[int, float]] = None
    trim_height_mm: Optional[Union[int, float]] = None
    all_pages_same_dimension: Optional[bool] = None
    impression: Optional[Any] = None
    original_link: Optional[str] = None
    final_link: Optional[str] = None
    status: Optional[Any] = None


class Dimensions(ReportModel):
    """Page size in millimeters."""
    width_mm: Union[int, float]
    height_mm: Union[int, float]


class FormatRecord(ReportModel):
    """
    Requested vs. achieved trim size.

    Everything but `requested` stays at its default unless a pageResize fix
    carrying result data was detected.
    """
    requested: Optional[Dimensions] = None
    final: Optional[Dimensions] = None
    auto_resize_done: bool = False
    auto_resize_blocked: bool = False
    would_exceed_max_skew: bool = False
    proportion_gap_percent: Optional[float] = None


class ReportStats(ReportModel):
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    fixes_count: int = 0


class Report(ReportModel):
    """Structured prepress report, built once per raw log snapshot."""
    meta: MetaRecord = MetaRecord()
    errors: List[IssueRecord] = []
    warnings: List[IssueRecord] = []
    infos: List[IssueRecord] = []
    fixes: List[FixRecord] = []
    format: FormatRecord = FormatRecord()
    stats: ReportStats = ReportStats()

    @classmethod
    def empty(cls) -> "Report":
        """All-defaults report, returned when the log has no result block."""
        return cls()

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-safe camelCase dict for the API and the assistant context."""
        return self.model_dump(mode="json", by_alias=True)


class HelpLink(ReportModel):
    """Help article matching a detected issue or fix."""
    code: str
    url: str
    label: str
