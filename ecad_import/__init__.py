from .errors import (
    ColumnCountError,
    FormatError,
    MissingAnchorError,
    SequencingError,
    StructuralError,
    UnknownRoleError,
)
from .parser import (
    content_lines,
    extract,
    extract_from_text,
    is_content_line,
    is_work_line,
    parse_right_holder,
    parse_work,
)
from .reader import EcadPdf

__all__ = [
    "ColumnCountError",
    "EcadPdf",
    "FormatError",
    "MissingAnchorError",
    "SequencingError",
    "StructuralError",
    "UnknownRoleError",
    "content_lines",
    "extract",
    "extract_from_text",
    "is_content_line",
    "is_work_line",
    "parse_right_holder",
    "parse_work",
]
