from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

import pdfplumber
from pypdf import PdfReader
from pypdf.errors import PdfReadWarning

from .parser import content_lines, extract
from .records import Work

warnings.filterwarnings("ignore", category=PdfReadWarning)
logging.getLogger("pypdf").setLevel(logging.ERROR)


def ensure_pdf_path(path: Path | str) -> Path:
    pdf_path = Path(path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"File not found: {pdf_path}")
    if not pdf_path.is_file() or pdf_path.suffix.lower() != ".pdf":
        raise ValueError(f"Target must be a PDF file: {pdf_path}")
    return pdf_path


def iter_page_lines(
    pdf_path: Path,
    log_fn: Optional[Callable[[str], None]] = None,
    check_cancel: Callable[[], None] | None = None,
) -> Iterator[str]:
    """
    Yield the text lines of every page, in page order.

    Layout mode keeps the horizontal spacing of the report, which the column
    heuristics depend on.
    """
    pages_scanned = 0
    lines_total = 0
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            if check_cancel is not None:
                check_cancel()
            pages_scanned += 1
            text = page.extract_text(layout=True) or ""
            for line in text.splitlines():
                line = line.strip()
                if not line:
                    continue
                lines_total += 1
                yield line
    if log_fn:
        log_fn(f"ecad reader: pages={pages_scanned} | extracted_lines={lines_total}")


def read_metadata(pdf_path: Path) -> Dict[str, str]:
    reader = PdfReader(str(pdf_path))
    if reader.is_encrypted:
        raise ValueError(f"Encrypted PDF: {pdf_path.name}")
    metadata = reader.metadata or {}
    normalized: Dict[str, str] = {}
    for key, value in metadata.items():
        label = str(key)
        if label.startswith("/"):
            label = label[1:]
        normalized[label] = "" if value is None else str(value)
    return normalized


class EcadPdf:
    """
    A rights report exported by Ecad.

    Lines and works are read on first access and kept for reuse.
    """

    def __init__(
        self,
        path: Path | str,
        log_fn: Optional[Callable[[str], None]] = None,
        check_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.path = ensure_pdf_path(path)
        self.log_fn = log_fn
        self.check_cancel = check_cancel
        self._lines: Optional[List[str]] = None
        self._works: Optional[List[Work]] = None

    @property
    def lines(self) -> List[str]:
        if self._lines is None:
            self._lines = content_lines(
                iter_page_lines(
                    self.path, log_fn=self.log_fn, check_cancel=self.check_cancel
                )
            )
        return self._lines

    @property
    def works(self) -> List[Work]:
        if self._works is None:
            self._works = extract(self.lines, log_fn=self.log_fn)
        return self._works

    @property
    def metadata(self) -> Dict[str, str]:
        return read_metadata(self.path)

    @property
    def page_count(self) -> int:
        return len(PdfReader(str(self.path)).pages)
