from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence, TypedDict

from .errors import FormatError
from .export import write_json, write_xlsx
from .reader import EcadPdf


class BatchSummary(TypedDict):
    extracted: list[str]
    failures: list[str]
    works: int
    right_holders: int


def process_reports(
    pdf_files: Sequence[Path],
    api: Any,
    out_dir_name: str,
    xlsx: bool = False,
) -> BatchSummary:
    """
    Extract every report and write its output next to it.

    `api` is the ferp script API (`log`, `progress`, `check_cancel`). A
    document that fails is recorded in `failures` and the batch moves on.
    """
    summary: BatchSummary = {
        "extracted": [],
        "failures": [],
        "works": 0,
        "right_holders": 0,
    }
    total_files = len(pdf_files)

    for index, pdf_path in enumerate(pdf_files, start=1):
        api.check_cancel()
        api.progress(current=index, total=total_files, unit="files")
        try:
            report = EcadPdf(
                pdf_path,
                log_fn=lambda msg: api.log("debug", f"{pdf_path.name}: {msg}"),
                check_cancel=api.check_cancel,
            )
            works = report.works
            out_dir = pdf_path.parent / out_dir_name
            write_json(out_dir / f"{pdf_path.stem}.json", works, report.metadata)
            if xlsx:
                write_xlsx(out_dir / f"{pdf_path.stem}.xlsx", works)
        except FormatError as exc:
            # A layout the heuristics cannot handle fails the whole document.
            summary["failures"].append(f"{pdf_path.name}: {exc}")
            api.log("error", f"{pdf_path.name}: cannot be auto-extracted: {exc}")
            continue
        except Exception as exc:  # noqa: BLE001
            summary["failures"].append(f"{pdf_path.name}: {exc}")
            api.log("error", f"Failed to process '{pdf_path.name}': {exc}")
            continue

        holders = sum(len(work["right_holders"]) for work in works)
        summary["extracted"].append(str(pdf_path))
        summary["works"] += len(works)
        summary["right_holders"] += holders
        api.log(
            "info",
            f"Processed '{pdf_path.name}' | works={len(works)} | right_holders={holders}",
        )

    return summary
