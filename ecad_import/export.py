from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from .records import Work

ROW_HEADERS = [
    "work_id",
    "external_code",
    "title",
    "status",
    "created_at",
    "person_id",
    "name",
    "role",
    "share",
    "society",
    "registry_number",
    "pseudonym",
]


def to_json(works: Sequence[Work], indent: int = 2) -> str:
    return json.dumps(list(works), indent=indent, ensure_ascii=False)


def write_json(
    json_path: Path,
    works: Sequence[Work],
    metadata: Optional[Dict[str, str]] = None,
) -> None:
    payload = {"source": metadata or {}, "works": list(works)}
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with json_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)


def flatten_rows(works: Sequence[Work]) -> List[Dict[str, object]]:
    """One row per right holder; a work without right holders still gets a row."""
    rows: List[Dict[str, object]] = []
    for work in works:
        base: Dict[str, object] = {
            "work_id": work["registry_work_id"],
            "external_code": work["external_code"],
            "title": work["title"],
            "status": work["status"],
            "created_at": work["created_at"],
        }
        if not work["right_holders"]:
            rows.append({**base, **{key: "" for key in ROW_HEADERS[5:]}})
            continue
        for holder in work["right_holders"]:
            pseudonyms = holder["pseudonyms"]
            rows.append(
                {
                    **base,
                    "person_id": holder["registry_person_id"],
                    "name": holder["name"],
                    "role": holder["role"],
                    "share": holder["share"],
                    "society": holder["society_name"] or "",
                    "registry_number": holder["registry_number"] or "",
                    "pseudonym": pseudonyms[0]["name"] if pseudonyms else "",
                }
            )
    return rows


def write_xlsx(xlsx_path: Path, works: Sequence[Work]) -> None:
    rows = flatten_rows(works)
    wb = Workbook()
    ws = wb.active
    if ws is None:
        ws = wb.create_sheet()
    ws.title = "Works"

    header_font = Font(bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

    ws.append([header.replace("_", " ").title() for header in ROW_HEADERS])
    for col_idx in range(1, len(ROW_HEADERS) + 1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = header_alignment

    for row in rows:
        ws.append([row.get(key, "") for key in ROW_HEADERS])

    if rows:
        table_ref = f"A1:{get_column_letter(len(ROW_HEADERS))}{len(rows) + 1}"
        table = Table(displayName="ExtractedWorks", ref=table_ref)
        table.tableStyleInfo = TableStyleInfo(
            name="TableStyleLight1",
            showFirstColumn=False,
            showLastColumn=False,
            showRowStripes=True,
            showColumnStripes=False,
        )
        ws.add_table(table)

    ws.column_dimensions["C"].width = 50
    ws.column_dimensions["G"].width = 40
    ws.column_dimensions["L"].width = 30

    xlsx_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(xlsx_path)
