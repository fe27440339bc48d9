from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from ferp.fscp.scripts import sdk

from ecad_import.batch import process_reports

DEFAULT_OUTPUT_DIR = "_ecad"


class UserResponse(TypedDict):
    value: str
    recursive: bool
    write_xlsx: bool


def _collect_pdfs(root: Path, recursive: bool) -> list[Path]:
    if root.is_file():
        return [root]
    if recursive:
        return sorted(path for path in root.rglob("*.pdf") if path.is_file())
    return sorted(path for path in root.glob("*.pdf") if path.is_file())


@sdk.script
def main(ctx: sdk.ScriptContext, api: sdk.ScriptAPI) -> None:
    target = ctx.target_path
    if not target.exists():
        raise ValueError(f"Target does not exist: {target}")
    if target.is_file() and target.suffix.lower() != ".pdf":
        raise ValueError(f"Target must be a PDF file or directory: {target}")

    payload = api.request_input_json(
        "Output folder name",
        id="ecad_import_options",
        fields=[
            {
                "id": "recursive",
                "type": "bool",
                "label": "Scan subdirectories",
                "default": False,
            },
            {
                "id": "write_xlsx",
                "type": "bool",
                "label": "Write Excel summary",
                "default": False,
            },
        ],
        payload_type=UserResponse,
    )

    out_dir_name = payload["value"].strip() or DEFAULT_OUTPUT_DIR
    recursive = payload["recursive"]
    xlsx = payload["write_xlsx"]

    pdf_files = _collect_pdfs(target, recursive=recursive)
    total_files = len(pdf_files)
    if total_files == 0:
        api.log("warn", "No PDF files found.")
        api.emit_result(
            {
                "_status": "warn",
                "_title": "Warning: No PDF Files Found",
                "Target": str(target),
            }
        )
        return

    api.log("info", f"Ecad reports found={total_files} | recursive={recursive}")

    summary = process_reports(pdf_files, api, out_dir_name, xlsx=xlsx)
    failures = summary["failures"]

    result: dict[str, object] = {
        "_title": "Ecad Import Finished",
        "Total Files": total_files,
        "Extracted Files": len(summary["extracted"]),
        "Works": summary["works"],
        "Right Holders": summary["right_holders"],
    }
    if failures:
        result["_status"] = "warn"
        result["Failures"] = failures
    api.emit_result(result)


if __name__ == "__main__":
    main()
