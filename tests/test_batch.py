import json

from ecad_import.batch import process_reports

WORK_LINE = "1  T-000123          My Song Title          Active          2020"


class FakeApi:
    def __init__(self):
        self.logs = []
        self.progress_calls = []

    def log(self, level, message):
        self.logs.append((level, message))

    def progress(self, current, total, unit):
        self.progress_calls.append((current, total, unit))

    def check_cancel(self):
        pass


def test_broken_document_does_not_stop_batch(tmp_path, make_report):
    broken = tmp_path / "a_broken.pdf"
    broken.write_bytes(b"this is not a pdf")
    bad_layout = make_report(
        tmp_path / "b_bad_layout.pdf", [["10  Ana Lima  CA  100", WORK_LINE]]
    )
    good = make_report(tmp_path / "c_good.pdf", [[WORK_LINE]])
    api = FakeApi()

    summary = process_reports([broken, bad_layout, good], api, "_ecad", xlsx=True)

    assert summary["extracted"] == [str(good)]
    assert len(summary["failures"]) == 2
    assert summary["failures"][0].startswith("a_broken.pdf: ")
    assert summary["failures"][1].startswith("b_bad_layout.pdf: ")
    assert summary["works"] == 1
    assert summary["right_holders"] == 0

    payload = json.loads((tmp_path / "_ecad" / "c_good.json").read_text(encoding="utf-8"))
    assert payload["works"][0]["external_code"] == "T-000123"
    assert payload["source"]["Title"] == "Relatorio Analitico"
    assert (tmp_path / "_ecad" / "c_good.xlsx").exists()
    assert not (tmp_path / "_ecad" / "a_broken.json").exists()
    assert not (tmp_path / "_ecad" / "b_bad_layout.json").exists()

    errors = [message for level, message in api.logs if level == "error"]
    assert len(errors) == 2
    assert "cannot be auto-extracted" in errors[1]
    assert [call[0] for call in api.progress_calls] == [1, 2, 3]


def test_missing_file_is_reported(tmp_path):
    api = FakeApi()
    summary = process_reports([tmp_path / "gone.pdf"], api, "_ecad")
    assert summary["extracted"] == []
    assert summary["failures"][0].startswith("gone.pdf: File not found")
