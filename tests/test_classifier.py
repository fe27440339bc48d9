from ecad_import.parser import content_lines, is_content_line, is_work_line, parse_work

WORK_LINE = "1  T-000123    My Song Title    Active    2020"
MISSING_ID_WORK_LINE = "2  -    Untitled Jam    Pending    01/02/2019"
HOLDER_LINE = "1  12345  Jane Doe    CA  33,33"


def test_content_line_requires_numeric_first_column():
    assert is_content_line(WORK_LINE)
    assert is_content_line(HOLDER_LINE)
    assert not is_content_line("RELATORIO ANALITICO DE OBRAS")
    assert not is_content_line("Pagina 1 de 3")
    assert not is_content_line("12A  foo")
    assert not is_content_line("")


def test_work_line_markers():
    assert is_work_line(WORK_LINE)
    assert is_work_line(MISSING_ID_WORK_LINE)
    assert not is_work_line(HOLDER_LINE)
    assert not is_work_line("3  -12345  Jane Doe  CA  50")


def test_work_lines_are_content_lines():
    for line in (WORK_LINE, MISSING_ID_WORK_LINE):
        assert is_work_line(line)
        assert is_content_line(line)


def test_content_lines_drops_page_furniture():
    lines = [
        "ECAD - Escritorio Central",
        WORK_LINE,
        "COD. TITULAR  NOME  PSEUDONIMO  CAT  %",
        HOLDER_LINE,
        "Pagina 1 de 1",
    ]
    assert content_lines(lines) == [WORK_LINE, HOLDER_LINE]


def test_parse_work_columns():
    work = parse_work(WORK_LINE)
    assert work["registry_work_id"] == "1"
    assert work["external_code"] == "T-000123"
    assert work["title"] == "My Song Title"
    assert work["status"] == "Active"
    assert work["created_at"] == "2020"
    assert work["right_holders"] == []
    assert work["source_references"] == [
        {"source_system_name": "Ecad", "source_record_id": "1"}
    ]


def test_parse_work_keeps_missing_identifier_marker():
    work = parse_work(MISSING_ID_WORK_LINE)
    assert work["registry_work_id"] == "2"
    assert work["external_code"] == "-"
    assert work["title"] == "Untitled Jam"
    assert work["created_at"] == "01/02/2019"


def test_parse_work_blank_trailing_columns():
    work = parse_work("7  T-000999    Only A Title")
    assert work["title"] == "Only A Title"
    assert work["status"] == ""
    assert work["created_at"] == ""


def test_parse_work_ignores_extra_columns():
    work = parse_work("8  T-1    Title    Active    2021    http://example.org    x")
    assert work["created_at"] == "2021"


def test_parse_work_title_keeps_narrow_spacing():
    work = parse_work("9  T-2    Samba  de  Verao    Active    2001")
    assert work["title"] == "Samba  de  Verao"
