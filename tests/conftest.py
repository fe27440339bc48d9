import pytest
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas


def _make_report(path, pages):
    c = canvas.Canvas(str(path), pagesize=landscape(A4))
    c.setTitle("Relatorio Analitico")
    c.setAuthor("ECAD")
    for lines in pages:
        c.setFont("Courier", 10)
        y = 560
        for line in lines:
            c.drawString(30, y, line)
            y -= 20
        c.showPage()
    c.save()
    return path


@pytest.fixture
def make_report():
    return _make_report
