import io

import docx
import pytest

from minutes_engine.minutes import MinutesReport
from minutes_engine.render import export_docx, export_filename, export_pdf, format_full_report


@pytest.fixture
def report(sample_report_json):
    return MinutesReport.model_validate(sample_report_json)


def test_format_full_report(report):
    text = format_full_report(report.en)

    assert text == (
        "[Weekly Sales Meeting]\n"
        "Date: 2025-01-15\n"
        "Participants: Minsu Kim, Jieun Lee\n"
        "\n"
        "Summary:\n"
        "The team discussed Q1 sales targets and new dealer contracts.\n"
        "\n"
        "Discussion:\n"
        "- Sales targets: Q1 target raised by 10%.\n"
        "\n"
        "Decisions:\n"
        "- Sign contracts with two new dealers\n"
        "\n"
        "Action Items:\n"
        "- [Jieun Lee] Draft contracts (Due: 2025-01-22)\n"
    )


def test_export_filename_replaces_whitespace(report):
    assert export_filename(report.en, "docx") == "Minutes_Weekly_Sales_Meeting.docx"
    assert export_filename(report.ko, "pdf") == "Minutes_주간_영업_회의.pdf"


def test_export_docx_contains_sections(report):
    data = export_docx(report.ko)

    document = docx.Document(io.BytesIO(data))
    texts = [p.text for p in document.paragraphs]
    assert texts[0] == "주간 영업 회의"
    assert "Summary" in texts
    assert "Action Items" in texts
    assert "[이지은] 계약서 초안 작성 (Due: 2025-01-22)" in texts


@pytest.mark.parametrize("lang", ["en", "ko"])
def test_export_pdf_produces_pdf_document(report, lang):
    data = export_pdf(report.for_locale(lang), lang=lang)

    assert data.startswith(b"%PDF")
    assert len(data) > 500
