from pathlib import Path

import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from reflow_kit.parsers.models import ExtractedDocument
from reflow_kit.parsers.pdf_parser import PdfTextExtractor


def _draw_lines(c: canvas.Canvas, lines: list[str]) -> None:
    _, height = LETTER
    text = c.beginText(40, height - 50)
    for line in lines:
        text.textLine(line)
    c.drawText(text)
    c.showPage()


def _create_book_pdf(path: Path) -> None:
    """A short three-page book with a blank middle page."""
    c = canvas.Canvas(str(path), pagesize=LETTER)

    _draw_lines(
        c,
        [
            "THE LIGHTHOUSE",
            "",
            "The keeper climbed the stairs every evening at dusk.",
            "He trimmed the wick and polished the great lens.",
        ],
    )
    # Blank page, as scanned books often have.
    c.showPage()
    _draw_lines(
        c,
        [
            "CHAPTER TWO",
            "Ships passed in the night and never knew his name.",
            "The storm came in from the west without warning.",
        ],
    )

    c.save()


@pytest.fixture(scope="module")
def pdf_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create all test PDFs once per module."""
    dir_path: Path = tmp_path_factory.mktemp("pdfs")

    _create_book_pdf(dir_path / "book.pdf")

    return dir_path


@pytest.fixture(scope="module")
def extracted_book(pdf_dir: Path) -> ExtractedDocument:
    """Extract the book PDF once, reuse across tests."""
    extractor = PdfTextExtractor()
    with open(pdf_dir / "book.pdf", "rb") as f:
        return extractor.extract(f)
