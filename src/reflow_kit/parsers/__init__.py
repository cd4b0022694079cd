from .base import TextExtractor
from .models import ExtractedDocument, RawTextBlock
from .pdf_parser import PdfTextExtractor

__all__ = [
    "ExtractedDocument",
    "PdfTextExtractor",
    "RawTextBlock",
    "TextExtractor",
]
