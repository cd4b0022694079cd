# parsers/pdf_parser.py

import logging
import re
from pathlib import Path
from time import monotonic
from typing import Any, BinaryIO, cast

import pdfplumber

from reflow_kit.observability import names
from reflow_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import TextExtractor
from .models import ExtractedDocument, RawTextBlock

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


class PdfTextExtractor(TextExtractor):
    """
    Deterministic PDF text extractor.
    - Uses page order
    - One block per page, lines joined with spaces
    - No paragraph or heading detection (pagination does that)
    """

    def __init__(self, metrics_hook: MetricsHook = NoOpMetricsHook()) -> None:
        self.metrics_hook = metrics_hook

    def extract(self, source: str | Path | BinaryIO) -> ExtractedDocument:
        start = monotonic()
        blocks: list[RawTextBlock] = []

        # pdfplumber.open accepts path-like or buffer objects; cast to Any
        with pdfplumber.open(cast(Any, source)) as pdf:
            title = self._extract_title(pdf)

            for page_number, page in enumerate(pdf.pages, start=1):
                text = page.extract_text() or ""
                blocks.append(
                    RawTextBlock(page_number=page_number, text=self._flatten(text))
                )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.EXTRACTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.EXTRACTION_PAGES_TOTAL, len(blocks))
        logger.info("Extracted %d pages in %.1f ms", len(blocks), elapsed_ms)

        return ExtractedDocument(
            title=title,
            page_count=len(blocks),
            blocks=blocks,
            metadata={"source_type": "pdf"},
        )

    def _extract_title(self, pdf: Any) -> str:
        """
        Simple heuristic:
        - First non-empty line of first page
        """
        if not pdf.pages:
            return "Untitled Document"
        text = pdf.pages[0].extract_text() or ""
        for line in text.splitlines():
            if line.strip():
                return line.strip()
        return "Untitled Document"

    @staticmethod
    def _flatten(text: str) -> str:
        return _WHITESPACE_RE.sub(" ", text).strip()
