# parsers/base.py

from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from .models import ExtractedDocument


class TextExtractor(ABC):
    @abstractmethod
    def extract(self, source: str | Path | BinaryIO) -> ExtractedDocument:
        """
        Extract per-page text blocks from a document.

        Requirements:
        - Deterministic output for same input
        - One block per source page, in page order
        - Blank pages are emitted too; dropping them is the aggregator's job
        """
        raise NotImplementedError
