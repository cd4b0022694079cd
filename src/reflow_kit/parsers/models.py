# parsers/models.py

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawTextBlock:
    """Text extracted from one source page, in reading order."""

    page_number: int
    text: str


@dataclass(frozen=True)
class ExtractedDocument:
    title: str
    page_count: int
    blocks: list[RawTextBlock]
    metadata: dict = field(default_factory=dict)
