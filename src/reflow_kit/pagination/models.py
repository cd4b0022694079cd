from dataclasses import dataclass

from reflow_kit.aggregation.aggregator import PARAGRAPH_DELIMITER

from .paragraphs import ParagraphKind, classify


@dataclass(frozen=True)
class PageElement:
    """One renderable paragraph of a page, tagged as heading or body."""

    kind: ParagraphKind
    text: str


@dataclass(frozen=True)
class VirtualPage:
    """One screen-filling unit of reflowed text.

    ``start``/``end`` are offsets into the logical text; ``end`` is
    exclusive. Pages are replaced wholesale on every re-pagination.
    """

    index: int
    content: tuple[str, ...]
    start: int
    end: int

    @property
    def text(self) -> str:
        return PARAGRAPH_DELIMITER.join(self.content)

    @property
    def elements(self) -> list[PageElement]:
        return [PageElement(kind=classify(p), text=p.strip()) for p in self.content]

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end

    def distance_to(self, offset: int) -> int:
        """Characters between ``offset`` and this page's range (0 if inside)."""
        if offset < self.start:
            return self.start - offset
        if offset > self.end:
            return offset - self.end
        return 0
