import logging
import re
from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass

from reflow_kit.observability import names
from reflow_kit.observability.base import MetricsHook, NoOpMetricsHook
from reflow_kit.parsers.models import RawTextBlock

logger = logging.getLogger(__name__)

PARAGRAPH_DELIMITER = "\n\n"
MIN_BLOCK_CHARS = 10

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class BlockSpan:
    """Where one surviving source block sits in the logical text."""

    page_number: int
    start: int
    end: int


@dataclass(frozen=True)
class LogicalText:
    """The full extracted text of a document as one delimiter-joined string.

    Immutable. Built once per document.
    """

    text: str
    blocks: tuple[BlockSpan, ...] = ()

    def __len__(self) -> int:
        return len(self.text)

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def source_page_at(self, offset: int) -> int | None:
        """Source page number of the block containing ``offset``.

        Offsets inside a delimiter, or past the end, map to the block
        before them.
        """
        if not self.blocks:
            return None
        starts = [b.start for b in self.blocks]
        idx = max(bisect_right(starts, offset) - 1, 0)
        return self.blocks[idx].page_number


def clean_block(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def aggregate(
    blocks: Iterable[RawTextBlock | str],
    *,
    min_block_chars: int = MIN_BLOCK_CHARS,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LogicalText:
    """Join per-page text blocks into one LogicalText.

    Blocks are whitespace-collapsed first; any block of ``min_block_chars``
    characters or fewer is dropped and contributes no offsets. Plain strings
    are numbered as source pages 1..n in the order given.
    """
    parts: list[str] = []
    spans: list[BlockSpan] = []
    offset = 0
    dropped = 0

    for position, block in enumerate(blocks, start=1):
        if isinstance(block, RawTextBlock):
            page_number, raw = block.page_number, block.text
        else:
            page_number, raw = position, block

        cleaned = clean_block(raw)
        if len(cleaned) <= min_block_chars:
            dropped += 1
            logger.debug("Dropping near-empty block from page %d", page_number)
            continue

        if parts:
            offset += len(PARAGRAPH_DELIMITER)
        spans.append(
            BlockSpan(page_number=page_number, start=offset, end=offset + len(cleaned))
        )
        parts.append(cleaned)
        offset += len(cleaned)

    text = PARAGRAPH_DELIMITER.join(parts)

    metrics_hook.increment(names.AGGREGATION_BLOCKS_KEPT, len(spans))
    metrics_hook.increment(names.AGGREGATION_BLOCKS_DROPPED, dropped)
    metrics_hook.record_gauge(names.AGGREGATION_TEXT_LENGTH, len(text))
    logger.debug(
        "Aggregated %d blocks (%d dropped) into %d chars", len(spans), dropped, len(text)
    )
    return LogicalText(text=text, blocks=tuple(spans))
