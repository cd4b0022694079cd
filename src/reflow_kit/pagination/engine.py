import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from time import monotonic

from reflow_kit.aggregation.aggregator import LogicalText
from reflow_kit.observability import names
from reflow_kit.observability.base import MetricsHook, NoOpMetricsHook

from .budget import InvalidBudgetError, LayoutBudget
from .models import VirtualPage
from .paragraphs import Paragraph, split_paragraphs

logger = logging.getLogger(__name__)

PARAGRAPH_SPACING_CHARS = 50  # cost of the gap between paragraphs
MIN_PAGE_CHARS = 5
SPLIT_SEARCH_RATIO = 0.5

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class _Draft:
    content: tuple[str, ...]
    start: int
    end: int


@dataclass
class _PageBuilder:
    content: list[str] = field(default_factory=list)
    count: int = 0
    start: int = 0
    last_end: int = 0

    def add(self, paragraph: Paragraph) -> None:
        if not self.content:
            self.start = paragraph.start_offset
        self.content.append(paragraph.text)
        self.count += paragraph.length + PARAGRAPH_SPACING_CHARS
        self.last_end = paragraph.end_offset

    def flush(self, end: int) -> _Draft:
        draft = _Draft(content=tuple(self.content), start=self.start, end=end)
        self.content = []
        self.count = 0
        return draft


def paginate(
    text: LogicalText | str,
    budget: LayoutBudget,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[VirtualPage]:
    """Reflow ``text`` into screen-sized virtual pages.

    Pure: the same text and budget always give the same pages. Every call
    returns a new list.

    Rules, applied per paragraph in this order:
    - a title never shares a page with what precedes it
    - a paragraph that would overflow the page starts a new one
    - a paragraph longer than a page is split into single-chunk pages
      at a sentence or word boundary where possible

    Raises:
        InvalidBudgetError: If ``budget`` is not a LayoutBudget.
    """
    if not isinstance(budget, LayoutBudget):
        raise InvalidBudgetError(
            f"budget must be a LayoutBudget, got {type(budget).__name__}"
        )

    started = monotonic()
    raw = text.text if isinstance(text, LogicalText) else text
    capacity = budget.capacity

    drafts: list[_Draft] = []
    builder = _PageBuilder()
    split_chunks = 0

    for paragraph in split_paragraphs(raw):
        if paragraph.is_title and builder.content:
            drafts.append(builder.flush(end=paragraph.start_offset - 1))

        if builder.count + paragraph.length > capacity and builder.content:
            drafts.append(builder.flush(end=paragraph.start_offset - 1))

        if paragraph.length > capacity:
            if builder.content:
                drafts.append(builder.flush(end=paragraph.start_offset - 1))
            chunks = list(_split_oversize(paragraph, capacity))
            split_chunks += len(chunks)
            drafts.extend(chunks)
        else:
            builder.add(paragraph)

    if builder.content:
        drafts.append(builder.flush(end=builder.last_end))

    kept = [d for d in drafts if _visible_length(d.content) > MIN_PAGE_CHARS]
    pages = [
        VirtualPage(index=i, content=d.content, start=d.start, end=d.end)
        for i, d in enumerate(kept)
    ]

    elapsed_ms = 1000 * (monotonic() - started)
    metrics_hook.record_latency(names.PAGINATION_DURATION, elapsed_ms)
    metrics_hook.increment(names.PAGINATION_PAGES_CREATED, len(pages))
    metrics_hook.increment(names.PAGINATION_SPLIT_CHUNKS, split_chunks)
    metrics_hook.record_gauge(names.PAGINATION_CHARS_PER_PAGE, capacity)
    logger.debug(
        "Paginated %d chars into %d pages (capacity=%d, split_chunks=%d, dropped=%d)",
        len(raw),
        len(pages),
        capacity,
        split_chunks,
        len(drafts) - len(kept),
    )
    return pages


def _split_oversize(paragraph: Paragraph, capacity: int) -> Iterator[_Draft]:
    remaining = paragraph.text
    offset = paragraph.start_offset
    threshold = capacity * SPLIT_SEARCH_RATIO

    while remaining:
        break_point = min(len(remaining), capacity)
        if break_point < len(remaining):
            # Keep the period with the sentence it ends.
            sentence_end = remaining.rfind(". ", 0, break_point)
            if sentence_end > threshold:
                break_point = sentence_end + 1
            else:
                word_break = remaining.rfind(" ", 0, break_point + 1)
                if word_break > threshold:
                    break_point = word_break

        chunk = remaining[:break_point].rstrip()
        yield _Draft(content=(chunk,), start=offset, end=offset + len(chunk))

        rest = remaining[break_point:]
        remaining = rest.lstrip()
        offset += break_point + len(rest) - len(remaining)


def _visible_length(content: tuple[str, ...]) -> int:
    return len(_WHITESPACE_RE.sub(" ", " ".join(content)).strip())


def clamp_page_number(current: int, total: int) -> int:
    """Clamp a 1-based page number into ``[1, total]``.

    Collapses to the last page when the page count shrank. Returns 1
    when there are no pages at all.
    """
    if current > total:
        current = total
    return max(current, 1)
