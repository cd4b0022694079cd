import logging
import math
from dataclasses import dataclass

from reflow_kit.aggregation.aggregator import LogicalText
from reflow_kit.config import DEFAULT_CONFIG, ReaderConfig
from reflow_kit.locator.anchor import Anchor
from reflow_kit.locator.locator import locate, locate_offset, normalize_whitespace
from reflow_kit.observability.base import MetricsHook, NoOpMetricsHook
from reflow_kit.pagination.budget import LayoutBudget, LayoutSettings
from reflow_kit.pagination.engine import clamp_page_number, paginate
from reflow_kit.pagination.models import VirtualPage

from .progress import ProgressUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationResult:
    page_number: int
    total_pages: int
    progress: ProgressUpdate | None = None  # set only when the position moved


class ReaderSession:
    """Reflow state for one open document.

    Owns the logical text, the current layout settings, the page list for
    those settings and a 1-based current page number. Layout changes
    re-paginate from scratch and keep the reader at the same text offset.

    Example:
        >>> session = ReaderSession(aggregate(blocks), document_id="book-1")
        >>> result = session.next_page()
        >>> reporter.dispatch(result.progress)
    """

    def __init__(
        self,
        text: LogicalText,
        *,
        document_id: str,
        source_page_count: int | None = None,
        settings: LayoutSettings | None = None,
        config: ReaderConfig = DEFAULT_CONFIG,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.text = text
        self.document_id = document_id
        self.config = config
        self.metrics_hook = metrics_hook
        if source_page_count is None:
            source_page_count = max((b.page_number for b in text.blocks), default=0)
        self.source_page_count = source_page_count

        self._settings = settings or LayoutSettings(
            font_size=config.default_font_size,
            line_height=config.default_line_height,
        )
        self._budget = self._settings.to_budget(config)
        self._pages: list[VirtualPage] = []
        self._current = 1
        self._repaginate()

    # -- state ---------------------------------------------------------------

    @property
    def settings(self) -> LayoutSettings:
        return self._settings

    @property
    def budget(self) -> LayoutBudget:
        return self._budget

    @property
    def pages(self) -> list[VirtualPage]:
        return list(self._pages)

    @property
    def total_pages(self) -> int:
        return len(self._pages)

    @property
    def is_empty(self) -> bool:
        return not self._pages

    @property
    def current_page_number(self) -> int:
        return self._current

    @property
    def current_page(self) -> VirtualPage | None:
        if self.is_empty:
            return None
        return self._pages[self._current - 1]

    @property
    def current_offset(self) -> int | None:
        page = self.current_page
        return page.start if page else None

    def current_snippet(self) -> str:
        page = self.current_page
        if page is None:
            return ""
        return normalize_whitespace(page.text)[: self.config.snippet_length]

    # -- layout --------------------------------------------------------------

    def set_font_size(self, font_size: float) -> NavigationResult:
        return self._apply(self._settings.with_font_size(font_size, self.config))

    def set_line_height(self, line_height: float) -> NavigationResult:
        return self._apply(self._settings.with_line_height(line_height, self.config))

    def resize(self, width: float, height: float) -> NavigationResult:
        return self._apply(self._settings.with_viewport(width, height))

    def _apply(self, settings: LayoutSettings) -> NavigationResult:
        if settings == self._settings:
            return self._result()
        self._settings = settings
        self._repaginate()
        return self._result()

    def _repaginate(self) -> None:
        offset = self.current_offset
        self._budget = self._settings.to_budget(self.config)
        pages = paginate(self.text, self._budget, metrics_hook=self.metrics_hook)
        self._pages = pages

        index = None
        if offset is not None:
            index = locate_offset(pages, offset, tolerance=self.config.locator_tolerance)
        if index is not None:
            self._current = index + 1
        else:
            self._current = clamp_page_number(self._current, len(pages))

        logger.info(
            "Document %s paginated into %d pages (chars_per_page=%d), at page %d",
            self.document_id,
            len(pages),
            self._budget.capacity,
            self._current,
        )

    # -- navigation ----------------------------------------------------------

    def go_to_page(self, page_number: int) -> NavigationResult:
        target = clamp_page_number(page_number, self.total_pages)
        if self.is_empty or target == self._current:
            return self._result()
        self._current = target
        return self._result(progress=self._progress())

    def next_page(self) -> NavigationResult:
        if self._current >= self.total_pages:
            return self._result()
        return self.go_to_page(self._current + 1)

    def prev_page(self) -> NavigationResult:
        if self._current <= 1:
            return self._result()
        return self.go_to_page(self._current - 1)

    # -- anchors -------------------------------------------------------------

    def bookmark_anchor(self) -> Anchor | None:
        """Anchor for the current page, or None when there is no content."""
        page = self.current_page
        if page is None:
            return None
        return Anchor(offset=page.start, snippet=self.current_snippet() or None)

    def go_to_anchor(self, anchor: Anchor) -> NavigationResult | None:
        """Navigate to a stored anchor. None if it cannot be placed."""
        index = locate(
            self._pages,
            anchor,
            tolerance=self.config.locator_tolerance,
            min_snippet_chars=self.config.min_snippet_chars,
            metrics_hook=self.metrics_hook,
        )
        if index is None:
            return None
        return self.go_to_page(index + 1)

    # -- helpers -------------------------------------------------------------

    def _result(self, progress: ProgressUpdate | None = None) -> NavigationResult:
        return NavigationResult(
            page_number=self._current,
            total_pages=self.total_pages,
            progress=progress,
        )

    def _progress(self) -> ProgressUpdate:
        page = self._pages[self._current - 1]
        fraction = self._current / self.total_pages
        source_page = self.text.source_page_at(page.start)
        if source_page is None and self.source_page_count:
            source_page = math.ceil(fraction * self.source_page_count)
        return ProgressUpdate(
            document_id=self.document_id,
            offset=page.start,
            page_number=self._current,
            total_pages=self.total_pages,
            fraction=fraction,
            source_page=source_page,
        )
