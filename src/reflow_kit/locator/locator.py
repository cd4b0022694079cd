import logging
import re
from collections.abc import Sequence

from reflow_kit.observability import names
from reflow_kit.observability.base import MetricsHook, NoOpMetricsHook
from reflow_kit.pagination.models import VirtualPage

from .anchor import Anchor

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1000
MIN_SNIPPET_CHARS = 10

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def locate_offset(
    pages: Sequence[VirtualPage],
    offset: int,
    *,
    tolerance: int = DEFAULT_TOLERANCE,
) -> int | None:
    """Index of the page holding ``offset``, or of the nearest page.

    Split-chunk ranges can leave small gaps, so an offset that no page
    contains resolves to the page whose range is closest, provided it is
    less than ``tolerance`` characters away. Ties go to the earlier page.
    """
    found: int | None = None
    for i, page in enumerate(pages):
        if page.start > offset:
            # Pages are ordered by start; nothing later can contain it.
            break
        if page.contains(offset):
            # Hard-cut chunks share a bound; the page starting there wins.
            found = i
    if found is not None:
        return found

    best: int | None = None
    best_distance = 0
    for i, page in enumerate(pages):
        distance = page.distance_to(offset)
        if best is None or distance < best_distance:
            best, best_distance = i, distance

    if best is None or best_distance >= tolerance:
        return None
    return best


def locate_snippet(
    pages: Sequence[VirtualPage],
    snippet: str,
    *,
    min_chars: int = MIN_SNIPPET_CHARS,
) -> int | None:
    """Index of the first page whose text contains ``snippet``.

    Whitespace is normalised on both sides. Snippets shorter than
    ``min_chars`` are too ambiguous to match.
    """
    needle = normalize_whitespace(snippet)
    if len(needle) < min_chars:
        return None
    for i, page in enumerate(pages):
        if needle in normalize_whitespace(page.text):
            return i
    return None


def locate(
    pages: Sequence[VirtualPage],
    anchor: Anchor,
    *,
    tolerance: int = DEFAULT_TOLERANCE,
    min_snippet_chars: int = MIN_SNIPPET_CHARS,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> int | None:
    """Resolve an anchor against the current page list.

    Returns the page index, or None when the anchor cannot be placed.
    The snippet is consulted only when there is no offset or the offset
    misses.
    """
    index: int | None = None
    by = "offset"

    if anchor.offset is not None:
        index = locate_offset(pages, anchor.offset, tolerance=tolerance)
    if index is None and anchor.snippet:
        by = "snippet"
        index = locate_snippet(pages, anchor.snippet, min_chars=min_snippet_chars)

    if index is None:
        metrics_hook.increment(names.LOCATOR_MISSES_TOTAL, labels={"by": by})
        logger.debug("Anchor not found among %d pages: %s", len(pages), anchor)
    else:
        metrics_hook.increment(names.LOCATOR_HITS_TOTAL, labels={"by": by})
    return index
