import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from reflow_kit.observability import names
from reflow_kit.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressUpdate:
    """Reading position to persist after a page change."""

    document_id: str
    offset: int
    page_number: int
    total_pages: int
    fraction: float
    source_page: int | None  # page of the source document, when known


class ProgressSink(Protocol):
    async def save_progress(self, update: ProgressUpdate) -> None: ...


class ProgressReporter:
    """Best-effort delivery of ProgressUpdates to a sink.

    Sink failures are logged and counted, never raised: losing a progress
    write must not block or break navigation.
    """

    def __init__(
        self,
        sink: ProgressSink,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.sink = sink
        self.metrics_hook = metrics_hook
        self._pending: set[asyncio.Task[bool]] = set()

    async def report(self, update: ProgressUpdate) -> bool:
        try:
            await self.sink.save_progress(update)
        except Exception:
            logger.warning(
                "Failed to save progress for document %s at offset %d",
                update.document_id,
                update.offset,
                exc_info=True,
            )
            self.metrics_hook.increment(names.PROGRESS_ERRORS_TOTAL)
            return False

        self.metrics_hook.increment(names.PROGRESS_UPDATES_TOTAL)
        logger.debug(
            "Saved progress for document %s: page %d/%d",
            update.document_id,
            update.page_number,
            update.total_pages,
        )
        return True

    def dispatch(self, update: ProgressUpdate | None) -> "asyncio.Task[bool] | None":
        """Fire-and-forget ``report``. Must be called from a running loop."""
        if update is None:
            return None
        task = asyncio.get_running_loop().create_task(self.report(update))
        # The loop only keeps weak references to tasks.
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every dispatched report to finish."""
        if self._pending:
            await asyncio.gather(*self._pending)
