# Aggregation
from .aggregation import LogicalText, aggregate

# Config
from .config import ReaderConfig, load_reader_config

# Locator
from .locator import Anchor, locate

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Pagination
from .pagination import (
    InvalidBudgetError,
    LayoutBudget,
    LayoutSettings,
    VirtualPage,
    paginate,
)

# Parsers
from .parsers import ExtractedDocument, PdfTextExtractor, RawTextBlock

# Session
from .session import (
    NavigationResult,
    ProgressReporter,
    ProgressUpdate,
    ReaderSession,
)

__all__ = [
    # Aggregation
    "LogicalText",
    "aggregate",
    # Config
    "ReaderConfig",
    "load_reader_config",
    # Locator
    "Anchor",
    "locate",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Pagination
    "InvalidBudgetError",
    "LayoutBudget",
    "LayoutSettings",
    "VirtualPage",
    "paginate",
    # Parsers
    "ExtractedDocument",
    "PdfTextExtractor",
    "RawTextBlock",
    # Session
    "NavigationResult",
    "ProgressReporter",
    "ProgressUpdate",
    "ReaderSession",
]
