from .progress import ProgressReporter, ProgressSink, ProgressUpdate
from .reader import NavigationResult, ReaderSession

__all__ = [
    "NavigationResult",
    "ProgressReporter",
    "ProgressSink",
    "ProgressUpdate",
    "ReaderSession",
]
