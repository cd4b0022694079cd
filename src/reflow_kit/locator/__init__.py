from .anchor import Anchor
from .locator import locate, locate_offset, locate_snippet, normalize_whitespace

__all__ = [
    "Anchor",
    "locate",
    "locate_offset",
    "locate_snippet",
    "normalize_whitespace",
]
