# src/reflow_kit/config.py

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReaderConfig:
    """Reader tuning knobs.

    Immutable. Explicit. No magic defaults from environment.
    """

    default_font_size: int = 18
    min_font_size: int = 12
    max_font_size: int = 32
    default_line_height: float = 1.8
    min_line_height: float = 1.2
    max_line_height: float = 2.5

    min_chars_per_page: int = 100
    min_block_chars: int = 10  # blocks this short or shorter are dropped

    locator_tolerance: int = 1000
    min_snippet_chars: int = 10
    snippet_length: int = 100

    def __post_init__(self) -> None:
        if self.min_chars_per_page <= 0:
            raise ValueError("min_chars_per_page must be > 0")
        if self.min_font_size > self.max_font_size:
            raise ValueError("min_font_size must be <= max_font_size")
        if self.min_line_height > self.max_line_height:
            raise ValueError("min_line_height must be <= max_line_height")
        if self.locator_tolerance < 0:
            raise ValueError("locator_tolerance must be >= 0")


DEFAULT_CONFIG = ReaderConfig()


def load_reader_config(path: str | Path) -> ReaderConfig:
    """Load a ReaderConfig from a YAML mapping.

    Missing keys keep their defaults. Unknown keys are rejected.

    Raises:
        ValueError: If the file is not a mapping or holds unknown keys.
    """
    logger.info("Loading reader config from %s", path)
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return ReaderConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Reader config must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(ReaderConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown reader config keys: {', '.join(unknown)}")

    return ReaderConfig(**data)
