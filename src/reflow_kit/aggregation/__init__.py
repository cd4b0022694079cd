from .aggregator import (
    PARAGRAPH_DELIMITER,
    BlockSpan,
    LogicalText,
    aggregate,
    clean_block,
)

__all__ = [
    "PARAGRAPH_DELIMITER",
    "BlockSpan",
    "LogicalText",
    "aggregate",
    "clean_block",
]
