import math
from dataclasses import dataclass, replace

from reflow_kit.config import DEFAULT_CONFIG, ReaderConfig

MIN_CHARS_PER_PAGE = 100

# Chrome around the text column.
_RESERVED_HEIGHT = 80
_RESERVED_WIDTH = 100
_MAX_COLUMN_WIDTH = 700
_RESERVED_LINES = 2

_GLYPH_WIDTH_RATIO = 0.55
_FILL_RATE = 0.85


class InvalidBudgetError(ValueError):
    """A layout budget that pagination refuses to run with."""


@dataclass(frozen=True)
class LayoutBudget:
    """Maximum characters one virtual page may hold.

    Positive values below ``min_chars_per_page`` are accepted but
    paginated at the minimum (see ``capacity``).
    """

    chars_per_page: int
    min_chars_per_page: int = MIN_CHARS_PER_PAGE

    def __post_init__(self) -> None:
        for name in ("chars_per_page", "min_chars_per_page"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidBudgetError(
                    f"{name} must be an int, got {type(value).__name__}"
                )
            if value <= 0:
                raise InvalidBudgetError(f"{name} must be > 0, got {value}")

    @property
    def capacity(self) -> int:
        return max(self.chars_per_page, self.min_chars_per_page)


@dataclass(frozen=True)
class LayoutSettings:
    """Font and viewport parameters a LayoutBudget is derived from."""

    font_size: float = DEFAULT_CONFIG.default_font_size
    line_height: float = DEFAULT_CONFIG.default_line_height
    viewport_width: float = 800
    viewport_height: float = 900

    def __post_init__(self) -> None:
        for name in ("font_size", "line_height", "viewport_width", "viewport_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidBudgetError(
                    f"{name} must be a number, got {type(value).__name__}"
                )
            if not math.isfinite(value):
                raise InvalidBudgetError(f"{name} must be finite, got {value}")
        if self.font_size <= 0:
            raise InvalidBudgetError(f"font_size must be > 0, got {self.font_size}")
        if self.line_height <= 0:
            raise InvalidBudgetError(f"line_height must be > 0, got {self.line_height}")

    def to_budget(self, config: ReaderConfig = DEFAULT_CONFIG) -> LayoutBudget:
        """Estimate how many characters fit on one screen.

        Viewports too small to fit anything still get the minimum budget.
        """
        height = self.viewport_height - _RESERVED_HEIGHT
        width = min(_MAX_COLUMN_WIDTH, self.viewport_width - _RESERVED_WIDTH)

        chars_per_line = math.floor(width / (self.font_size * _GLYPH_WIDTH_RATIO))
        lines_per_page = (
            math.floor(height / (self.font_size * self.line_height)) - _RESERVED_LINES
        )
        chars = math.floor(chars_per_line * lines_per_page * _FILL_RATE)

        # Two negative factors must not produce a positive budget.
        if chars_per_line <= 0 or lines_per_page <= 0:
            chars = 0

        return LayoutBudget(
            chars_per_page=max(chars, config.min_chars_per_page),
            min_chars_per_page=config.min_chars_per_page,
        )

    def with_font_size(
        self, font_size: float, config: ReaderConfig = DEFAULT_CONFIG
    ) -> "LayoutSettings":
        clamped = max(config.min_font_size, min(config.max_font_size, font_size))
        return replace(self, font_size=clamped)

    def with_line_height(
        self, line_height: float, config: ReaderConfig = DEFAULT_CONFIG
    ) -> "LayoutSettings":
        clamped = max(config.min_line_height, min(config.max_line_height, line_height))
        return replace(self, line_height=clamped)

    def with_viewport(self, width: float, height: float) -> "LayoutSettings":
        return replace(self, viewport_width=width, viewport_height=height)
