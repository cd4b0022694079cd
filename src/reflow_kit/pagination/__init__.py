"""Reflow pagination for continuously extracted document text.

Example:
    >>> from reflow_kit.aggregation import aggregate
    >>> from reflow_kit.pagination import LayoutSettings, paginate
    >>>
    >>> text = aggregate(["First page text ...", "Second page text ..."])
    >>> budget = LayoutSettings(font_size=18, viewport_width=800).to_budget()
    >>> pages = paginate(text, budget)
"""

from .budget import MIN_CHARS_PER_PAGE, InvalidBudgetError, LayoutBudget, LayoutSettings
from .engine import clamp_page_number, paginate
from .models import PageElement, VirtualPage
from .paragraphs import Paragraph, ParagraphKind, classify, is_title, split_paragraphs

__all__ = [
    # Engine
    "paginate",
    "clamp_page_number",
    # Budget
    "MIN_CHARS_PER_PAGE",
    "InvalidBudgetError",
    "LayoutBudget",
    "LayoutSettings",
    # Types
    "PageElement",
    "VirtualPage",
    "Paragraph",
    "ParagraphKind",
    "classify",
    "is_title",
    "split_paragraphs",
]
