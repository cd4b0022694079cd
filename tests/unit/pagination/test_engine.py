import math

import pytest

from reflow_kit.aggregation.aggregator import aggregate
from reflow_kit.observability import names
from reflow_kit.observability.base import InMemoryMetricsHook
from reflow_kit.pagination.budget import InvalidBudgetError, LayoutBudget
from reflow_kit.pagination.engine import clamp_page_number, paginate
from reflow_kit.pagination.paragraphs import ParagraphKind

_FILLER = "lorem ipsum dolor sit amet " * 200


def _body(length: int) -> str:
    """Lowercase words without sentence breaks, exactly ``length`` chars."""
    return _FILLER[: length - 1] + "x"


def _sentences(count: int) -> str:
    return " ".join(f"Sentence number {i} says something." for i in range(count))


@pytest.fixture
def book() -> str:
    paragraphs = [
        "PROLOGUE",
        _sentences(3),
        "CHAPTER ONE",
        _sentences(12),
        _body(180),
        _body(90),
        _sentences(40),
        "CHAPTER TWO",
        _body(2500),
        _sentences(5),
    ]
    return "\n\n".join(paragraphs)


class TestPaginate:
    def test_end_to_end_example(self) -> None:
        """A title followed by an oversize body paragraph."""
        third = _body(50)
        text = "INTRODUCTION\n\n" + _body(300) + "\n\n" + third

        pages = paginate(text, LayoutBudget(chars_per_page=200))

        assert len(pages) == 4
        assert pages[0].content == ("INTRODUCTION",)
        assert (pages[0].start, pages[0].end) == (0, 13)

        chunks = pages[1:3]
        assert all(len(p.content) == 1 for p in chunks)
        assert all(len(p.content[0]) <= 200 for p in chunks)
        assert " ".join(p.content[0] for p in chunks) == _body(300)
        assert chunks[0].start == 14
        assert chunks[1].end == 14 + 300

        # The short paragraph after a split chunk gets its own page.
        assert pages[3].content == (third,)

    def test_is_deterministic(self, book: str) -> None:
        budget = LayoutBudget(chars_per_page=600)

        assert paginate(book, budget) == paginate(book, budget)

    def test_returns_new_list_each_call(self, book: str) -> None:
        budget = LayoutBudget(chars_per_page=600)

        assert paginate(book, budget) is not paginate(book, budget)

    def test_pages_are_numbered_in_order(self, book: str) -> None:
        pages = paginate(book, LayoutBudget(chars_per_page=400))

        assert [p.index for p in pages] == list(range(len(pages)))

    @pytest.mark.parametrize("chars_per_page", [1, 150, 400, 1368, 5000])
    def test_starts_strictly_increase(self, book: str, chars_per_page: int) -> None:
        pages = paginate(book, LayoutBudget(chars_per_page=chars_per_page))

        for prev, nxt in zip(pages, pages[1:]):
            assert prev.start < nxt.start

    @pytest.mark.parametrize("chars_per_page", [1, 150, 400, 1368, 5000])
    def test_pages_cover_the_whole_text(self, book: str, chars_per_page: int) -> None:
        pages = paginate(book, LayoutBudget(chars_per_page=chars_per_page))

        assert pages[0].start == 0
        assert pages[-1].end == len(book)
        for prev, nxt in zip(pages, pages[1:]):
            assert 0 < nxt.start - prev.end <= 2

    def test_page_ranges_match_content(self, book: str) -> None:
        for page in paginate(book, LayoutBudget(chars_per_page=300)):
            assert book[page.start :].startswith(page.content[0])
            if len(page.content) == 1:
                assert book[page.start : page.start + len(page.content[0])] == page.content[0]

    def test_minimum_budget_terminates(self) -> None:
        text = _body(5000)

        pages = paginate(text, LayoutBudget(chars_per_page=1))

        # Word-boundary cuts land past half the floored budget.
        assert math.ceil(5000 / 100) <= len(pages) <= 5000 // 50
        assert all(len(p.text) <= 100 for p in pages)

    def test_title_never_shares_page_with_preceding_content(self, book: str) -> None:
        for budget in (300, 1368, 100_000):
            for page in paginate(book, LayoutBudget(chars_per_page=budget)):
                kinds = [e.kind for e in page.elements]
                assert ParagraphKind.TITLE not in kinds[1:]

    def test_title_starts_new_page(self) -> None:
        text = "Some introductory text before the chapter.\n\nCHAPTER ONE\n\nBody text."

        pages = paginate(text, LayoutBudget(chars_per_page=1000))

        assert [p.content for p in pages] == [
            ("Some introductory text before the chapter.",),
            ("CHAPTER ONE", "Body text."),
        ]
        assert pages[0].end == text.index("CHAPTER ONE") - 1

    def test_leading_title_does_not_force_break(self) -> None:
        text = "CHAPTER ONE\n\nIt was a dark and stormy night."

        pages = paginate(text, LayoutBudget(chars_per_page=1000))

        assert len(pages) == 1
        assert pages[0].content == ("CHAPTER ONE", "It was a dark and stormy night.")

    def test_capacity_counts_paragraph_spacing(self) -> None:
        """Each paragraph costs its length plus 50."""
        paragraphs = [_body(60) for _ in range(4)]

        pages = paginate("\n\n".join(paragraphs), LayoutBudget(chars_per_page=200))

        # 110 + 60 fits, 220 + 60 does not
        assert [len(p.content) for p in pages] == [2, 2]

    def test_overflowing_paragraph_starts_new_page(self) -> None:
        paragraphs = [_body(80) for _ in range(3)]

        pages = paginate("\n\n".join(paragraphs), LayoutBudget(chars_per_page=200))

        assert [len(p.content) for p in pages] == [1, 1, 1]

    def test_oversize_paragraph_without_boundaries(self) -> None:
        text = "x" * 1000

        pages = paginate(text, LayoutBudget(chars_per_page=200))

        assert len(pages) == 5
        assert all(len(p.content[0]) == 200 for p in pages)
        assert [(p.start, p.end) for p in pages] == [
            (0, 200),
            (200, 400),
            (400, 600),
            (600, 800),
            (800, 1000),
        ]

    def test_oversize_split_prefers_sentence_boundary(self) -> None:
        text = _sentences(20)

        pages = paginate(text, LayoutBudget(chars_per_page=200))

        assert len(pages) > 1
        for page in pages[:-1]:
            assert page.content[0].endswith(".")
            assert len(page.content[0]) <= 200
            assert len(page.content[0]) > 100

    def test_oversize_split_falls_back_to_word_boundary(self) -> None:
        text = _body(1000)

        pages = paginate(text, LayoutBudget(chars_per_page=200))

        for page in pages[:-1]:
            chunk = page.content[0]
            assert 100 < len(chunk) <= 200
            # Cut at a space, so the next chunk starts a new word.
            assert text[page.end] == " "

    def test_oversize_split_ignores_early_boundaries(self) -> None:
        """Boundaries before half the budget are not used."""
        text = "Short one. " + "y" * 400

        pages = paginate(text, LayoutBudget(chars_per_page=200))

        assert len(pages[0].content[0]) == 200

    def test_pending_content_is_flushed_before_oversize_split(self) -> None:
        text = "A short opening paragraph.\n\n" + "z" * 450

        pages = paginate(text, LayoutBudget(chars_per_page=200))

        assert pages[0].content == ("A short opening paragraph.",)
        assert [len(p.content[0]) for p in pages[1:]] == [200, 200, 50]

    def test_drops_degenerate_pages(self) -> None:
        text = "abc\n\nCHAPTER ONE\n\nThe story begins here."

        pages = paginate(text, LayoutBudget(chars_per_page=1000))

        assert len(pages) == 1
        assert pages[0].index == 0
        assert pages[0].content[0] == "CHAPTER ONE"

    def test_empty_text_gives_no_pages(self) -> None:
        assert paginate("", LayoutBudget(chars_per_page=500)) == []
        assert paginate(aggregate(["", " "]), LayoutBudget(chars_per_page=500)) == []

    def test_accepts_logical_text(self) -> None:
        text = aggregate(["First page has some text.", "Second page has more text."])

        pages = paginate(text, LayoutBudget(chars_per_page=1000))

        assert pages[0].content == (
            "First page has some text.",
            "Second page has more text.",
        )

    def test_split_chunk_elements_are_classified_on_trimmed_text(self) -> None:
        text = "A" * 150 + " " + "THE END"

        pages = paginate(text, LayoutBudget(chars_per_page=150))

        assert pages[-1].content == ("THE END",)
        assert pages[-1].elements[0].kind is ParagraphKind.TITLE

    def test_rejects_non_budget(self) -> None:
        with pytest.raises(InvalidBudgetError):
            paginate("Some text here.", 500)  # type: ignore[arg-type]

    def test_records_metrics(self) -> None:
        hook = InMemoryMetricsHook()

        pages = paginate("x" * 1000, LayoutBudget(chars_per_page=200), metrics_hook=hook)

        assert hook.counters[names.PAGINATION_PAGES_CREATED] == len(pages)
        assert hook.counters[names.PAGINATION_SPLIT_CHUNKS] == 5
        assert hook.gauges[names.PAGINATION_CHARS_PER_PAGE] == 200
        assert hook.latencies[0][0] == names.PAGINATION_DURATION


class TestClampPageNumber:
    @pytest.mark.parametrize(
        ("current", "total", "expected"),
        [(2, 3, 2), (5, 3, 3), (0, 3, 1), (-4, 3, 1), (4, 0, 1)],
    )
    def test_clamps_into_range(self, current: int, total: int, expected: int) -> None:
        assert clamp_page_number(current, total) == expected
