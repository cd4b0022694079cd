from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from reflow_kit.aggregation.aggregator import PARAGRAPH_DELIMITER

TITLE_MAX_CHARS = 100
TITLE_UPPERCASE_RATIO = 0.7
_TITLE_MIN_LETTERS = 3


class ParagraphKind(str, Enum):
    TITLE = "title"
    BODY = "body"


def is_title(text: str) -> bool:
    """Short, mostly-uppercase text is treated as a heading.

    Callers pass trimmed text so the length check is not skewed by padding.
    """
    letters = [c for c in text if c.isalpha()]
    if len(letters) < _TITLE_MIN_LETTERS:
        return False
    upper = sum(1 for c in letters if c.isupper())
    return upper / len(letters) > TITLE_UPPERCASE_RATIO and len(text) < TITLE_MAX_CHARS


def classify(text: str) -> ParagraphKind:
    return ParagraphKind.TITLE if is_title(text.strip()) else ParagraphKind.BODY


@dataclass(frozen=True)
class Paragraph:
    text: str
    start_offset: int
    length: int
    kind: ParagraphKind

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.length

    @property
    def is_title(self) -> bool:
        return self.kind is ParagraphKind.TITLE


def split_paragraphs(text: str) -> Iterator[Paragraph]:
    """Yield the non-blank paragraphs of ``text`` in document order.

    Offsets come from a single forward scan over the delimiters, so each
    ``start_offset`` points at the first non-whitespace character of the
    paragraph in ``text``.
    """
    position = 0
    text_len = len(text)

    while position <= text_len:
        boundary = text.find(PARAGRAPH_DELIMITER, position)
        if boundary == -1:
            boundary = text_len

        segment = text[position:boundary]
        stripped = segment.strip()
        if stripped:
            leading = len(segment) - len(segment.lstrip())
            yield Paragraph(
                text=stripped,
                start_offset=position + leading,
                length=len(stripped),
                kind=classify(stripped),
            )

        position = boundary + len(PARAGRAPH_DELIMITER)
