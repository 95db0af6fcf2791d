"""Word list grouping for the typing-practice word display.

Presentation only: words are split per starting letter, bucketed by
length, and wrapped into short rows.
"""

import string
from dataclasses import dataclass
from typing import Iterable


MAX_WORD_LENGTH = 8
WORDS_PER_ROW = 6
MAX_ROWS = 12
ROW_SEPARATOR = "<br>"


@dataclass
class WordBlock:
    """Display block for one letter and word length.

    Attributes:
        letter: Lowercase starting letter.
        length: Length shared by every word in the block.
        rows: Rows of capitalized words joined by spaces.
    """

    letter: str
    length: int
    rows: list[str]

    @property
    def text(self) -> str:
        """Rows joined with the line-break marker."""
        return ROW_SEPARATOR.join(self.rows)


def capitalize_first(word: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def group_by_length(words: Iterable[str]) -> dict[int, list[str]]:
    """Group words by length, keeping first-seen bucket order."""
    buckets: dict[int, list[str]] = {}
    for word in words:
        buckets.setdefault(len(word), []).append(word)
    return buckets


def wrap_rows(words: list[str]) -> list[str]:
    """Chunk words into rows of WORDS_PER_ROW, at most MAX_ROWS rows."""
    rows = []
    for start in range(0, len(words), WORDS_PER_ROW):
        if len(rows) >= MAX_ROWS:
            break
        chunk = words[start:start + WORDS_PER_ROW]
        rows.append(" ".join(capitalize_first(w) for w in chunk))
    return rows


def format_word_blocks(words: list[str]) -> list[WordBlock]:
    """Build display blocks for letters a-z.

    Matching on the first character is case-sensitive, so words starting
    with an uppercase letter never appear. Buckets for words longer than
    MAX_WORD_LENGTH are dropped.

    Args:
        words: Word list, normally already sorted.

    Returns:
        Blocks ordered by letter, then by bucket encounter order.
    """
    blocks = []
    for letter in string.ascii_lowercase:
        matching = [w for w in words if w[:1] == letter]
        for length, bucket in group_by_length(matching).items():
            if length > MAX_WORD_LENGTH:
                continue
            blocks.append(WordBlock(letter=letter, length=length, rows=wrap_rows(bucket)))
    return blocks


def render_word_blocks(blocks: list[WordBlock]) -> str:
    """Render blocks as console text, one heading line per block."""
    lines = []
    for block in blocks:
        lines.append(f"{block.letter.upper()} ({block.length} letters)")
        lines.append(block.text)
    return "\n".join(lines)
