"""Line-oriented parsing of lesson files and word lists.

Lesson files are plain text:

    #1|Home row
    asdf jkl;
    fdsa ;lkj
    #3|Words
    hello world

Lines starting with "#" are headers carrying "category|title"; every other
non-blank line is one lesson attributed to the most recent header.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional

from core.exceptions import ParseError


logger = logging.getLogger(__name__)


HEADER_MARKER = "#"
FIELD_DELIMITER = "|"
LESSON_TYPE = "default"

# Categories starting with these get a flat bonus instead of a length bonus
FLAT_BONUS_PREFIXES = ("1", "2")
FLAT_BONUS_POINTS = 30

MIN_WORD_LENGTH = 3


@dataclass(frozen=True)
class Lesson:
    """A single lesson parsed from a content line.

    Attributes:
        id: Sequential position within the file, starting at 0.
        category: Category from the governing header.
        title: Title from the governing header.
        content: Trimmed lesson text.
        bonus_points: Points awarded for completing the lesson.
        type: Lesson type tag.
    """

    id: int
    category: str
    title: str
    content: str
    bonus_points: int
    type: str = LESSON_TYPE

    def to_document(self) -> dict:
        """Serialize to the remote document shape."""
        return {
            "id": self.id,
            "type": self.type,
            "category": self.category,
            "title": self.title,
            "content": self.content,
            "bonusPoints": self.bonus_points,
        }


class ParserState(NamedTuple):
    """Accumulator threaded through the fold over lesson lines."""

    category: Optional[str] = None
    title: Optional[str] = None
    next_id: int = 0


def bonus_points(category: str, content: str) -> int:
    """Compute bonus points for a lesson.

    Args:
        category: Lesson category.
        content: Trimmed lesson content.

    Returns:
        30 for categories starting with "1" or "2", else content length.
    """
    if category.startswith(FLAT_BONUS_PREFIXES):
        return FLAT_BONUS_POINTS
    return len(content)


def parse_header(line: str, line_number: Optional[int] = None) -> tuple[str, str]:
    """Split a header line into (category, title).

    Args:
        line: Raw header line, including the leading marker.
        line_number: Line number for error reporting.

    Returns:
        Trimmed (category, title). Title may be empty; fields after
        the title are ignored.

    Raises:
        ParseError: If the delimiter is missing.
    """
    parts = line[len(HEADER_MARKER):].split(FIELD_DELIMITER)
    if len(parts) < 2:
        raise ParseError(
            f"malformed header {line.strip()!r}: expected 'category{FIELD_DELIMITER}title'",
            line_number,
        )
    return parts[0].strip(), parts[1].strip()


def step(
    state: ParserState, line: str, line_number: Optional[int] = None
) -> tuple[ParserState, Optional[Lesson]]:
    """Advance the parser by one line.

    Args:
        state: Current header state and next id.
        line: Raw line without its line terminator.
        line_number: Line number for error reporting.

    Returns:
        Tuple of (new state, lesson emitted by this line or None).

    Raises:
        ParseError: On a malformed header or content before any header.
    """
    if not line.strip():
        return state, None

    if line.startswith(HEADER_MARKER):
        category, title = parse_header(line, line_number)
        return state._replace(category=category, title=title), None

    if state.category is None:
        raise ParseError("content before header", line_number)

    content = line.strip()
    lesson = Lesson(
        id=state.next_id,
        category=state.category,
        title=state.title,
        content=content,
        bonus_points=bonus_points(state.category, content),
    )
    return state._replace(next_id=state.next_id + 1), lesson


def iter_lessons(lines: Iterable[str]) -> Iterator[Lesson]:
    """Lazily parse lessons from an iterable of lines.

    Args:
        lines: Lines of a lesson file; trailing newlines are ignored.

    Yields:
        Lessons in file order with ids starting at 0.
    """
    state = ParserState()
    for line_number, line in enumerate(lines, start=1):
        state, lesson = step(state, line.rstrip("\r\n"), line_number)
        if lesson is not None:
            yield lesson


def parse_lessons(file_path: str) -> list[Lesson]:
    """Read and parse a lesson file.

    The file is streamed line by line. Relative paths resolve against the
    current working directory.

    Args:
        file_path: Path to the lesson file.

    Returns:
        List of parsed lessons.

    Raises:
        ParseError: If the file is missing or malformed.
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise ParseError(f"lesson file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        lessons = list(iter_lessons(f))

    logger.debug(f"Parsed {len(lessons)} lessons from {path}")
    return lessons


def parse_words(file_path: str) -> list[str]:
    """Read a word list, one word per line.

    Args:
        file_path: Path to the word list.

    Returns:
        Trimmed words longer than two characters, in file order.

    Raises:
        ParseError: If the file is missing.
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise ParseError(f"word list not found: {path}")

    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if len(word) >= MIN_WORD_LENGTH:
                words.append(word)
    return words


def sort_words(words: Iterable[str]) -> list[str]:
    """Sort words alphabetically, then (stably) by length."""
    return sorted(sorted(words), key=len)
