"""Core module for tpadmin lesson and config sync."""

from core.document_store import DocumentStore
from core.lesson_parser import Lesson, parse_lessons, parse_words
from core.lesson_syncer import LessonSyncer, SyncOrdering, SyncResult

__all__ = [
    "DocumentStore",
    "Lesson",
    "parse_lessons",
    "parse_words",
    "LessonSyncer",
    "SyncOrdering",
    "SyncResult",
]
