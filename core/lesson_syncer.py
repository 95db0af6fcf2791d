"""Full-replace sync of lessons into the document store.

Every upload replaces the whole lessons collection:
1. Delete: enumerate existing documents and delete them in batches
2. Insert: write every lesson under a freshly generated document id

The lesson's own "id" field is data; the storage key is always generated.
Each batch commit is atomic, but nothing is atomic across batches or
across the delete/insert boundary.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, TypeVar

from config.settings import get_settings
from core.document_store import DocumentStore, new_document_id
from core.exceptions import SyncError, TpAdminError
from core.lesson_parser import Lesson

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SyncOrdering(str, Enum):
    """How the delete and insert phases are scheduled.

    SEQUENTIAL waits for the delete phase before inserting, so a failed
    delete never leaves old and new lessons side by side. CONCURRENT
    commits deletes on a worker thread while inserts run; both finish
    before sync returns, but their relative order is not guaranteed.
    """

    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"


@dataclass
class SyncResult:
    """Result of a sync operation.

    Attributes:
        deleted: Number of existing documents deleted.
        inserted: Number of lessons written.
        batches: Number of batch commits issued.
        duration_ms: Total sync duration in milliseconds.
        ordering: Phase ordering used.
    """

    deleted: int
    inserted: int
    batches: int
    duration_ms: int
    ordering: SyncOrdering = SyncOrdering.SEQUENTIAL


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most size items."""
    for start in range(0, len(items), size):
        yield items[start:start + size]


class LessonSyncer:
    """Replaces the remote lessons collection with a parsed lesson set."""

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        """Initialize syncer with dependencies.

        Args:
            store: Optional document store (defaults to a new DocumentStore).
        """
        self._settings = get_settings()
        self._store = store or DocumentStore()

    @property
    def collection(self) -> str:
        """Get the lessons collection name from settings."""
        return self._settings.lessons_collection

    def _commit_deletes(self, doc_ids: list[str]) -> tuple[int, int]:
        """Delete documents in batches.

        Args:
            doc_ids: Existing document ids.

        Returns:
            Tuple of (documents deleted, batches committed).

        Raises:
            SyncError: If a batch commit fails.
        """
        deleted = 0
        batches = 0
        for chunk in chunked(doc_ids, self._settings.sync_batch_size):
            batch = self._store.batch(self.collection)
            for doc_id in chunk:
                batch.delete(doc_id)
            try:
                deleted += batch.commit()
            except TpAdminError:
                raise
            except Exception as e:
                raise SyncError(f"Failed to delete lessons: {e}") from e
            batches += 1
        return deleted, batches

    def _commit_inserts(self, lessons: Sequence[Lesson]) -> tuple[int, int]:
        """Write lessons in batches under generated ids.

        An empty lesson set still commits one (empty) batch.

        Args:
            lessons: Lessons to write.

        Returns:
            Tuple of (lessons written, batches committed).

        Raises:
            SyncError: If a batch commit fails.
        """
        inserted = 0
        batches = 0
        for chunk in list(chunked(lessons, self._settings.sync_batch_size)) or [[]]:
            batch = self._store.batch(self.collection)
            for lesson in chunk:
                batch.set(new_document_id(), lesson.to_document())
            try:
                inserted += batch.commit()
            except TpAdminError:
                raise
            except Exception as e:
                raise SyncError(f"Failed to upload lessons: {e}") from e
            batches += 1
            logger.debug(f"Committed {inserted}/{len(lessons)} lessons")
        return inserted, batches

    def sync_lessons(
        self,
        lessons: Sequence[Lesson],
        ordering: Optional[SyncOrdering] = None,
    ) -> SyncResult:
        """Replace the lessons collection with the given lessons.

        Args:
            lessons: Parsed lessons to upload.
            ordering: Phase ordering (defaults to SEQUENTIAL).

        Returns:
            SyncResult with statistics.

        Raises:
            SyncError: If listing or any batch commit fails.
        """
        ordering = ordering or SyncOrdering.SEQUENTIAL
        start_time = time.time()

        # Existing ids are listed up front so CONCURRENT never deletes new lessons
        try:
            existing = self._store.list_document_ids(self.collection)
        except TpAdminError:
            raise
        except Exception as e:
            raise SyncError(f"Failed to list existing lessons: {e}") from e

        logger.info(f"Deleting {len(existing)} documents from {self.collection}...")
        logger.info(f"Uploading {len(lessons)} lessons ({ordering.value})...")

        if ordering is SyncOrdering.SEQUENTIAL:
            deleted, delete_batches = self._commit_deletes(existing)
            inserted, insert_batches = self._commit_inserts(lessons)
        else:
            with ThreadPoolExecutor(max_workers=1) as executor:
                delete_future = executor.submit(self._commit_deletes, existing)
                inserted, insert_batches = self._commit_inserts(lessons)
                deleted, delete_batches = delete_future.result()

        duration_ms = int((time.time() - start_time) * 1000)

        return SyncResult(
            deleted=deleted,
            inserted=inserted,
            batches=delete_batches + insert_batches,
            duration_ms=duration_ms,
            ordering=ordering,
        )
