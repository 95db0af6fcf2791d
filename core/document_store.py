"""Document store abstraction over Qdrant.

Qdrant is used as a payload-only document database: collections are
created without vectors and each document is a point whose payload is
the document body. The rest of tpadmin only sees four operations:

- Enumerate document ids in a collection
- Batch delete
- Batch insert with generated ids
- Set a document by fixed id
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional

from qdrant_client import QdrantClient
from qdrant_client.models import PointIdsList, PointStruct

from config.settings import get_settings
from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

SCROLL_PAGE_SIZE = 1000

# Namespace for mapping fixed document keys to stable point ids
DOCUMENT_KEY_NAMESPACE = uuid.UUID("5b1c7a8e-3f0d-4c62-9a57-2e8f4d1b6c30")


def document_key_to_id(key: str) -> str:
    """Map a fixed document key (e.g., "configs_id") to a stable point id."""
    return str(uuid.uuid5(DOCUMENT_KEY_NAMESPACE, key))


def new_document_id() -> str:
    """Allocate a fresh, system-generated document id."""
    return str(uuid.uuid4())


@dataclass
class WriteBatch:
    """Write operations staged against one collection.

    Nothing reaches the store until commit(). Deletes are committed
    before sets.

    Attributes:
        store: Store the batch commits to.
        collection: Unqualified collection name.
        deletes: Staged document ids to delete.
        sets: Staged (document id, payload) writes.
    """

    store: "DocumentStore"
    collection: str
    deletes: list[str] = field(default_factory=list)
    sets: list[tuple[str, dict]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.deletes) + len(self.sets)

    def delete(self, doc_id: str) -> None:
        """Stage a delete."""
        self.deletes.append(doc_id)

    def set(self, doc_id: str, payload: dict) -> None:
        """Stage a full-document write."""
        self.sets.append((doc_id, payload))

    def commit(self) -> int:
        """Send the staged writes.

        Returns:
            Number of operations written. An empty batch writes nothing.
        """
        return self.store.commit(self)


class DocumentStore:
    """Manages all document store operations for tpadmin.

    Provides a clean interface for:
    - Listing documents
    - Batched deletes and writes
    - Fixed-id documents
    """

    def __init__(self, client: Optional[QdrantClient] = None) -> None:
        """Initialize store with lazy client creation.

        Args:
            client: Optional pre-built client (used by tests).
        """
        self._settings = get_settings()
        self._client = client
        self._known_collections: set[str] = set()

    def _get_client(self) -> QdrantClient:
        """Get or create the store client.

        Returns:
            Configured QdrantClient instance.

        Raises:
            ConfigError: If neither emulator nor QDRANT_URL is configured.
        """
        if self._client is None:
            if not self._settings.is_store_configured():
                raise ConfigError(
                    "Document store not configured. Set QDRANT_URL or use --emulator."
                )
            url = self._settings.store_url()
            api_key = None if self._settings.use_emulator else (self._settings.qdrant_api_key or None)
            logger.debug("Connecting to document store at %s", url)
            self._client = QdrantClient(url=url, api_key=api_key)
        return self._client

    def collection_name(self, collection: str) -> str:
        """Get the namespaced name of a collection."""
        return self._settings.collection_name(collection)

    def ensure_collection_exists(self, collection: str) -> None:
        """Create a payload-only collection if it doesn't exist."""
        name = self.collection_name(collection)
        if name in self._known_collections:
            return

        client = self._get_client()
        collections = client.get_collections()
        exists = any(c.name == name for c in collections.collections)

        if not exists:
            logger.info("Creating collection: %s", name)
            client.create_collection(collection_name=name, vectors_config={})
        self._known_collections.add(name)

    def list_document_ids(self, collection: str) -> list[str]:
        """Enumerate every document id in a collection.

        Args:
            collection: Unqualified collection name.

        Returns:
            Document ids, in store order.
        """
        client = self._get_client()
        self.ensure_collection_exists(collection)

        ids: list[str] = []
        offset = None
        while True:
            points, offset = client.scroll(
                collection_name=self.collection_name(collection),
                limit=SCROLL_PAGE_SIZE,
                offset=offset,
                with_payload=False,
                with_vectors=False,
            )
            ids.extend(str(p.id) for p in points)
            if offset is None:
                break
        return ids

    def batch(self, collection: str) -> WriteBatch:
        """Start a new write batch against a collection."""
        return WriteBatch(store=self, collection=collection)

    def commit(self, batch: WriteBatch) -> int:
        """Commit a write batch.

        Args:
            batch: Staged writes.

        Returns:
            Number of operations written.
        """
        if not len(batch):
            return 0

        client = self._get_client()
        self.ensure_collection_exists(batch.collection)
        name = self.collection_name(batch.collection)

        if batch.deletes:
            client.delete(
                collection_name=name,
                points_selector=PointIdsList(points=list(batch.deletes)),
                wait=True,
            )
        if batch.sets:
            client.upsert(
                collection_name=name,
                points=[
                    PointStruct(id=doc_id, vector={}, payload=payload)
                    for doc_id, payload in batch.sets
                ],
                wait=True,
            )

        logger.debug(
            "Committed batch to %s: %d deletes, %d sets",
            name, len(batch.deletes), len(batch.sets),
        )
        return len(batch)

    def set_document(self, collection: str, key: str, payload: dict) -> str:
        """Create or replace a document with a fixed identity.

        Args:
            collection: Unqualified collection name.
            key: Fixed document key (e.g., "configs_id").
            payload: Full document body.

        Returns:
            Point id the key maps to.
        """
        doc_id = document_key_to_id(key)
        batch = self.batch(collection)
        batch.set(doc_id, payload)
        batch.commit()
        return doc_id

    def get_document(self, collection: str, key: str) -> Optional[dict]:
        """Get a fixed-identity document.

        Args:
            collection: Unqualified collection name.
            key: Fixed document key.

        Returns:
            Document body if found, None otherwise.
        """
        client = self._get_client()
        self.ensure_collection_exists(collection)

        results = client.retrieve(
            collection_name=self.collection_name(collection),
            ids=[document_key_to_id(key)],
        )
        if not results:
            return None
        return dict(results[0].payload or {})
