"""Pytest configuration and fixtures for tpadmin tests."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from config.settings import refresh_settings
from core.document_store import WriteBatch


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset settings cache and environment before each test."""
    with patch.dict(os.environ, {}, clear=False):
        for key in ("USE_EMULATOR", "PROJECT_ID", "QDRANT_URL", "QDRANT_API_KEY", "SYNC_BATCH_SIZE"):
            os.environ.pop(key, None)
        refresh_settings()
        yield
    refresh_settings()


@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        "QDRANT_URL": "https://store.example.test:6333",
        "QDRANT_API_KEY": "test_qdrant_key_12345",
        "PROJECT_ID": "typingchild",
        "SYNC_BATCH_SIZE": "2",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        refresh_settings()
        yield env_vars


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for file tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_file(temp_dir):
    """Write text to a file in the temp directory and return its path."""

    def _write(name: str, content: str) -> Path:
        path = temp_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class FakeDocumentStore:
    """In-memory stand-in for DocumentStore.

    Attributes:
        collections: collection -> {doc_id: payload}.
        commits: Batches committed, in order.
        fail_on_set: Raise on commit of any batch containing sets.
    """

    def __init__(self, collections=None, fail_on_set=False, fail_on_delete=False):
        self.collections = collections or {}
        self.commits: list[WriteBatch] = []
        self.fail_on_set = fail_on_set
        self.fail_on_delete = fail_on_delete

    def list_document_ids(self, collection):
        return list(self.collections.get(collection, {}))

    def batch(self, collection):
        return WriteBatch(store=self, collection=collection)

    def commit(self, batch):
        if batch.sets and self.fail_on_set:
            raise RuntimeError("store unavailable")
        if batch.deletes and self.fail_on_delete:
            raise RuntimeError("delete rejected")
        docs = self.collections.setdefault(batch.collection, {})
        for doc_id in batch.deletes:
            docs.pop(doc_id, None)
        for doc_id, payload in batch.sets:
            docs[doc_id] = payload
        self.commits.append(batch)
        return len(batch)

    def set_document(self, collection, key, payload):
        self.collections.setdefault(collection, {})[key] = payload
        return key

    def get_document(self, collection, key):
        return self.collections.get(collection, {}).get(key)


@pytest.fixture
def fake_store():
    """Provide an empty in-memory document store."""
    return FakeDocumentStore()


@pytest.fixture
def sample_lesson_text():
    """Provide a small lesson file body."""
    return "#1|Intro\nhello\nworld\n#3|Next\nhi\n"
