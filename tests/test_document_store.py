"""Tests for core/document_store.py."""

import os
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from qdrant_client.models import PointIdsList

from config.settings import refresh_settings
from core.document_store import (
    DocumentStore,
    document_key_to_id,
    new_document_id,
)
from core.exceptions import ConfigError


@pytest.fixture
def mock_client():
    """Provide a Qdrant client mock with one existing collection."""
    client = MagicMock()
    client.get_collections.return_value = SimpleNamespace(
        collections=[SimpleNamespace(name="lessons")]
    )
    return client


class TestDocumentIds:
    """Tests for document id helpers."""

    def test_fixed_key_is_stable(self):
        assert document_key_to_id("configs_id") == document_key_to_id("configs_id")
        assert document_key_to_id("configs_id") != document_key_to_id("other")

    def test_generated_ids_are_unique(self):
        assert new_document_id() != new_document_id()


class TestClientCreation:
    """Tests for lazy client creation."""

    def test_not_configured_raises(self):
        store = DocumentStore()

        with pytest.raises(ConfigError, match="not configured"):
            store.list_document_ids("lessons")

    def test_emulator_connects_locally(self):
        with patch.dict(os.environ, {"USE_EMULATOR": "true", "QDRANT_API_KEY": "secret"}):
            refresh_settings()
            with patch("core.document_store.QdrantClient") as mock_cls:
                DocumentStore()._get_client()

        mock_cls.assert_called_once_with(url="http://localhost:6333", api_key=None)

    def test_remote_uses_credentials(self, mock_env_vars):
        with patch("core.document_store.QdrantClient") as mock_cls:
            DocumentStore()._get_client()

        mock_cls.assert_called_once_with(
            url="https://store.example.test:6333", api_key="test_qdrant_key_12345"
        )


class TestDocumentStore:
    """Tests for DocumentStore operations."""

    def test_creates_missing_collection(self, mock_client):
        mock_client.scroll.return_value = ([], None)
        store = DocumentStore(client=mock_client)

        store.list_document_ids("configs")

        mock_client.create_collection.assert_called_once_with(
            collection_name="configs", vectors_config={}
        )

    def test_existing_collection_not_recreated(self, mock_client):
        mock_client.scroll.return_value = ([], None)
        store = DocumentStore(client=mock_client)

        store.list_document_ids("lessons")
        store.list_document_ids("lessons")

        mock_client.create_collection.assert_not_called()
        assert mock_client.get_collections.call_count == 1

    def test_list_pages_through_scroll(self, mock_client):
        mock_client.scroll.side_effect = [
            ([SimpleNamespace(id="a"), SimpleNamespace(id="b")], "next"),
            ([SimpleNamespace(id="c")], None),
        ]
        store = DocumentStore(client=mock_client)

        assert store.list_document_ids("lessons") == ["a", "b", "c"]
        assert mock_client.scroll.call_args_list[1].kwargs["offset"] == "next"

    def test_commit_deletes_and_sets(self, mock_client):
        store = DocumentStore(client=mock_client)
        batch = store.batch("lessons")
        batch.delete("old")
        batch.set("new", {"id": 0})

        assert batch.commit() == 2

        delete_kwargs = mock_client.delete.call_args.kwargs
        assert delete_kwargs["collection_name"] == "lessons"
        assert delete_kwargs["points_selector"] == PointIdsList(points=["old"])

        points = mock_client.upsert.call_args.kwargs["points"]
        assert [(p.id, p.payload) for p in points] == [("new", {"id": 0})]

    def test_empty_batch_is_noop(self, mock_client):
        store = DocumentStore(client=mock_client)

        assert store.batch("lessons").commit() == 0

        mock_client.delete.assert_not_called()
        mock_client.upsert.assert_not_called()

    def test_collections_namespaced(self, mock_client, mock_env_vars):
        mock_client.get_collections.return_value = SimpleNamespace(collections=[])
        store = DocumentStore(client=mock_client)
        batch = store.batch("lessons")
        batch.set("new", {"id": 0})

        batch.commit()

        assert mock_client.upsert.call_args.kwargs["collection_name"] == "typingchild_lessons"

    def test_set_document_uses_fixed_id(self, mock_client):
        store = DocumentStore(client=mock_client)

        doc_id = store.set_document("configs", "configs_id", {"downloadAll": True})

        assert doc_id == document_key_to_id("configs_id")
        (point,) = mock_client.upsert.call_args.kwargs["points"]
        assert point.id == doc_id
        assert point.payload == {"downloadAll": True}

    def test_get_document(self, mock_client):
        mock_client.retrieve.return_value = [SimpleNamespace(payload={"downloadAll": False})]
        store = DocumentStore(client=mock_client)

        assert store.get_document("configs", "configs_id") == {"downloadAll": False}
        assert mock_client.retrieve.call_args.kwargs["ids"] == [document_key_to_id("configs_id")]

    def test_get_missing_document(self, mock_client):
        mock_client.retrieve.return_value = []

        assert DocumentStore(client=mock_client).get_document("configs", "nope") is None
