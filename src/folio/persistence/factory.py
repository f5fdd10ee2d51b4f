"""Runtime selection of the document store backend."""

from __future__ import annotations

from folio.config import Settings
from folio.persistence.base import DocumentStore
from folio.persistence.memory import InMemoryDocumentStore


def create_document_store(settings: Settings) -> DocumentStore:
    """Create a document store based on configuration."""
    backend = settings.store_backend.lower()

    if backend in {"memory", "inmemory", "in_memory"}:
        return InMemoryDocumentStore()

    if backend in {"postgres", "postgresql"}:
        from folio.persistence.postgres import PostgresDocumentStore

        return PostgresDocumentStore.from_settings(settings)

    raise ValueError("Unsupported store_backend. Supported values: memory, postgres.")
