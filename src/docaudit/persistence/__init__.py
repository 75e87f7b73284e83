"""Persistence layer — cursor state and document storage."""

from docaudit.persistence.document_store import DocumentStore, FileDocumentStore
from docaudit.persistence.state_store import CursorStateStore

__all__ = ["CursorStateStore", "DocumentStore", "FileDocumentStore"]
