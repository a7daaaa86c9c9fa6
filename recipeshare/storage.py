from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Tuple

Document = dict
Unsubscribe = Callable[[], None]

ASCENDING = "ASCENDING"
DESCENDING = "DESCENDING"


class DocumentStore(Protocol):
    """Protocol describing the record database used by the repository.

    Documents are plain dictionaries. A field set to :data:`SERVER_TIMESTAMP`
    on insert is replaced by the store's clock, and timestamps come back as
    :class:`datetime.datetime` instances.
    """

    def insert(self, collection: str, doc: Document) -> str:
        """Store ``doc`` under a new identifier and return it."""

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or ``None`` when it does not exist."""

    def query(self, collection: str, order_by: str, direction: str = DESCENDING) -> List[Tuple[str, Document]]:
        """Return ``(id, document)`` pairs ordered by ``order_by``."""

    def subscribe(
        self,
        collection: str,
        order_by: str,
        direction: str,
        on_change: Callable[[List[Tuple[str, Document]]], None],
    ) -> Unsubscribe:
        """Call ``on_change`` with the full ordered result on every change."""

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """Overwrite the given fields of an existing document."""

    def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document."""

    def exists_any(self, collection: str) -> bool:
        """Return ``True`` if the collection holds at least one document."""


class AssetStore(Protocol):
    """Protocol describing the binary object storage for recipe images."""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` at ``path`` and return a URL suitable for display."""

    def resolve_url(self, path: str) -> Optional[str]:
        """Return a fresh display URL for ``path``, or ``None`` to keep the stored one."""

    def delete(self, path: str) -> None:
        """Remove the object at ``path`` or raise :class:`~recipeshare.errors.NotFound`."""


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


__all__ = [
    "ASCENDING",
    "AssetStore",
    "DESCENDING",
    "Document",
    "DocumentStore",
    "SERVER_TIMESTAMP",
    "Unsubscribe",
]
