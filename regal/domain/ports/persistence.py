from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol

Document = Dict[str, Any]
Filter = Mapping[str, Any]


class DocumentStore(Protocol):
    """Abstract document store addressed by collection name and equality filters."""

    def find_one(self, collection: str, filter: Filter) -> Optional[Document]:
        ...

    def find(self, collection: str, filter: Filter) -> List[Document]:
        ...

    def insert(self, collection: str, document: Document) -> Document:
        ...

    def update_one(self, collection: str, filter: Filter, patch: Mapping[str, Any]) -> Optional[Document]:
        """Apply ``patch`` to the single document matching ``filter`` and return it, or ``None``."""
        ...

    def push(self, collection: str, filter: Filter, field: str, values: List[Any]) -> Optional[Document]:
        ...

    def pull(self, collection: str, filter: Filter, field: str, value: Any) -> Optional[Document]:
        ...

    def delete_one(self, collection: str, filter: Filter) -> bool:
        ...

    def delete_many(self, collection: str, filter: Filter) -> int:
        ...


class BlobStore(Protocol):
    """Flat binary file store addressed by generated names."""

    def save(self, data: bytes, suggested_name: str) -> str:
        ...

    def delete(self, stored_name: str) -> None:
        ...

    def exists(self, stored_name: str) -> bool:
        ...

    def read_bytes(self, stored_name: str) -> bytes:
        ...


class MailDispatcher(Protocol):
    """Outbound mail transport."""

    def send(self, to_email: str, subject: str, body: str) -> bool:
        ...
