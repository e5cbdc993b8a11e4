import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from ...domain.errors import Conflict, DependencyFailure
from ...domain.ports.persistence import Document, DocumentStore, Filter

logger = logging.getLogger(__name__)

USERS = "users"
COMPANIES = "companies"
PRODUCTS = "products"


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a client-supplied id; malformed ids map to ``None``."""
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


class MongoDocumentStore(DocumentStore):
    """MongoDB-backed implementation of the document store port.

    The database handle is injected; the store never opens its own connection.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    def ensure_indexes(self) -> None:
        with self._guard():
            self._db[USERS].create_index([("email", ASCENDING)], unique=True)
            self._db[COMPANIES].create_index([("name", ASCENDING)], unique=True)
            self._db[COMPANIES].create_index([("owner_id", ASCENDING)])
            self._db[PRODUCTS].create_index([("name", ASCENDING)], unique=True)
            self._db[PRODUCTS].create_index([("auto_qr", ASCENDING)], unique=True)
            self._db[PRODUCTS].create_index([("owner_id", ASCENDING), ("company_id", ASCENDING)])

    # DocumentStore API ------------------------------------------------------
    def find_one(self, collection: str, filter: Filter) -> Optional[Document]:
        with self._guard():
            return self._db[collection].find_one(dict(filter))

    def find(self, collection: str, filter: Filter) -> List[Document]:
        with self._guard():
            return list(self._db[collection].find(dict(filter)))

    def insert(self, collection: str, document: Document) -> Document:
        payload = dict(document)
        with self._guard():
            result = self._db[collection].insert_one(payload)
        payload["_id"] = result.inserted_id
        return payload

    def update_one(self, collection: str, filter: Filter, patch: Mapping[str, Any]) -> Optional[Document]:
        if not patch:
            return self.find_one(collection, filter)
        with self._guard():
            return self._db[collection].find_one_and_update(
                dict(filter),
                {"$set": dict(patch)},
                return_document=ReturnDocument.AFTER,
            )

    def push(self, collection: str, filter: Filter, field: str, values: List[Any]) -> Optional[Document]:
        with self._guard():
            return self._db[collection].find_one_and_update(
                dict(filter),
                {"$push": {field: {"$each": list(values)}}},
                return_document=ReturnDocument.AFTER,
            )

    def pull(self, collection: str, filter: Filter, field: str, value: Any) -> Optional[Document]:
        with self._guard():
            return self._db[collection].find_one_and_update(
                dict(filter),
                {"$pull": {field: value}},
                return_document=ReturnDocument.AFTER,
            )

    def delete_one(self, collection: str, filter: Filter) -> bool:
        with self._guard():
            result = self._db[collection].delete_one(dict(filter))
        return result.deleted_count > 0

    def delete_many(self, collection: str, filter: Filter) -> int:
        with self._guard():
            result = self._db[collection].delete_many(dict(filter))
        return result.deleted_count

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as exc:
            raise Conflict(detail=str(exc)) from exc
        except PyMongoError as exc:
            logger.exception("Document store operation failed")
            raise DependencyFailure(detail=str(exc)) from exc
