"""Repository for Product persistence."""

from dataclasses import fields
from typing import Any, Dict, List, Mapping, Optional

from ...domain.errors import Conflict
from ...domain.models import Product
from ...domain.ports.persistence import DocumentStore, Filter
from ..persistence.mongo import PRODUCTS, to_object_id

_PRODUCT_FIELDS = tuple(f.name for f in fields(Product) if f.name != "id")


class ProductRepository:
    """Repository for managing Product documents."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(self, values: Mapping[str, Any]) -> Product:
        document: Dict[str, Any] = {key: values[key] for key in _PRODUCT_FIELDS if values.get(key) is not None}
        document.setdefault("image_ids", [])
        document.setdefault("video_ids", [])
        try:
            stored = self.store.insert(PRODUCTS, document)
        except Conflict as exc:
            raise Conflict("Product already exists", detail=exc.detail) from exc
        return self._document_to_product(stored)

    def get_by_id(self, product_id: str) -> Optional[Product]:
        object_id = to_object_id(product_id)
        if object_id is None:
            return None
        return self._find_one({"_id": object_id})

    def get_by_name(self, name: str) -> Optional[Product]:
        return self._find_one({"name": name})

    def get_by_auto_qr(self, auto_qr: str) -> Optional[Product]:
        return self._find_one({"auto_qr": auto_qr})

    def get_by_linked_qr(self, linked_qr: str) -> Optional[Product]:
        return self._find_one({"linked_qr": linked_qr})

    def get_owned(self, product_id: str, owner_id: str, company_id: Optional[str] = None) -> Optional[Product]:
        object_id = to_object_id(product_id)
        if object_id is None:
            return None
        query: Dict[str, Any] = {"_id": object_id, "owner_id": owner_id}
        if company_id is not None:
            query["company_id"] = company_id
        return self._find_one(query)

    def list_by_owner(self, owner_id: str, company_id: Optional[str] = None) -> List[Product]:
        query: Dict[str, Any] = {"owner_id": owner_id}
        if company_id is not None:
            query["company_id"] = company_id
        return [self._document_to_product(doc) for doc in self.store.find(PRODUCTS, query)]

    def update_owned(self, product_id: str, owner_id: str, patch: Mapping[str, Any]) -> Optional[Product]:
        """Update in one conditional write; ``None`` when id and owner do not both match."""
        object_id = to_object_id(product_id)
        if object_id is None:
            return None
        try:
            document = self.store.update_one(PRODUCTS, {"_id": object_id, "owner_id": owner_id}, patch)
        except Conflict as exc:
            raise Conflict("Product already exists", detail=exc.detail) from exc
        return self._document_to_product(document) if document else None

    def delete_owned(self, product_id: str, owner_id: str) -> bool:
        object_id = to_object_id(product_id)
        if object_id is None:
            return False
        return self.store.delete_one(PRODUCTS, {"_id": object_id, "owner_id": owner_id})

    def delete_by_owner(self, owner_id: str) -> int:
        return self.store.delete_many(PRODUCTS, {"owner_id": owner_id})

    def push_images(self, product_id: str, owner_id: str, names: List[str]) -> Optional[Product]:
        object_id = to_object_id(product_id)
        if object_id is None:
            return None
        document = self.store.push(PRODUCTS, {"_id": object_id, "owner_id": owner_id}, "image_ids", names)
        return self._document_to_product(document) if document else None

    def pull_image(self, product_id: str, owner_id: str, name: str) -> Optional[Product]:
        object_id = to_object_id(product_id)
        if object_id is None:
            return None
        document = self.store.pull(PRODUCTS, {"_id": object_id, "owner_id": owner_id}, "image_ids", name)
        return self._document_to_product(document) if document else None

    def _find_one(self, query: Filter) -> Optional[Product]:
        document = self.store.find_one(PRODUCTS, query)
        return self._document_to_product(document) if document else None

    def _document_to_product(self, document: Mapping[str, Any]) -> Product:
        values = {key: document[key] for key in _PRODUCT_FIELDS if document.get(key) is not None}
        return Product(id=str(document["_id"]), **values)
