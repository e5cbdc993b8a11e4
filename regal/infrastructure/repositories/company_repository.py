"""Repository for Company persistence."""

from dataclasses import fields
from typing import Any, Dict, List, Mapping, Optional

from ...domain.errors import Conflict
from ...domain.models import Company
from ...domain.ports.persistence import DocumentStore
from ..persistence.mongo import COMPANIES, to_object_id

_COMPANY_FIELDS = tuple(f.name for f in fields(Company) if f.name != "id")


class CompanyRepository:
    """Repository for managing Company documents."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(self, owner_id: str, values: Mapping[str, Any]) -> Company:
        document: Dict[str, Any] = {key: values[key] for key in _COMPANY_FIELDS if values.get(key) is not None}
        document["owner_id"] = owner_id
        try:
            stored = self.store.insert(COMPANIES, document)
        except Conflict as exc:
            raise Conflict("Company already exists", detail=exc.detail) from exc
        return self._document_to_company(stored)

    def get_by_id(self, company_id: str) -> Optional[Company]:
        object_id = to_object_id(company_id)
        if object_id is None:
            return None
        document = self.store.find_one(COMPANIES, {"_id": object_id})
        return self._document_to_company(document) if document else None

    def get_by_name(self, name: str) -> Optional[Company]:
        document = self.store.find_one(COMPANIES, {"name": name})
        return self._document_to_company(document) if document else None

    def list_by_owner(self, owner_id: str) -> List[Company]:
        return [self._document_to_company(doc) for doc in self.store.find(COMPANIES, {"owner_id": owner_id})]

    def update_owned(self, company_id: str, owner_id: str, patch: Mapping[str, Any]) -> Optional[Company]:
        """Update in one conditional write; ``None`` when id and owner do not both match."""
        object_id = to_object_id(company_id)
        if object_id is None:
            return None
        try:
            document = self.store.update_one(COMPANIES, {"_id": object_id, "owner_id": owner_id}, patch)
        except Conflict as exc:
            raise Conflict("Company already exists", detail=exc.detail) from exc
        return self._document_to_company(document) if document else None

    def delete_owned(self, company_id: str, owner_id: str) -> bool:
        object_id = to_object_id(company_id)
        if object_id is None:
            return False
        return self.store.delete_one(COMPANIES, {"_id": object_id, "owner_id": owner_id})

    def delete_by_owner(self, owner_id: str) -> int:
        return self.store.delete_many(COMPANIES, {"owner_id": owner_id})

    def _document_to_company(self, document: Mapping[str, Any]) -> Company:
        values = {key: document[key] for key in _COMPANY_FIELDS if document.get(key) is not None}
        return Company(id=str(document["_id"]), **values)
