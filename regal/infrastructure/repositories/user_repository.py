"""Repository for User persistence."""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from ...domain.errors import Conflict
from ...domain.models import User
from ...domain.ports.persistence import DocumentStore
from ..persistence.mongo import USERS, to_object_id


class UserRepository:
    """Repository for managing User documents."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        phone: Optional[list] = None,
        age: Optional[int] = None,
        address: Optional[list] = None,
        img_id: Optional[str] = None,
    ) -> User:
        """Create a new user."""
        now = datetime.now(timezone.utc)
        document: Dict[str, Any] = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password_hash": password_hash,
            "phone": phone or [],
            "age": age,
            "address": address or [],
            "img_id": img_id,
            "reset_code": None,
            "reset_code_issued_at": None,
            "created_at": now,
            "updated_at": now,
        }
        try:
            stored = self.store.insert(USERS, document)
        except Conflict as exc:
            raise Conflict("User already exists", detail=exc.detail) from exc
        return self._document_to_user(stored)

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        document = self.store.find_one(USERS, {"_id": object_id})
        return self._document_to_user(document) if document else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        document = self.store.find_one(USERS, {"email": email})
        return self._document_to_user(document) if document else None

    def update(self, user_id: str, patch: Mapping[str, Any]) -> Optional[User]:
        """Apply a partial update and return the stored user."""
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        changes = dict(patch)
        changes["updated_at"] = datetime.now(timezone.utc)
        try:
            document = self.store.update_one(USERS, {"_id": object_id}, changes)
        except Conflict as exc:
            raise Conflict("User already exists", detail=exc.detail) from exc
        return self._document_to_user(document) if document else None

    def set_reset_code(self, user_id: str, code: str, issued_at: datetime) -> Optional[User]:
        """Store a reset code, replacing any previous one."""
        return self.update(user_id, {"reset_code": code, "reset_code_issued_at": issued_at})

    def delete(self, user_id: str) -> bool:
        """Delete a user."""
        object_id = to_object_id(user_id)
        if object_id is None:
            return False
        return self.store.delete_one(USERS, {"_id": object_id})

    def _document_to_user(self, document: Mapping[str, Any]) -> User:
        """Convert a stored document to a User entity."""
        return User(
            id=str(document["_id"]),
            first_name=document["first_name"],
            last_name=document["last_name"],
            email=document["email"],
            password_hash=document["password_hash"],
            phone=document.get("phone"),
            img_id=document.get("img_id"),
            age=document.get("age"),
            address=document.get("address"),
            reset_code=document.get("reset_code"),
            reset_code_issued_at=_as_utc(document.get("reset_code_issued_at")),
            created_at=_as_utc(document.get("created_at")),
            updated_at=_as_utc(document.get("updated_at")),
        )


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Mongo returns naive datetimes unless the client is tz-aware.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
