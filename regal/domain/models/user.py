"""User domain model for account registration and authentication."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class User:
    """
    User entity representing a registered account.

    Attributes:
        id: Unique identifier
        first_name: Given name
        last_name: Family name
        email: User email address (unique)
        password_hash: bcrypt hash of the password
        phone: Open key-value phone entries
        img_id: Optional profile image reference
        age: Optional age
        address: Open key-value address entries
        reset_code: Current password reset code, if any
        reset_code_issued_at: When the reset code was issued
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        phone: Optional[List[Dict[str, Any]]] = None,
        img_id: Optional[str] = None,
        age: Optional[int] = None,
        address: Optional[List[Dict[str, Any]]] = None,
        reset_code: Optional[str] = None,
        reset_code_issued_at: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.password_hash = password_hash
        self.phone = phone or []
        self.img_id = img_id
        self.age = age
        self.address = address or []
        self.reset_code = reset_code
        self.reset_code_issued_at = reset_code_issued_at
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_public(self) -> Dict[str, Any]:
        """Outward representation; never includes the password hash or reset code."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "img_id": self.img_id,
            "age": self.age,
            "address": self.address,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
