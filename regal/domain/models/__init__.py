"""Domain models for the Regal catalog service."""

from .company import Company
from .identity import IdentityContext
from .product import Product
from .user import User

__all__ = [
    "Company",
    "IdentityContext",
    "Product",
    "User",
]
