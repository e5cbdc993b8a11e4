from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, List, Mapping, Optional

from ...domain.errors import Conflict, NotFound
from ...domain.models import IdentityContext, Product
from ...infrastructure.repositories.product_repository import ProductRepository
from .ownership import authorize_mutation, explain_scoped_miss

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = ("id", "owner_id", "company_id", "auto_qr", "image_ids")


def generate_tracking_code() -> str:
    return secrets.token_hex(16)


class ProductService:
    """Product CRUD plus the public lookups used when scanning a code."""

    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    # Owner-scoped operations -----------------------------------------------
    def create(self, identity: IdentityContext, values: Mapping[str, Any]) -> Product:
        authorize_mutation(values["owner_id"], identity.owner_id, "Unauthorized to add a product for another user")
        if self._products.get_by_name(values["name"]):
            raise Conflict("Product already exists")

        document: Dict[str, Any] = dict(values)
        document["owner_id"] = identity.owner_id
        document["auto_qr"] = generate_tracking_code()
        product = self._products.create(document)
        logger.info("Product %s created by %s", product.id, identity.owner_id)
        return product

    def update(self, identity: IdentityContext, product_id: str, changes: Mapping[str, Any]) -> Product:
        patch = {key: value for key, value in changes.items() if key not in _IMMUTABLE_FIELDS}
        updated = self._products.update_owned(product_id, identity.owner_id, patch)
        if updated is None:
            explain_scoped_miss(
                self._products.get_by_id(product_id),
                identity.owner_id,
                "Product not found",
                "Unauthorized to edit this product",
            )
        return updated

    def delete(self, identity: IdentityContext, product_id: str) -> None:
        if not self._products.delete_owned(product_id, identity.owner_id):
            explain_scoped_miss(
                self._products.get_by_id(product_id),
                identity.owner_id,
                "Product not found",
                "Unauthorized to delete this product",
            )
        logger.info("Product %s deleted by %s", product_id, identity.owner_id)

    def list_for_owner(self, identity: IdentityContext, owner_id: str) -> List[Product]:
        authorize_mutation(owner_id, identity.owner_id, "Unauthorized to list products of another user")
        products = self._products.list_by_owner(identity.owner_id)
        if not products:
            raise NotFound("No products found for this owner")
        return products

    def list_for_company(self, identity: IdentityContext, company_id: str) -> List[Product]:
        products = self._products.list_by_owner(identity.owner_id, company_id=company_id)
        if not products:
            raise NotFound("No products found for the given user")
        return products

    def get_owned(self, identity: IdentityContext, company_id: str, product_id: str) -> Product:
        product = self._products.get_owned(product_id, identity.owner_id, company_id=company_id)
        if not product:
            raise NotFound("Product not found")
        return product

    # Public lookups ---------------------------------------------------------
    def get_by_id(self, product_id: str) -> Product:
        return self._require(self._products.get_by_id(product_id))

    def get_by_linked_qr(self, linked_qr: str) -> Product:
        return self._require(self._products.get_by_linked_qr(linked_qr))

    def get_by_auto_qr(self, auto_qr: str) -> Product:
        return self._require(self._products.get_by_auto_qr(auto_qr))

    @staticmethod
    def _require(product: Optional[Product]) -> Product:
        if not product:
            raise NotFound("Product not found")
        return product
