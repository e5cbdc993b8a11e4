"""Image attachments stored in the blob store and referenced from products."""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Tuple

from ...domain.errors import DependencyFailure, NotFound, ValidationFailure
from ...domain.models import IdentityContext, Product
from ...domain.ports.persistence import BlobStore
from ...infrastructure.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

MAX_IMAGES_PER_UPLOAD = 5

Upload = Tuple[str, bytes]


class ImageService:
    """Every operation resolves the product scoped to ``(product_id, caller as owner)``."""

    def __init__(self, products: ProductRepository, blobs: BlobStore) -> None:
        self._products = products
        self._blobs = blobs

    def add_images(self, identity: IdentityContext, product_id: str, files: Sequence[Upload]) -> Tuple[Product, List[str]]:
        if not files:
            raise ValidationFailure("No images uploaded")
        if len(files) > MAX_IMAGES_PER_UPLOAD:
            raise ValidationFailure(f"At most {MAX_IMAGES_PER_UPLOAD} images can be uploaded at once")
        self._owned_product(identity, product_id)

        stored: List[str] = []
        try:
            for filename, data in files:
                stored.append(self._blobs.save(data, filename))
        except OSError as exc:
            self._discard(stored)
            raise DependencyFailure("Failed to store the uploaded images", detail=str(exc)) from exc

        updated = self._products.push_images(product_id, identity.owner_id, stored)
        if updated is None:
            self._discard(stored)
            raise NotFound("Product not found or unauthorized")
        logger.info("Attached %d images to product %s", len(stored), product_id)
        return updated, stored

    def list_images(self, identity: IdentityContext, product_id: str, url_for: Callable[[str], str]) -> List[str]:
        product = self._owned_product(identity, product_id)
        return [url_for(name) for name in product.image_ids]

    def get_image(self, identity: IdentityContext, product_id: str, image_name: str) -> bytes:
        product = self._owned_product(identity, product_id)
        if image_name not in product.image_ids:
            raise NotFound("Image not found in this product")
        if not self._blobs.exists(image_name):
            raise NotFound("Image file does not exist on the server")
        return self._blobs.read_bytes(image_name)

    def delete_image(self, identity: IdentityContext, product_id: str, filename: str) -> Product:
        product = self._owned_product(identity, product_id)
        if filename not in product.image_ids:
            raise ValidationFailure("Image not associated with this product")

        # The reference is only dropped once the file is gone.
        try:
            self._blobs.delete(filename)
        except OSError as exc:
            logger.error("Failed to delete blob %s: %s", filename, exc)
            raise DependencyFailure("Failed to delete the file", detail=str(exc)) from exc

        updated = self._products.pull_image(product_id, identity.owner_id, filename)
        if updated is None:
            raise NotFound("Product not found or unauthorized")
        return updated

    def _owned_product(self, identity: IdentityContext, product_id: str) -> Product:
        product = self._products.get_owned(product_id, identity.owner_id)
        if not product:
            raise NotFound("Product not found or unauthorized")
        return product

    def _discard(self, names: List[str]) -> None:
        for name in names:
            try:
                self._blobs.delete(name)
            except OSError as exc:
                logger.warning("Could not remove orphaned blob %s: %s", name, exc)
