import mimetypes
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status

from ....application.services.image_service import ImageService
from ....application.services.product_service import ProductService
from ....core.dependencies import get_image_service, get_product_service
from ....domain.models import IdentityContext
from ..dependencies import require_identity
from ..schemas.product_schemas import ProductCreateRequest, ProductUpdateRequest

router = APIRouter(prefix="/regal/api/product", tags=["products"])


@router.post("/add", status_code=status.HTTP_201_CREATED)
def add_product(
    payload: ProductCreateRequest,
    identity: IdentityContext = Depends(require_identity),
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product = product_service.create(identity, payload.model_dump())
    return {"message": "Product added successfully", "product": product.to_public()}


@router.put("/edit/{product_id}")
def edit_product(
    product_id: str,
    payload: ProductUpdateRequest,
    identity: IdentityContext = Depends(require_identity),
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product = product_service.update(identity, product_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    return {"message": "Product updated successfully", "product": product.to_public()}


@router.delete("/delete/{product_id}")
def delete_product(
    product_id: str,
    identity: IdentityContext = Depends(require_identity),
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product_service.delete(identity, product_id)
    return {"message": "Product deleted successfully"}


@router.get("/all/{owner_id}")
def list_owner_products(
    owner_id: str,
    identity: IdentityContext = Depends(require_identity),
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    products = product_service.list_for_owner(identity, owner_id)
    return _products_body(products)


@router.get("/get/{company_id}")
def list_company_products(
    company_id: str,
    identity: IdentityContext = Depends(require_identity),
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    products = product_service.list_for_company(identity, company_id)
    return _products_body(products)


@router.get("/get/product/{company_id}/{product_id}")
def get_company_product(
    company_id: str,
    product_id: str,
    identity: IdentityContext = Depends(require_identity),
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product = product_service.get_owned(identity, company_id, product_id)
    return {"message": "Product retrieved successfully", "product": product.to_public()}


# Public lookups: no authorization, a scanned code is enough.
@router.get("/get/one/{product_id}")
def get_product(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product = product_service.get_by_id(product_id)
    return {"message": "Product retrieved successfully", "product": product.to_public()}


@router.get("/get/qr/{linked_qr}")
def get_product_by_linked_qr(
    linked_qr: str,
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product = product_service.get_by_linked_qr(linked_qr)
    return {"message": "Product retrieved successfully", "product": product.to_public()}


@router.get("/get/qr-auto/{auto_qr}")
def get_product_by_auto_qr(
    auto_qr: str,
    product_service: ProductService = Depends(get_product_service),
) -> dict:
    product = product_service.get_by_auto_qr(auto_qr)
    return {"message": "Product retrieved successfully", "product": product.to_public()}


# Images ---------------------------------------------------------------------
@router.post("/upload-images/{product_id}")
def upload_images(
    product_id: str,
    images: Optional[List[UploadFile]] = File(None),
    identity: IdentityContext = Depends(require_identity),
    image_service: ImageService = Depends(get_image_service),
) -> dict:
    files = [(upload.filename or "", upload.file.read()) for upload in images or []]
    product, names = image_service.add_images(identity, product_id, files)
    return {
        "message": "Images uploaded successfully",
        "images": names,
        "product": product.to_public(),
    }


@router.get("/get-images/{product_id}")
def list_images(
    product_id: str,
    request: Request,
    identity: IdentityContext = Depends(require_identity),
    image_service: ImageService = Depends(get_image_service),
) -> dict:
    def url_for(name: str) -> str:
        return str(request.url_for("get_product_image", product_id=product_id, image_name=name))

    urls = image_service.list_images(identity, product_id, url_for)
    return {"message": "Product images retrieved successfully", "images": urls}


@router.get("/get-image/{product_id}/{image_name}", name="get_product_image")
def get_image(
    product_id: str,
    image_name: str,
    identity: IdentityContext = Depends(require_identity),
    image_service: ImageService = Depends(get_image_service),
) -> Response:
    data = image_service.get_image(identity, product_id, image_name)
    media_type = mimetypes.guess_type(image_name)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)


@router.delete("/delete-image/{product_id}/{filename}")
def delete_image(
    product_id: str,
    filename: str,
    identity: IdentityContext = Depends(require_identity),
    image_service: ImageService = Depends(get_image_service),
) -> dict:
    image_service.delete_image(identity, product_id, filename)
    return {"message": "Image deleted successfully", "filename": filename}


def _products_body(products) -> dict:
    return {
        "message": "Products retrieved successfully",
        "products": [product.to_public() for product in products],
    }
