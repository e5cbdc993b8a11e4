from dataclasses import dataclass

from ..application.services.account_service import AccountService
from ..application.services.company_service import CompanyService
from ..application.services.image_service import ImageService
from ..application.services.password_reset_service import PasswordResetService
from ..application.services.product_service import ProductService
from ..application.services.token_service import TokenService
from ..domain.ports.persistence import BlobStore, DocumentStore
from ..services.email_service import EmailService
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    store: DocumentStore
    blob_store: BlobStore
    email_service: EmailService
    token_service: TokenService
    account_service: AccountService
    password_reset_service: PasswordResetService
    company_service: CompanyService
    product_service: ProductService
    image_service: ImageService
