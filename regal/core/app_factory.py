from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient
from pymongo.database import Database

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.account_service import AccountService
from ..application.services.company_service import CompanyService
from ..application.services.image_service import ImageService
from ..application.services.password_reset_service import PasswordResetService
from ..application.services.product_service import ProductService
from ..application.services.token_service import TokenService
from ..infrastructure.persistence.mongo import MongoDocumentStore
from ..infrastructure.repositories.company_repository import CompanyRepository
from ..infrastructure.repositories.product_repository import ProductRepository
from ..infrastructure.repositories.user_repository import UserRepository
from ..infrastructure.storage.filesystem import FilesystemBlobStore
from ..presentation.api.errors import register_exception_handlers
from ..presentation.api.routers import companies as companies_router
from ..presentation.api.routers import products as products_router
from ..presentation.api.routers import users as users_router
from ..services.email_service import EmailService

logger = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
}


def create_application(
    settings: Optional[Settings] = None,
    container: Optional[ApplicationContainer] = None,
) -> FastAPI:
    """Build the ASGI app.

    With ``container`` given the lifespan does not connect to MongoDB; the
    supplied dependencies are used as they are.
    """
    settings = settings or (container.settings if container else Settings())

    app = FastAPI(title="Regal Catalog API", lifespan=_create_lifespan(settings))
    if container is not None:
        app.state.container = container  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    register_exception_handlers(app)

    app.include_router(users_router.router)
    app.include_router(companies_router.router)
    app.include_router(products_router.router)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def build_container(settings: Settings, database: Database) -> ApplicationContainer:
    store = MongoDocumentStore(database)
    store.ensure_indexes()

    users = UserRepository(store)
    companies = CompanyRepository(store)
    products = ProductRepository(store)
    blob_store = FilesystemBlobStore(settings.storage_dir)
    token_service = TokenService(settings.jwt_secret)
    email_service = EmailService(
        smtp_host=settings.smtp_host,
        smtp_port=settings.smtp_port,
        smtp_username=settings.smtp_username,
        smtp_password=settings.smtp_password,
        from_email=settings.mail_from,
    )

    return ApplicationContainer(
        settings=settings,
        store=store,
        blob_store=blob_store,
        email_service=email_service,
        token_service=token_service,
        account_service=AccountService(users, companies, products, token_service),
        password_reset_service=PasswordResetService(users),
        company_service=CompanyService(companies),
        product_service=ProductService(products),
        image_service=ImageService(products, blob_store),
    )


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        if getattr(app.state, "container", None) is not None:
            yield
            return

        client: MongoClient = MongoClient(settings.mongo_uri, tz_aware=True)
        app.state.container = build_container(settings, client[settings.mongo_db])  # type: ignore[attr-defined]
        logger.info("Connected to MongoDB database %s", settings.mongo_db)
        try:
            yield
        finally:
            client.close()

    return lifespan
