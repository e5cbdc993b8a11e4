"""Service for account registration, authentication and removal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import bcrypt

from ...domain.errors import Conflict, InvalidCredential, NotFound, RegalError
from ...domain.models import IdentityContext, User
from ...infrastructure.repositories.company_repository import CompanyRepository
from ...infrastructure.repositories.product_repository import ProductRepository
from ...infrastructure.repositories.user_repository import UserRepository
from .token_service import TokenService

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("first_name", "last_name", "email", "phone", "img_id", "age", "address")


@dataclass(frozen=True, slots=True)
class DeletionReport:
    companies_deleted: int
    products_deleted: int


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class AccountService:
    """Manages user accounts and the cascade that removes everything they own."""

    def __init__(
        self,
        users: UserRepository,
        companies: CompanyRepository,
        products: ProductRepository,
        token_service: TokenService,
    ) -> None:
        self.users = users
        self.companies = companies
        self.products = products
        self.token_service = token_service

    def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone: Optional[list] = None,
        age: Optional[int] = None,
        address: Optional[list] = None,
    ) -> User:
        """
        Register a new user.

        Raises:
            Conflict: If the email is already registered
        """
        email_clean = normalize_email(email)
        if self.users.get_by_email(email_clean):
            raise Conflict("User already exists")

        user = self.users.create(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email_clean,
            password_hash=hash_password(password),
            phone=phone,
            age=age,
            address=address,
        )
        logger.info("Registered user %s", user.id)
        return user

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate with email and password.

        Unknown email and wrong password fail identically.
        """
        user = self.users.get_by_email(normalize_email(email))
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s", normalize_email(email))
            raise InvalidCredential("Invalid email or password")
        return user, self.token_service.issue(user.id, user.email)

    def get_profile(self, identity: IdentityContext) -> User:
        user = self.users.get_by_id(identity.owner_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, identity: IdentityContext, changes: Mapping[str, Any]) -> User:
        patch: Dict[str, Any] = {key: changes[key] for key in _EDITABLE_FIELDS if key in changes}
        if "email" in patch:
            patch["email"] = normalize_email(patch["email"])
            existing = self.users.get_by_email(patch["email"])
            if existing and existing.id != identity.owner_id:
                raise Conflict("User already exists")
        if changes.get("password"):
            patch["password_hash"] = hash_password(changes["password"])

        user = self.users.update(identity.owner_id, patch)
        if not user:
            raise NotFound("User not found")
        return user

    def delete_account(self, identity: IdentityContext) -> DeletionReport:
        """
        Delete the caller and every company and product they own.

        The steps run in sequence without a transaction. If a later step fails
        the earlier deletions stay in place and the error propagates.
        """
        owner_id = identity.owner_id
        if not self.users.delete(owner_id):
            raise NotFound("User not found")
        logger.info("Deleted user %s; removing owned resources", owner_id)

        try:
            companies_deleted = self.companies.delete_by_owner(owner_id)
            products_deleted = self.products.delete_by_owner(owner_id)
        except RegalError:
            logger.error("Partial account deletion for %s: owned resources may remain", owner_id)
            raise

        logger.info(
            "Account %s removed with %d companies and %d products",
            owner_id,
            companies_deleted,
            products_deleted,
        )
        return DeletionReport(companies_deleted=companies_deleted, products_deleted=products_deleted)
