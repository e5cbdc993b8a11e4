from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from ...domain.errors import Conflict, NotFound
from ...domain.models import Company, IdentityContext
from ...infrastructure.repositories.company_repository import CompanyRepository
from .ownership import authorize_mutation, explain_scoped_miss

logger = logging.getLogger(__name__)

_IMMUTABLE_FIELDS = ("id", "owner_id")


class CompanyService:
    """Company CRUD; every mutation is scoped to the caller as owner."""

    def __init__(self, companies: CompanyRepository) -> None:
        self._companies = companies

    def create(self, identity: IdentityContext, values: Mapping[str, Any]) -> Company:
        claimed_owner = values.get("owner_id")
        if claimed_owner is not None:
            authorize_mutation(claimed_owner, identity.owner_id, "Unauthorized to create a company for another user")
        if self._companies.get_by_name(values["name"]):
            raise Conflict("Company already exists")
        company = self._companies.create(identity.owner_id, values)
        logger.info("Company %s created by %s", company.id, identity.owner_id)
        return company

    def update(self, identity: IdentityContext, company_id: str, changes: Mapping[str, Any]) -> Company:
        patch: Dict[str, Any] = {key: value for key, value in changes.items() if key not in _IMMUTABLE_FIELDS}
        updated = self._companies.update_owned(company_id, identity.owner_id, patch)
        if updated is None:
            explain_scoped_miss(
                self._companies.get_by_id(company_id),
                identity.owner_id,
                "Company not found",
                "Unauthorized to edit this company",
            )
        return updated

    def delete(self, identity: IdentityContext, company_id: str) -> None:
        if not self._companies.delete_owned(company_id, identity.owner_id):
            explain_scoped_miss(
                self._companies.get_by_id(company_id),
                identity.owner_id,
                "Company not found",
                "Unauthorized to delete this company",
            )
        logger.info("Company %s deleted by %s", company_id, identity.owner_id)

    def list_owned(self, identity: IdentityContext) -> List[Company]:
        companies = self._companies.list_by_owner(identity.owner_id)
        if not companies:
            raise NotFound("No companies found for the given user")
        return companies
