from fastapi import APIRouter, Depends

from ....application.services.company_service import CompanyService
from ....core.dependencies import get_company_service
from ....domain.models import IdentityContext
from ..dependencies import require_identity
from ..schemas.company_schemas import CompanyCreateRequest, CompanyUpdateRequest

router = APIRouter(prefix="/regal/api/company", tags=["companies"])


@router.post("/add")
def add_company(
    payload: CompanyCreateRequest,
    identity: IdentityContext = Depends(require_identity),
    company_service: CompanyService = Depends(get_company_service),
) -> dict:
    company = company_service.create(identity, payload.model_dump())
    return {"message": "Company added successfully", "company": company.to_public()}


@router.put("/edit/{company_id}")
def edit_company(
    company_id: str,
    payload: CompanyUpdateRequest,
    identity: IdentityContext = Depends(require_identity),
    company_service: CompanyService = Depends(get_company_service),
) -> dict:
    company = company_service.update(identity, company_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    return {"message": "Company updated successfully", "company": company.to_public()}


@router.delete("/delete/{company_id}")
def delete_company(
    company_id: str,
    identity: IdentityContext = Depends(require_identity),
    company_service: CompanyService = Depends(get_company_service),
) -> dict:
    company_service.delete(identity, company_id)
    return {"message": "Company deleted successfully"}


@router.get("/get")
def list_companies(
    identity: IdentityContext = Depends(require_identity),
    company_service: CompanyService = Depends(get_company_service),
) -> dict:
    companies = company_service.list_owned(identity)
    return {
        "message": "Companies retrieved successfully",
        "companies": [company.to_public() for company in companies],
    }
