from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CompanyCreateRequest(BaseModel):
    owner_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    commercial_name: str = Field(..., min_length=1)
    slogan: Optional[str] = None
    vat: Optional[str] = None
    category: Optional[str] = None
    industry: Optional[str] = None
    img_ids: List[str] = Field(default_factory=list)
    background_img: Optional[str] = None
    mobile: List[Dict[str, Any]] = Field(default_factory=list)
    address: List[Dict[str, Any]] = Field(default_factory=list)
    phone: List[Dict[str, Any]] = Field(default_factory=list)
    employees: List[Dict[str, Any]] = Field(default_factory=list)


class CompanyUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    commercial_name: Optional[str] = Field(default=None, min_length=1)
    slogan: Optional[str] = None
    vat: Optional[str] = None
    category: Optional[str] = None
    industry: Optional[str] = None
    img_ids: Optional[List[str]] = None
    background_img: Optional[str] = None
    mobile: Optional[List[Dict[str, Any]]] = None
    address: Optional[List[Dict[str, Any]]] = None
    phone: Optional[List[Dict[str, Any]]] = None
    employees: Optional[List[Dict[str, Any]]] = None
