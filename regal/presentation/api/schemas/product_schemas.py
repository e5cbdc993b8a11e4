from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ProductCreateRequest(BaseModel):
    owner_id: str = Field(..., min_length=1)
    company_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    producer: Dict[str, Any]
    price: float = Field(..., ge=0)
    profit_percent: float = Field(..., ge=0, le=100)
    manufacture_year: int
    production_year: int
    stock: int = Field(..., ge=0)
    commercial_name: Optional[str] = None
    linked_qr: Optional[str] = None
    material: Optional[str] = None
    suppliers: List[Dict[str, Any]] = Field(default_factory=list)
    origin: Optional[str] = None
    category: Optional[str] = None
    components: List[Dict[str, Any]] = Field(default_factory=list)
    is_used: bool = False
    weight: Optional[float] = Field(default=None, ge=0)
    dimensions: List[Dict[str, Any]] = Field(default_factory=list)
    sizes: List[Dict[str, Any]] = Field(default_factory=list)
    purity: Optional[float] = Field(default=None, ge=0, le=100)
    description: Optional[str] = None
    video_ids: List[str] = Field(default_factory=list)


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    producer: Optional[Dict[str, Any]] = None
    price: Optional[float] = Field(default=None, ge=0)
    profit_percent: Optional[float] = Field(default=None, ge=0, le=100)
    manufacture_year: Optional[int] = None
    production_year: Optional[int] = None
    stock: Optional[int] = Field(default=None, ge=0)
    commercial_name: Optional[str] = None
    linked_qr: Optional[str] = None
    material: Optional[str] = None
    suppliers: Optional[List[Dict[str, Any]]] = None
    origin: Optional[str] = None
    category: Optional[str] = None
    components: Optional[List[Dict[str, Any]]] = None
    is_used: Optional[bool] = None
    weight: Optional[float] = Field(default=None, ge=0)
    dimensions: Optional[List[Dict[str, Any]]] = None
    sizes: Optional[List[Dict[str, Any]]] = None
    purity: Optional[float] = Field(default=None, ge=0, le=100)
    description: Optional[str] = None
    video_ids: Optional[List[str]] = None
