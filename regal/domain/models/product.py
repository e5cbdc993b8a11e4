from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class Product:
    id: str
    owner_id: str
    company_id: str
    name: str
    producer: Dict[str, Any]
    price: float
    profit_percent: float
    manufacture_year: int
    production_year: int
    stock: int
    auto_qr: str
    linked_qr: Optional[str] = None
    commercial_name: Optional[str] = None
    material: Optional[str] = None
    suppliers: List[Dict[str, Any]] = field(default_factory=list)
    origin: Optional[str] = None
    category: Optional[str] = None
    components: List[Dict[str, Any]] = field(default_factory=list)
    is_used: bool = False
    weight: Optional[float] = None
    dimensions: List[Dict[str, Any]] = field(default_factory=list)
    sizes: List[Dict[str, Any]] = field(default_factory=list)
    purity: Optional[float] = None
    description: Optional[str] = None
    image_ids: List[str] = field(default_factory=list)
    video_ids: List[str] = field(default_factory=list)

    def to_public(self) -> Dict[str, Any]:
        return asdict(self)
