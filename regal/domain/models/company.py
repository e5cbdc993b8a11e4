from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class Company:
    id: str
    owner_id: str
    name: str
    commercial_name: str
    slogan: Optional[str] = None
    vat: Optional[str] = None
    category: Optional[str] = None
    industry: Optional[str] = None
    img_ids: List[str] = field(default_factory=list)
    background_img: Optional[str] = None
    mobile: List[Dict[str, Any]] = field(default_factory=list)
    address: List[Dict[str, Any]] = field(default_factory=list)
    phone: List[Dict[str, Any]] = field(default_factory=list)
    employees: List[Dict[str, Any]] = field(default_factory=list)

    def to_public(self) -> Dict[str, Any]:
        return asdict(self)
