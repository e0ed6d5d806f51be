"""
Domain: Catalog product.

Only the fields the scheduling and availability rules read are modelled here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .availability import ProductId


@dataclass(frozen=True, slots=True)
class Product:
    """
    A sellable printed product.

    weight_grams is the material consumed per unit; required_materials are
    material names matched against material inventory.
    """

    id: ProductId
    product_name: str
    sku: Optional[str] = None
    weight_grams: float = 0.0
    print_time_hours: float = 0.0
    required_materials: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.weight_grams < 0:
            raise ValueError("weight_grams must be >= 0")
        if self.print_time_hours < 0:
            raise ValueError("print_time_hours must be >= 0")

    def estimated_job_hours(self, quantity: int) -> float:
        return self.print_time_hours * quantity
