"""
Domain: Material availability for a print job.

Contract excerpts implemented here:
- Material required for a job is quantity x product weight per unit (grams).
- An inventory item matches a required material when either name contains
  the other, case-insensitively.
- Status per material:
  - Available: matching stock >= required
  - Low:       0 < matching stock < required
  - Out:       matching items exist but hold no stock
  - Not Found: no inventory item matches
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence


class MaterialStatus(str, Enum):
    AVAILABLE = "Available"
    LOW = "Low"
    OUT = "Out"
    NOT_FOUND = "Not Found"


@dataclass(frozen=True, slots=True)
class MaterialStock:
    """A material inventory row (filament spool, resin bottle, ...)."""

    id: int
    material_name: str
    quantity_available: float


@dataclass(frozen=True, slots=True)
class MaterialCheck:
    material: str
    available: float
    required: float
    status: MaterialStatus
    items: List[MaterialStock] = field(default_factory=list)

    @property
    def is_sufficient(self) -> bool:
        return self.status is MaterialStatus.AVAILABLE


def _matches(material: str, item: MaterialStock) -> bool:
    wanted = material.lower()
    have = item.material_name.lower()
    return wanted in have or have in wanted


def check_material_availability(
    required_materials: Sequence[str],
    weight_per_unit_grams: float,
    quantity: int,
    inventory: Iterable[MaterialStock],
) -> List[MaterialCheck]:
    """
    Check every required material against material inventory.

    Returns one MaterialCheck per required material, in the order given.
    """

    required = quantity * (weight_per_unit_grams or 0)
    stock = list(inventory)
    checks: List[MaterialCheck] = []

    for material in required_materials:
        matching = [item for item in stock if _matches(material, item)]
        if not matching:
            checks.append(MaterialCheck(material, 0, required, MaterialStatus.NOT_FOUND))
            continue

        available = sum(item.quantity_available for item in matching)
        if available <= 0:
            status = MaterialStatus.OUT
        elif available >= required:
            status = MaterialStatus.AVAILABLE
        else:
            status = MaterialStatus.LOW
        checks.append(MaterialCheck(material, available, required, status, matching))

    return checks


def has_insufficient_materials(checks: Iterable[MaterialCheck]) -> bool:
    return any(not check.is_sufficient for check in checks)


__all__ = [
    "MaterialCheck",
    "MaterialStatus",
    "MaterialStock",
    "check_material_availability",
    "has_insufficient_materials",
]
