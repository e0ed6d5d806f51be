"""
Product and material inventory repository (persistence).

Reads the catalog rows and material stock the job scheduler needs.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from domain.availability import ProductId
from domain.materials import MaterialStock
from domain.product import Product
from repositories.client import get_supabase
from repositories.serialization import parse_string_list, raise_on_error

_PRODUCTS_TABLE: str = "products"
_MATERIAL_INVENTORY_TABLE: str = "inventory"


def _row_to_product(row: Mapping[str, Any]) -> Product:
    return Product(
        id=int(row["id"]),
        product_name=str(row["product_name"]),
        sku=row.get("sku"),
        weight_grams=float(row.get("weight") or 0),
        print_time_hours=float(row.get("print_time") or 0),
        required_materials=parse_string_list(row.get("required_materials")),
    )


def get_product(product_id: ProductId) -> Optional[Product]:
    """
    Fetch a product by id.

    Returns:
    - Product, or None if it does not exist
    """

    response = (
        get_supabase()
        .table(_PRODUCTS_TABLE)
        .select("id, product_name, sku, weight, print_time, required_materials")
        .eq("id", product_id)
        .limit(1)
        .execute()
    )
    rows = raise_on_error(response, "fetch product")
    return _row_to_product(rows[0]) if rows else None


def list_material_stock() -> List[MaterialStock]:
    """Fetch all material inventory rows."""

    response = (
        get_supabase()
        .table(_MATERIAL_INVENTORY_TABLE)
        .select("id, material_name, quantity_available")
        .execute()
    )
    rows = raise_on_error(response, "fetch material inventory")
    return [
        MaterialStock(
            id=int(row["id"]),
            material_name=str(row["material_name"]),
            quantity_available=float(row.get("quantity_available") or 0),
        )
        for row in rows
    ]


__all__ = [
    "get_product",
    "list_material_stock",
]
