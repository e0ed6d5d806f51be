"""
Finished-goods stock repository (persistence).

Reads and adjusts the finished_goods_inventory table. It contains no
availability rules; those live in domain.availability.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.availability import ProductId, StockSnapshot
from repositories.client import get_supabase
from repositories.serialization import raise_on_error

logger = logging.getLogger(__name__)

# Supabase table name for finished goods stock.
# Keep this aligned with your database schema.
_STOCK_TABLE: str = "finished_goods_inventory"


def get_stock_snapshot(product_id: ProductId) -> Optional[StockSnapshot]:
    """
    Fetch the on-hand stock for a product.

    Returns:
    - StockSnapshot, or None if the product has no stock row
    """

    response = (
        get_supabase()
        .table(_STOCK_TABLE)
        .select("product_id, quantity_available")
        .eq("product_id", product_id)
        .limit(1)
        .execute()
    )
    rows = raise_on_error(response, "fetch finished goods stock")
    if not rows:
        return None

    return StockSnapshot(
        product_id=product_id,
        available_stock=max(int(rows[0].get("quantity_available") or 0), 0),
    )


def add_finished_goods(product_id: ProductId, quantity: int) -> int:
    """
    Add completed units to a product's stock, creating the row if needed.

    Returns:
    - The new quantity_available
    """

    if quantity <= 0:
        raise ValueError("quantity must be > 0")

    existing = get_stock_snapshot(product_id)
    client = get_supabase()

    if existing is None:
        response = (
            client.table(_STOCK_TABLE)
            .insert({"product_id": product_id, "quantity_available": quantity, "reserved_quantity": 0})
            .execute()
        )
        raise_on_error(response, "create finished goods stock")
        new_quantity = quantity
    else:
        new_quantity = existing.available_stock + quantity
        response = (
            client.table(_STOCK_TABLE)
            .update({"quantity_available": new_quantity})
            .eq("product_id", product_id)
            .execute()
        )
        raise_on_error(response, "update finished goods stock")

    logger.info(
        "Added finished goods to stock",
        extra={"product_id": product_id, "quantity": quantity, "new_quantity": new_quantity},
    )
    return new_quantity


__all__ = [
    "add_finished_goods",
    "get_stock_snapshot",
]
