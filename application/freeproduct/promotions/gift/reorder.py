from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from freeproduct.dto.cart import Cart, CartLine
from freeproduct.dto.catalog import Product
from freeproduct.dto.reorder import OrderedItem
from freeproduct.repository.catalog import CatalogRepository

from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.reorder")


class PreparedProduct(BaseModel):
    """Product ready to be added to a cart from a stored buy request"""
    product: Product
    qty: Decimal
    buy_request: Dict[str, Any]
    is_free_product: bool = False


class ReorderFlagPropagator:
    """Carries the free gift flag from a stored buy request to the rebuilt cart line."""

    def prepare(self, product: Product, buy_request: Dict[str, Any], qty: Decimal) -> PreparedProduct:
        return PreparedProduct(
            product=product,
            qty=qty,
            buy_request=dict(buy_request),
            is_free_product=bool(buy_request.get("is_free_product")),
        )

    def add_to_cart(self, cart: Cart, prepared: PreparedProduct) -> CartLine:
        return cart.add_product(prepared.product, prepared.qty, prepared.buy_request, is_free_product=prepared.is_free_product)


def reorder_items(cart: Cart, items: List[OrderedItem], catalog: CatalogRepository, propagator: Optional[ReorderFlagPropagator] = None) -> Tuple[List[CartLine], List[str]]:
    """Add the items of a previous order to the cart.

    Returns:
        Lines created or updated, and SKUs that could not be found
    """
    propagator = propagator or ReorderFlagPropagator()
    lines, skipped = [], []
    for item in items:
        product = catalog.get_by_sku(item.sku, cart.get_store_id())
        if product is None:
            logger.warning(f"reorder_item_skipped | sku={item.sku} store_id={cart.get_store_id()}")
            skipped.append(item.sku)
            continue
        prepared = propagator.prepare(product, item.buy_request, item.qty)
        lines.append(propagator.add_to_cart(cart, prepared))
    logger.info(f"reorder_items | quote_id={cart.quote_id} added={len(lines)} skipped={len(skipped)}")
    return lines, skipped
