from typing import Any, Dict, List
from decimal import Decimal
from pydantic import BaseModel, Field

from freeproduct.dto.cart import Cart, CollectTotalsResponse


class OrderedItem(BaseModel):
    """Line of a previous order as stored with its buy request"""
    sku: str
    qty: Decimal = Field(default=Decimal("1"))
    buy_request: Dict[str, Any] = Field(default_factory=dict, description="Stored info_buyRequest of the order line")


class ReorderRequest(BaseModel):
    cart: Cart
    items: List[OrderedItem] = Field(..., description="Items of the order being placed again")


class ReorderResponse(CollectTotalsResponse):
    skipped_skus: List[str] = Field(default_factory=list, description="SKUs no longer available in the cart's store")
