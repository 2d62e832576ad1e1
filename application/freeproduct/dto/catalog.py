from typing import List
from decimal import Decimal
from pydantic import BaseModel, Field

from freeproduct.core.constants import ProductStatus


class Product(BaseModel):
    """Catalog product as seen from a cart"""
    product_id: int
    sku: str
    name: str = ""
    price: Decimal = Field(default=Decimal("0"), description="Catalog unit price")
    status: int = ProductStatus.ENABLED
    store_ids: List[int] = Field(default_factory=list, description="Assigned stores, empty means all stores")
    manage_stock: bool = True
    is_in_stock: bool = True
    stock_qty: Decimal = Decimal("0")

    def is_enabled(self) -> bool:
        return self.status == ProductStatus.ENABLED

    def is_in_store(self, store_id: int) -> bool:
        return not self.store_ids or store_id in self.store_ids
