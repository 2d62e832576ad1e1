"""
Catalog Models

Products that can be handed out as gifts and their stock items.
"""

from sqlalchemy import Column, Integer, String, Numeric, Boolean, JSON, ForeignKey
from sqlalchemy.orm import relationship
from freeproduct.models.common import CommonModel
from freeproduct.core.constants import ProductStatus


class ProductModel(CommonModel):
    """
    Catalog product.

    Attributes:
        sku: Unique stock keeping unit
        price: Catalog unit price
        status: ProductStatus.ENABLED or ProductStatus.DISABLED
        store_ids: Stores the product is assigned to; empty means all stores
    """
    __tablename__ = "catalog_products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, default="")
    price = Column(Numeric(12, 4), nullable=False, default=0)
    status = Column(Integer, nullable=False, default=ProductStatus.ENABLED)
    store_ids = Column(JSON, nullable=False, default=list)

    stock_item = relationship("StockItemModel", uselist=False, back_populates="product", lazy="joined")

    def __repr__(self):
        return f"<ProductModel(sku={self.sku}, status={self.status})>"


class StockItemModel(CommonModel):
    __tablename__ = "catalog_stock_items"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("catalog_products.id"), nullable=False, unique=True)
    qty = Column(Numeric(12, 4), nullable=False, default=0)
    is_in_stock = Column(Boolean, nullable=False, default=True)
    manage_stock = Column(Boolean, nullable=False, default=True)

    product = relationship("ProductModel", back_populates="stock_item")
