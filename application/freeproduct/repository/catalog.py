from typing import Optional
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.orm import Session

# Models
from freeproduct.models.catalog import ProductModel

# DTOs
from freeproduct.dto.catalog import Product

# Stock
from freeproduct.validations.stock import StockValidator

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.catalog_repository")

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()


class CatalogRepository:
    """Product lookups by SKU and salability checks"""

    def __init__(self, db: Session, stock_validator_cls=StockValidator, live_stock_check: Optional[bool] = None):
        self.db = db
        self.stock_validator_cls = stock_validator_cls
        self.live_stock_check = configs.STOCK_CHECK_ENABLED if live_stock_check is None else live_stock_check

    def get_id_by_sku(self, sku: str) -> Optional[int]:
        if not sku:
            return None
        return self.db.execute(select(ProductModel.id).where(ProductModel.sku == sku)).scalar_one_or_none()

    def get_by_sku(self, sku: str, store_id: int) -> Optional[Product]:
        """Load a product for the given store; None when the SKU is unknown."""
        if not sku:
            return None
        row = self.db.execute(select(ProductModel).where(ProductModel.sku == sku)).unique().scalar_one_or_none()
        if row is None:
            logger.info(f"product_not_found | sku={sku} store_id={store_id}")
            return None
        return self._to_product(row)

    def is_salable(self, product: Product, store_id: int) -> bool:
        if not product.is_enabled():
            logger.info(f"product_not_salable | sku={product.sku} store_id={store_id} reason=disabled")
            return False
        if not product.is_in_store(store_id):
            logger.info(f"product_not_salable | sku={product.sku} store_id={store_id} reason=not_in_store")
            return False
        if product.manage_stock and (not product.is_in_stock or product.stock_qty <= 0):
            logger.info(f"product_not_salable | sku={product.sku} store_id={store_id} reason=out_of_stock qty={product.stock_qty}")
            return False
        if self.live_stock_check:
            available = self.stock_validator_cls(store_id=store_id, sku=product.sku).get_available_quantity()
            if available <= 0:
                logger.info(f"product_not_salable | sku={product.sku} store_id={store_id} reason=no_live_stock")
                return False
        return True

    @staticmethod
    def _to_product(row: ProductModel) -> Product:
        stock = row.stock_item
        return Product(
            product_id=row.id,
            sku=row.sku,
            name=row.name or "",
            price=Decimal(str(row.price)),
            status=row.status,
            store_ids=list(row.store_ids or []),
            manage_stock=stock.manage_stock if stock else False,
            is_in_stock=stock.is_in_stock if stock else True,
            stock_qty=Decimal(str(stock.qty)) if stock else Decimal("0"),
        )
