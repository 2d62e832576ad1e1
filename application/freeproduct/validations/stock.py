from typing import Optional

from freeproduct.connections.redis_wrapper import RedisJSONWrapper, RedisKeyProcessor
from freeproduct.config.settings import FreeproductConfigs

from freeproduct.logging.utils import get_app_logger
logger = get_app_logger('freeproduct.stock_validations')

configs = FreeproductConfigs()


class StockValidator:
    """Live stock published to Redis under stock:{store}:{sku}"""

    def __init__(self, store_id: int, sku: str, redis_wrapper: Optional[RedisJSONWrapper] = None):
        self.store_id = store_id
        self.sku = sku
        self.redis_key = RedisKeyProcessor()._stock_key(self.store_id, self.sku)
        self.redis_wrapper = redis_wrapper

    def get_stock(self):
        redis_wrapper = self.redis_wrapper or RedisJSONWrapper(database=configs.REDIS_STOCK_DB)
        stock = redis_wrapper.get(self.redis_key)
        if stock is None:
            logger.warning(f"Stock not found for store {self.store_id} and sku {self.sku}")
            return {"available_quantity": 0}
        return stock.get("data", {})

    def get_available_quantity(self) -> float:
        return self.get_stock().get("available_quantity", 0)
