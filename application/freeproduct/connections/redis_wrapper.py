import json
from urllib.parse import quote_plus

import redis

# Logger
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.redis_wrapper")

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()

REDIS_URL = configs.REDIS_URL


class RedisKeyProcessor:

    @staticmethod
    def _safe(part) -> str:
        """Encode dynamic key segments so Redis keys contain only URL-safe chars."""
        return quote_plus(str(part), safe='')

    def _stock_key(self, store_id, sku: str) -> str:
        return f"stock:{self._safe(store_id)}:{self._safe(sku)}"

    def _page_data_key(self, session_id: str) -> str:
        return f"admin:page_data:{self._safe(session_id)}"


class RedisJSONWrapper:
    def __init__(self, redis_uri=REDIS_URL, database=None):
        if database is not None:
            redis_uri = f"{redis_uri}/{database}"
        try:
            self.redis_client = redis.from_url(redis_uri)
            self.redis_client.ping()
            self.connected = True
        except redis.exceptions.RedisError as e:
            logger.error(f"redis_connect_failed | uri={redis_uri} error={e}")
            self.redis_client = None
            self.connected = False

    def get(self, key):
        if not self.connected:
            return None
        value = self.redis_client.get(key)
        if value is None:
            return None
        return json.loads(value)

    def set_with_ttl(self, key, data, ttl_seconds: int):
        if not self.connected:
            logger.warning(f"redis_set_skipped_not_connected | key={key}")
            return
        value = json.dumps(data, default=str)
        if ttl_seconds > 0:
            self.redis_client.setex(key, ttl_seconds, value)
        else:
            self.redis_client.set(key, value)

    def delete(self, key):
        if self.connected:
            self.redis_client.delete(key)
