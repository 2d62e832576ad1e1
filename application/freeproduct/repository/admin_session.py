from typing import Dict, Optional

from freeproduct.connections.redis_wrapper import RedisJSONWrapper, RedisKeyProcessor

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.admin_session")

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()


class AdminSessionRepository:
    """Keeps unsaved admin form data so a rejected form can be shown again"""

    def __init__(self, redis_wrapper: Optional[RedisJSONWrapper] = None, ttl_seconds: int = configs.ADMIN_SESSION_TTL_SECONDS):
        self.redis = redis_wrapper or RedisJSONWrapper(database=configs.REDIS_SESSION_DB)
        self.keys = RedisKeyProcessor()
        self.ttl_seconds = ttl_seconds

    def set_page_data(self, session_id: str, data: Dict) -> None:
        self.redis.set_with_ttl(self.keys._page_data_key(session_id), data, self.ttl_seconds)
        logger.info(f"page_data_stored | session={session_id} fields={sorted(data.keys())}")

    def get_page_data(self, session_id: str) -> Optional[Dict]:
        return self.redis.get(self.keys._page_data_key(session_id))

    def clear_page_data(self, session_id: str) -> None:
        self.redis.delete(self.keys._page_data_key(session_id))
