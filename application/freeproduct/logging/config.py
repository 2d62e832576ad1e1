"""
Logging configuration for the Freeproduct service.
Local JSON files by default, Firehose when enabled.
"""

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()

class LoggingConfig:
    """Logging configuration read once from the environment"""

    FIREHOSE_ENABLED = configs.FIREHOSE_ENABLED
    LOG_DIR = configs.LOG_DIR

    # Stream
    APP_LOGS_STREAM_NAME = configs.APP_LOGS_STREAM_NAME
    LOG_BUFFER_TIMEOUT = configs.LOG_BUFFER_TIMEOUT
    APP_LOGS_CAPACITY = configs.APP_LOGS_CAPACITY

    # Firehose settings
    FIREHOSE_REGION_NAME = configs.FIREHOSE_REGION_NAME
    FIREHOSE_ACCESS_KEY_ID = configs.FIREHOSE_ACCESS_KEY_ID
    FIREHOSE_SECRET_ACCESS_KEY = configs.FIREHOSE_SECRET_ACCESS_KEY
    FIREHOSE_RETRY_COUNT = configs.FIREHOSE_RETRY_COUNT
    FIREHOSE_RETRY_DELAY = configs.FIREHOSE_RETRY_DELAY

    @classmethod
    def is_valid_config(cls):
        """Only Firehose needs credentials"""
        if cls.FIREHOSE_ENABLED:
            if not cls.FIREHOSE_ACCESS_KEY_ID or not cls.FIREHOSE_SECRET_ACCESS_KEY:
                return False, "Firehose credentials not configured"
        return True, "Configuration is valid"
