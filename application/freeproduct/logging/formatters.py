"""
JSON formatter for Freeproduct application logs
"""
import json
import logging
from datetime import datetime

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()

APPLICATION_ENVIRONMENT = configs.APPLICATION_ENVIRONMENT
APP_NAME = configs.APP_NAME


class AppLogsJSONFormatter(logging.Formatter):

    def __init__(self):
        super().__init__()
        self.application_environment = APPLICATION_ENVIRONMENT

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line_number': record.lineno,
            'environment': self.application_environment,
            'service': APP_NAME,
            'request_id': getattr(record, 'request_id', ''),
            'request_method': getattr(record, 'request_method', ''),
            'request_path': getattr(record, 'request_path', ''),
            'store_id': getattr(record, 'store_id', ''),
            'quote_id': getattr(record, 'quote_id', ''),
            'rule_id': getattr(record, 'rule_id', ''),
        }

        if record.exc_info:
            log_entry['exception'] = str(record.exc_info[1])

        return json.dumps(log_entry, ensure_ascii=False, default=str)
