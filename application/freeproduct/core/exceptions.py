from typing import Dict, Optional

from freeproduct.core.constants import GiftErrorCode


class RuleConfigurationError(ValueError):
    """A sales rule cannot be saved as submitted."""

    def __init__(self, message: str, field: str = "gift_sku", error_code: str = GiftErrorCode.INVALID_GIFT_SKU):
        super().__init__(message)
        self.message = message
        self.field = field
        self.error_code = error_code

    def to_detail(self, extra: Optional[Dict] = None) -> Dict:
        detail = {"error_code": self.error_code, "field": self.field, "message": self.message}
        if extra:
            detail.update(extra)
        return detail
