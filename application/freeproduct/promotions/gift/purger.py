from typing import Optional

from freeproduct.dto.cart import Cart
from freeproduct.middlewares.request_context import request_context

from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.gift_line_purger")

# Settings
from freeproduct.config.settings import FreeproductConfigs
configs = FreeproductConfigs()


class GiftLinePurger:
    """Removes the gift lines of a previous pass before totals are collected again."""

    def __init__(self, current_store_id: Optional[int] = None):
        self.current_store_id = current_store_id

    def purge(self, cart: Cart) -> int:
        """Remove every free gift line from the cart.

        Lines are enumerated with the cart switched to the store currently
        being served: product data attached to lines is resolved for that
        store, and resolving it for another store can pick an incompatible
        catalog index. The cart's own store is restored afterwards.

        Returns:
            Number of removed lines
        """
        original_store_id = cart.get_store_id()
        cart.set_store_id(self._resolve_current_store_id())
        removed = 0
        try:
            for line in cart.list_lines():
                if line.is_free_gift:
                    cart.remove_line(line.line_id)
                    removed += 1
        finally:
            cart.set_store_id(original_store_id)

        if removed:
            logger.info(f"gift_lines_purged | quote_id={cart.quote_id} removed={removed}")
        return removed

    def _resolve_current_store_id(self) -> int:
        if self.current_store_id is not None:
            return self.current_store_id
        if request_context.store_id is not None:
            return request_context.store_id
        return configs.DEFAULT_STORE_ID
