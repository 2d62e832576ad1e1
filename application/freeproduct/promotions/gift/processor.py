import json
import uuid
from decimal import Decimal
from typing import Optional

from freeproduct.core.constants import SimpleAction, LineOptionCode, GiftErrorCode
from freeproduct.dto.cart import Cart, CartLine, GiftFailure, LineOption
from freeproduct.dto.catalog import Product
from freeproduct.dto.rules import PromotionRule
from freeproduct.promotions.gift.evaluation_pass import EvaluationPass
from freeproduct.repository.catalog import CatalogRepository

from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.gift_rule_processor")


class GiftRuleProcessor:
    """Adds the gift of an add_gift rule once the rule matched a cart line."""

    def __init__(self, catalog: CatalogRepository):
        self.catalog = catalog

    def process(self, cart: Cart, line: CartLine, rule: PromotionRule, evaluation_pass: EvaluationPass) -> Optional[CartLine]:
        if (rule.simple_action != SimpleAction.ADD_GIFT
                or line.is_free_gift
                or evaluation_pass.is_applied(rule.rule_id)):
            return None

        product, error_code = self._resolve_gift(rule, line.store_id)
        if product is None:
            logger.error(
                f"Gift product not saleable. Rule ID: {rule.rule_id}, Gift SKU: {rule.gift_sku}, "
                f"Store ID: {cart.get_store_id()} | reason={error_code}"
            )
            evaluation_pass.failures.append(GiftFailure(
                rule_id=rule.rule_id, gift_sku=rule.gift_sku, store_id=cart.get_store_id(), error_code=error_code
            ))
            return None

        gift_line = cart.add_line(self.build_gift_line(product, rule.gift_qty, line.store_id))
        gift_line.applying_rule_id = rule.rule_id
        evaluation_pass.mark_applied(rule.rule_id, gift_line.line_id)
        logger.info(f"gift_added | rule_id={rule.rule_id} gift_sku={product.sku} qty={rule.gift_qty} line_id={gift_line.line_id}")
        return gift_line

    def _resolve_gift(self, rule: PromotionRule, store_id: int):
        if rule.gift_qty < 1:
            return None, GiftErrorCode.GIFT_QTY_INVALID
        product = self.catalog.get_by_sku(rule.gift_sku, store_id)
        if product is None:
            return None, GiftErrorCode.GIFT_NOT_FOUND
        if not self.catalog.is_salable(product, store_id):
            return None, GiftErrorCode.GIFT_NOT_SALABLE
        return product, None

    @staticmethod
    def build_gift_line(product: Product, qty: int, store_id: int) -> CartLine:
        """A line worth 0 whatever the catalog price.

        is_free_product is written to the buy request so a reorder can tell
        the line was a gift. The uniqid option keeps lines of the same gift
        from being combined.
        """
        return CartLine(
            product_id=product.product_id,
            sku=product.sku,
            name=product.name,
            qty=Decimal(qty),
            price=product.price,
            custom_price=Decimal("0"),
            original_custom_price=product.price,
            is_free_gift=True,
            store_id=store_id,
            options=[
                LineOption(code=LineOptionCode.INFO_BUY_REQUEST, value=json.dumps({"qty": qty, "is_free_product": True})),
                LineOption(code=LineOptionCode.FREEPRODUCT_UNIQID, value=uuid.uuid4().hex),
            ],
        )
