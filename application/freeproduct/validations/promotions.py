from datetime import date
from typing import Dict, List, Optional

from freeproduct.dto.cart import Cart, CartLine
from freeproduct.dto.rules import PromotionRule

from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.rule_match_validator")


class RuleMatchValidator:
    """Decides whether a rule applies to a cart line.

    Stands in for the host's rule condition engine: active flag, date window,
    store assignment, minimum subtotal of the paid lines and an optional SKU
    condition on the line.
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def matches(self, rule: PromotionRule, cart: Cart, line: CartLine) -> bool:
        errors = self.validate_all(rule, cart, line)
        if errors:
            logger.debug(f"rule_not_matched | rule_id={rule.rule_id} line_id={line.line_id} errors={errors}")
        return not errors

    def validate_all(self, rule: PromotionRule, cart: Cart, line: CartLine) -> List[Dict]:
        errors = []
        for check in (
            self.validate_active,
            self.validate_time_window,
            self.validate_store,
            self.validate_min_subtotal,
            self.validate_line_sku,
        ):
            error = check(rule, cart, line)
            if error:
                errors.append(error)
        return errors

    def validate_active(self, rule: PromotionRule, cart: Cart, line: CartLine) -> Optional[Dict]:
        if not rule.is_active:
            return {"field": "is_active", "message": "Rule is inactive"}
        return None

    def validate_time_window(self, rule: PromotionRule, cart: Cart, line: CartLine) -> Optional[Dict]:
        today = self.today or date.today()
        if rule.from_date and today < rule.from_date:
            return {"field": "from_date", "message": "Rule has not started yet"}
        if rule.to_date and today > rule.to_date:
            return {"field": "to_date", "message": "Rule has expired"}
        return None

    def validate_store(self, rule: PromotionRule, cart: Cart, line: CartLine) -> Optional[Dict]:
        if rule.store_ids and cart.get_store_id() not in rule.store_ids:
            return {"field": "store_ids", "message": f"Rule not valid for store {cart.get_store_id()}"}
        return None

    def validate_min_subtotal(self, rule: PromotionRule, cart: Cart, line: CartLine) -> Optional[Dict]:
        paid_subtotal = sum((l.row_total for l in cart.list_lines() if not l.is_free_gift), 0)
        if paid_subtotal < rule.min_subtotal:
            return {"field": "min_subtotal", "message": f"Minimum subtotal {rule.min_subtotal} not met"}
        return None

    def validate_line_sku(self, rule: PromotionRule, cart: Cart, line: CartLine) -> Optional[Dict]:
        if rule.condition_skus and line.sku not in rule.condition_skus:
            return {"field": "condition_skus", "message": f"Line sku {line.sku} not covered by rule"}
        return None
