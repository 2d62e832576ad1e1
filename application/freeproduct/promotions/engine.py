from typing import Callable, List, Optional

from freeproduct.dto.cart import Cart, CartLine
from freeproduct.dto.rules import PromotionRule
from freeproduct.middlewares.request_context import request_context
from freeproduct.promotions.gift.evaluation_pass import EvaluationPass
from freeproduct.promotions.gift.processor import GiftRuleProcessor
from freeproduct.promotions.gift.purger import GiftLinePurger
from freeproduct.validations.promotions import RuleMatchValidator

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.gift_rule_evaluator")

RuleMatcher = Callable[[PromotionRule, Cart, CartLine], bool]


class GiftRuleEvaluator:
    """Runs the gift stages of a cart totals recalculation.

    Gift lines from the previous pass are purged first, then every paid line
    is matched against the rules in sort order and each matching add_gift
    rule contributes at most one gift line.
    """

    def __init__(self, processor: GiftRuleProcessor, purger: Optional[GiftLinePurger] = None, matcher: Optional[RuleMatcher] = None):
        self.processor = processor
        self.purger = purger or GiftLinePurger()
        self.matcher = matcher or RuleMatchValidator().matches

    def collect_totals(self, cart: Cart, rules: List[PromotionRule]) -> EvaluationPass:
        request_context.quote_id = cart.quote_id
        self.purger.purge(cart)

        evaluation_pass = EvaluationPass()
        ordered_rules = sorted(rules, key=lambda r: (r.sort_order, r.rule_id))
        for line in cart.list_lines():
            self.process_line(cart, line, ordered_rules, evaluation_pass)

        logger.info(
            f"collect_totals | quote_id={cart.quote_id} lines={len(cart.lines)} "
            f"applied_rules={sorted(evaluation_pass.applied_rule_ids)} failures={len(evaluation_pass.failures)}"
        )
        return evaluation_pass

    def process_line(self, cart: Cart, line: CartLine, rules: List[PromotionRule], evaluation_pass: EvaluationPass) -> None:
        for rule in rules:
            if not self.matcher(rule, cart, line):
                continue
            request_context.rule_id = rule.rule_id
            try:
                self.processor.process(cart, line, rule, evaluation_pass)
            finally:
                request_context.rule_id = None
            if rule.stop_rules_processing:
                break
