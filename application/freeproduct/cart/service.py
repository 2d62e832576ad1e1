from typing import Optional
from sqlalchemy.orm import Session

# Repositories
from freeproduct.repository.catalog import CatalogRepository
from freeproduct.repository.rules import RulesRepository

# Gift rule pipeline
from freeproduct.promotions.engine import GiftRuleEvaluator
from freeproduct.promotions.gift.processor import GiftRuleProcessor
from freeproduct.promotions.gift.reorder import reorder_items

# DTOs
from freeproduct.dto.cart import Cart, CollectTotalsResponse
from freeproduct.dto.reorder import ReorderRequest, ReorderResponse

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.cart_service")


class CartService:
    """Cart operations that involve gift rules"""

    def __init__(self, db: Session, catalog: Optional[CatalogRepository] = None, rules: Optional[RulesRepository] = None):
        self.catalog = catalog or CatalogRepository(db)
        self.rules = rules or RulesRepository(db)
        self.evaluator = GiftRuleEvaluator(GiftRuleProcessor(self.catalog))

    def collect_totals(self, cart: Cart) -> CollectTotalsResponse:
        rules = self.rules.get_active_rules()
        evaluation_pass = self.evaluator.collect_totals(cart, rules)
        return CollectTotalsResponse(
            cart=cart,
            applied_rule_ids=sorted(evaluation_pass.applied_rule_ids),
            gift_line_ids=evaluation_pass.gift_line_ids,
            failures=evaluation_pass.failures,
            subtotal=cart.subtotal,
        )

    def reorder(self, request: ReorderRequest) -> ReorderResponse:
        """Rebuild the lines of a previous order and recollect totals.

        Gift lines carried over from the order are purged by the totals run
        and granted again only if their rule still applies.
        """
        cart = request.cart
        _, skipped = reorder_items(cart, request.items, self.catalog)
        totals = self.collect_totals(cart)
        return ReorderResponse(**totals.model_dump(), skipped_skus=skipped)
