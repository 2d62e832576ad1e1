from typing import List, Optional
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.orm import Session

# Models
from freeproduct.models.rules import SalesRuleModel

# DTOs
from freeproduct.dto.rules import PromotionRule, RuleSaveRequest

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.rules_repository")

RULE_FIELDS = [
    "name", "is_active", "simple_action", "discount_amount", "gift_sku", "store_ids", "from_date",
    "to_date", "min_subtotal", "condition_skus", "sort_order", "stop_rules_processing",
]


class RulesRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_active_rules(self) -> List[PromotionRule]:
        """Active rules in processing order; store and date filtering happen per cart."""
        rows = self.db.execute(
            select(SalesRuleModel)
            .where(SalesRuleModel.is_active.is_(True))
            .order_by(SalesRuleModel.sort_order, SalesRuleModel.rule_id)
        ).scalars().all()
        logger.info(f"get_active_rules | count={len(rows)}")
        return [self._to_rule(row) for row in rows]

    def get(self, rule_id: int) -> Optional[PromotionRule]:
        row = self.db.get(SalesRuleModel, rule_id)
        return self._to_rule(row) if row else None

    def save(self, request: RuleSaveRequest) -> Optional[PromotionRule]:
        """Insert or update a rule; None when an update targets a missing rule."""
        if request.rule_id is not None:
            row = self.db.get(SalesRuleModel, request.rule_id)
            if row is None:
                logger.warning(f"save_rule_not_found | rule_id={request.rule_id}")
                return None
        else:
            row = SalesRuleModel()
            self.db.add(row)

        for field in RULE_FIELDS:
            setattr(row, field, getattr(request, field))
        if not row.gift_sku:
            row.gift_sku = None

        self.db.commit()
        self.db.refresh(row)
        logger.info(f"save_rule | rule_id={row.rule_id} action={row.simple_action} gift_sku={row.gift_sku}")
        return self._to_rule(row)

    @staticmethod
    def _to_rule(row: SalesRuleModel) -> PromotionRule:
        return PromotionRule(
            rule_id=row.rule_id,
            name=row.name or "",
            is_active=row.is_active,
            simple_action=row.simple_action,
            discount_amount=Decimal(str(row.discount_amount)),
            gift_sku=row.gift_sku,
            store_ids=list(row.store_ids or []),
            from_date=row.from_date,
            to_date=row.to_date,
            min_subtotal=Decimal(str(row.min_subtotal)),
            condition_skus=list(row.condition_skus or []),
            sort_order=row.sort_order,
            stop_rules_processing=row.stop_rules_processing,
        )
