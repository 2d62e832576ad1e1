"""
Sales Rule Model

Cart price rules, including those whose action is to add a gift.
"""

from sqlalchemy import Column, Integer, String, Numeric, Boolean, JSON, Date, Index
from freeproduct.models.common import CommonModel


class SalesRuleModel(CommonModel):
    """
    Attributes:
        simple_action: Action kind, SimpleAction.ADD_GIFT for gift rules
        discount_amount: For gift rules the integer part is the gift quantity
        gift_sku: SKU handed out by ADD_GIFT rules
        condition_skus: Line SKUs the rule applies to; empty means every line
    """
    __tablename__ = "salesrules"

    rule_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    simple_action = Column(String(32), nullable=False)
    discount_amount = Column(Numeric(12, 4), nullable=False, default=0)
    gift_sku = Column(String(64), nullable=True)
    store_ids = Column(JSON, nullable=False, default=list)
    from_date = Column(Date, nullable=True)
    to_date = Column(Date, nullable=True)
    min_subtotal = Column(Numeric(12, 4), nullable=False, default=0)
    condition_skus = Column(JSON, nullable=False, default=list)
    sort_order = Column(Integer, nullable=False, default=0)
    stop_rules_processing = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_salesrules_active_sort", "is_active", "sort_order"),
    )

    def __repr__(self):
        return f"<SalesRuleModel(rule_id={self.rule_id}, action={self.simple_action}, gift_sku={self.gift_sku})>"
