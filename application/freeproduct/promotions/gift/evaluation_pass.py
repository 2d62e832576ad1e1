from typing import List, Set
from pydantic import BaseModel, Field

from freeproduct.dto.cart import GiftFailure


class EvaluationPass(BaseModel):
    """State of one run of rule matching against a cart"""
    applied_rule_ids: Set[int] = Field(default_factory=set)
    gift_line_ids: List[int] = Field(default_factory=list)
    failures: List[GiftFailure] = Field(default_factory=list)

    def is_applied(self, rule_id: int) -> bool:
        return rule_id in self.applied_rule_ids

    def mark_applied(self, rule_id: int, line_id: int) -> None:
        self.applied_rule_ids.add(rule_id)
        self.gift_line_ids.append(line_id)
