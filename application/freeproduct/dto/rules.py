from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator


class PromotionRule(BaseModel):
    """Cart price rule"""
    rule_id: int
    name: str = ""
    is_active: bool = True
    simple_action: str
    discount_amount: Decimal = Field(default=Decimal("0"), description="For add_gift rules the gift quantity")
    gift_sku: Optional[str] = None
    store_ids: List[int] = Field(default_factory=list)
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    min_subtotal: Decimal = Decimal("0")
    condition_skus: List[str] = Field(default_factory=list)
    sort_order: int = 0
    stop_rules_processing: bool = False

    @property
    def gift_qty(self) -> int:
        return int(self.discount_amount)


class RuleSaveRequest(BaseModel):
    """Posted admin form for a cart price rule"""
    rule_id: Optional[int] = None
    name: str = ""
    is_active: bool = True
    simple_action: str
    discount_amount: Decimal = Decimal("0")
    gift_sku: Optional[str] = None
    store_ids: List[int] = Field(default_factory=list)
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    min_subtotal: Decimal = Decimal("0")
    condition_skus: List[str] = Field(default_factory=list)
    sort_order: int = 0
    stop_rules_processing: bool = False

    @field_validator("gift_sku")
    @classmethod
    def normalize_gift_sku(cls, v):
        """Strip surrounding whitespace; a blank SKU is stored as None"""
        if v is None:
            return None
        return v.strip() or None


class FormField(BaseModel):
    name: str
    type: str
    label: str
    title: Optional[str] = None
    note: Optional[str] = None
    values: List[Dict[str, str]] = Field(default_factory=list)
    depends: Dict[str, str] = Field(default_factory=dict, description="Show only when the named fields hold these values")


class Fieldset(BaseModel):
    id: str
    legend: str
    fields: List[FormField] = Field(default_factory=list)

    def add_field(self, field: FormField) -> FormField:
        self.fields.append(field)
        return field


class ActionForm(BaseModel):
    """Actions tab of the cart price rule form"""
    fieldsets: List[Fieldset] = Field(default_factory=list)

    def get_fieldset(self, fieldset_id: str) -> Optional[Fieldset]:
        return next((f for f in self.fieldsets if f.id == fieldset_id), None)

    def get_field(self, name: str) -> Optional[FormField]:
        for fieldset in self.fieldsets:
            for field in fieldset.fields:
                if field.name == name:
                    return field
        return None
