import json
from typing import Any, Dict, List, Optional
from decimal import Decimal
from pydantic import BaseModel, Field, model_validator

from freeproduct.core.constants import LineOptionCode
from freeproduct.dto.catalog import Product


class LineOption(BaseModel):
    code: str
    value: str


class CartLine(BaseModel):
    """Cart line model"""
    line_id: Optional[int] = None
    product_id: int
    sku: str
    name: str = ""
    qty: Decimal = Field(default=Decimal("1"), description="Line quantity")
    price: Decimal = Field(default=Decimal("0"), description="Catalog unit price")
    custom_price: Optional[Decimal] = Field(None, description="Unit price override")
    original_custom_price: Optional[Decimal] = Field(None, description="Catalog price kept for display when overridden")
    is_free_gift: bool = False
    store_id: int
    applying_rule_id: Optional[int] = Field(None, description="Rule that added this line")
    options: List[LineOption] = Field(default_factory=list)

    @property
    def effective_price(self) -> Decimal:
        return self.custom_price if self.custom_price is not None else self.price

    @property
    def row_total(self) -> Decimal:
        return self.effective_price * self.qty

    def get_option(self, code: str) -> Optional[LineOption]:
        for option in self.options:
            if option.code == code:
                return option
        return None

    def representing_options(self) -> Dict[str, str]:
        return {o.code: o.value for o in self.options if o.code not in LineOptionCode.NOT_REPRESENT_OPTIONS}

    def compare(self, other: "CartLine") -> bool:
        """Whether both lines stand for the same product and may be combined."""
        return (
            self.product_id == other.product_id
            and self.is_free_gift == other.is_free_gift
            and self.representing_options() == other.representing_options()
        )


class Cart(BaseModel):
    """Shopping cart (quote) with an ordered list of lines"""
    quote_id: Optional[str] = None
    store_id: int
    lines: List[CartLine] = Field(default_factory=list)

    @model_validator(mode="after")
    def assign_line_ids(self):
        """Give id-less lines the next free id; ids must be unique within the cart."""
        line_ids = [line.line_id for line in self.lines if line.line_id is not None]
        if len(line_ids) != len(set(line_ids)):
            raise ValueError("Cart line ids must be unique")
        for line in self.lines:
            if line.line_id is None:
                line.line_id = self._next_line_id()
        return self

    def get_store_id(self) -> int:
        return self.store_id

    def set_store_id(self, store_id: int) -> None:
        self.store_id = store_id

    def list_lines(self) -> List[CartLine]:
        return list(self.lines)

    def remove_line(self, line_id: int) -> None:
        self.lines = [line for line in self.lines if line.line_id != line_id]

    def add_line(self, line: CartLine) -> CartLine:
        """Append a line as is; never combines with existing lines."""
        line.line_id = self._next_line_id()
        self.lines.append(line)
        return line

    def add_product(self, product: Product, qty: Decimal, buy_request: Optional[Dict[str, Any]] = None, is_free_product: bool = False) -> CartLine:
        """Add a product, increasing the qty of a line that already represents it."""
        buy_request = dict(buy_request or {})
        buy_request.setdefault("qty", str(qty))
        candidate = CartLine(
            product_id=product.product_id,
            sku=product.sku,
            name=product.name,
            qty=qty,
            price=product.price,
            is_free_gift=is_free_product,
            store_id=self.store_id,
            options=[LineOption(code=LineOptionCode.INFO_BUY_REQUEST, value=json.dumps(buy_request, default=str))],
        )
        for line in self.lines:
            if line.compare(candidate):
                line.qty += qty
                return line
        return self.add_line(candidate)

    def merge(self, other: "Cart") -> "Cart":
        """Move the lines of another cart into this one, combining equal lines."""
        for line in other.list_lines():
            existing = next((own for own in self.lines if own.compare(line)), None)
            if existing:
                existing.qty += line.qty
            else:
                self.add_line(line.model_copy(deep=True, update={"store_id": self.store_id}))
        return self

    @property
    def subtotal(self) -> Decimal:
        return sum((line.row_total for line in self.lines), Decimal("0"))

    def _next_line_id(self) -> int:
        return max((line.line_id or 0 for line in self.lines), default=0) + 1


class CollectTotalsRequest(BaseModel):
    cart: Cart = Field(..., description="Cart to recalculate")


class GiftFailure(BaseModel):
    rule_id: int
    gift_sku: Optional[str] = None
    store_id: int
    error_code: str


class CollectTotalsResponse(BaseModel):
    cart: Cart
    applied_rule_ids: List[int] = Field(default_factory=list)
    gift_line_ids: List[int] = Field(default_factory=list)
    failures: List[GiftFailure] = Field(default_factory=list)
    subtotal: Decimal
