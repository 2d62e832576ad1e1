from decimal import Decimal

from freeproduct.core.constants import SimpleAction
from freeproduct.dto.cart import Cart
from freeproduct.dto.rules import PromotionRule


def make_rule(rule_id=1, gift_sku="G1", qty="1", **overrides) -> PromotionRule:
    data = {
        "rule_id": rule_id,
        "name": f"Rule {rule_id}",
        "simple_action": SimpleAction.ADD_GIFT,
        "discount_amount": Decimal(qty),
        "gift_sku": gift_sku,
        "sort_order": rule_id,
    }
    data.update(overrides)
    return PromotionRule(**data)


def make_cart(catalog, items, store_id=1, quote_id="quote-1") -> Cart:
    cart = Cart(quote_id=quote_id, store_id=store_id)
    for sku, qty in items:
        cart.add_product(catalog.get_by_sku(sku, store_id), Decimal(qty))
    return cart


def gift_lines(cart: Cart):
    return [line for line in cart.list_lines() if line.is_free_gift]
