from datetime import date, timedelta
from decimal import Decimal

from freeproduct.core.constants import LineOptionCode
from freeproduct.dto.cart import Cart
from freeproduct.promotions.engine import GiftRuleEvaluator
from freeproduct.promotions.gift.processor import GiftRuleProcessor
from freeproduct.promotions.gift.purger import GiftLinePurger
from freeproduct.validations.promotions import RuleMatchValidator

from helpers import make_rule, make_cart, gift_lines


def _evaluator(catalog, today=None):
    return GiftRuleEvaluator(
        GiftRuleProcessor(catalog),
        purger=GiftLinePurger(current_store_id=1),
        matcher=RuleMatchValidator(today=today).matches,
    )


def _gift_signature(cart):
    return sorted((l.sku, l.qty, l.custom_price, l.applying_rule_id) for l in gift_lines(cart))


def test_single_rule_adds_one_gift(cart, catalog):
    evaluation_pass = _evaluator(catalog).collect_totals(cart, [make_rule(rule_id=1)])

    assert len(cart.lines) == 2
    assert evaluation_pass.applied_rule_ids == {1}
    assert _gift_signature(cart) == [("G1", Decimal(1), Decimal(0), 1)]


def test_unsalable_gift_leaves_cart_unchanged(cart, catalog):
    evaluation_pass = _evaluator(catalog).collect_totals(cart, [make_rule(rule_id=1, gift_sku="G2")])

    assert len(cart.lines) == 1
    assert evaluation_pass.applied_rule_ids == set()
    assert evaluation_pass.failures[0].rule_id == 1


def test_recalculation_is_idempotent(cart, catalog):
    evaluator = _evaluator(catalog)
    rules = [make_rule(rule_id=1), make_rule(rule_id=2, gift_sku="G5", qty="2")]

    evaluator.collect_totals(cart, rules)
    first = _gift_signature(cart)
    evaluator.collect_totals(cart, rules)

    assert _gift_signature(cart) == first
    assert len(cart.lines) == 3


def test_previous_gift_lines_are_purged_before_evaluation(cart, catalog):
    evaluator = _evaluator(catalog)
    evaluator.collect_totals(cart, [make_rule(rule_id=1)])
    assert len(gift_lines(cart)) == 1

    evaluator.collect_totals(cart, [])

    assert gift_lines(cart) == []
    assert [l.sku for l in cart.lines] == ["A"]


def test_one_gift_per_rule_across_lines(catalog):
    cart = make_cart(catalog, [("A", 1), ("B", 4)])

    _evaluator(catalog).collect_totals(cart, [make_rule(rule_id=1)])

    assert len(gift_lines(cart)) == 1


def test_each_gift_rule_may_fire(cart, catalog):
    rules = [make_rule(rule_id=1, gift_sku="G1"), make_rule(rule_id=2, gift_sku="G5")]

    evaluation_pass = _evaluator(catalog).collect_totals(cart, rules)

    assert evaluation_pass.applied_rule_ids == {1, 2}
    assert sorted(l.sku for l in gift_lines(cart)) == ["G1", "G5"]


def test_stop_rules_processing(cart, catalog):
    rules = [
        make_rule(rule_id=1, gift_sku="G1", stop_rules_processing=True),
        make_rule(rule_id=2, gift_sku="G5"),
    ]

    evaluation_pass = _evaluator(catalog).collect_totals(cart, rules)

    assert evaluation_pass.applied_rule_ids == {1}


def test_rules_run_in_sort_order(cart, catalog):
    rules = [
        make_rule(rule_id=1, gift_sku="G1", sort_order=20),
        make_rule(rule_id=2, gift_sku="G5", sort_order=10, stop_rules_processing=True),
    ]

    evaluation_pass = _evaluator(catalog).collect_totals(cart, rules)

    assert evaluation_pass.applied_rule_ids == {2}


def test_gift_lines_for_same_product_stay_distinct(cart, catalog):
    rules = [make_rule(rule_id=1, gift_sku="G1"), make_rule(rule_id=2, gift_sku="G1")]

    _evaluator(catalog).collect_totals(cart, rules)

    gifts = gift_lines(cart)
    assert len(gifts) == 2
    assert all(g.qty == 1 for g in gifts)
    tokens = {g.get_option(LineOptionCode.FREEPRODUCT_UNIQID).value for g in gifts}
    assert len(tokens) == 2


def test_cart_merge_keeps_gift_lines_apart(catalog):
    evaluator = _evaluator(catalog)
    guest = make_cart(catalog, [("A", 1)], quote_id="guest")
    customer = make_cart(catalog, [("A", 2)], quote_id="customer")
    evaluator.collect_totals(guest, [make_rule(rule_id=1)])
    evaluator.collect_totals(customer, [make_rule(rule_id=1)])

    customer.merge(guest)

    assert [l.qty for l in customer.lines if l.sku == "A"] == [Decimal(3)]
    assert len(gift_lines(customer)) == 2


def test_rule_conditions(catalog):
    today = date(2026, 5, 1)
    evaluator = _evaluator(catalog, today=today)
    rules = [
        make_rule(rule_id=1, condition_skus=["B"]),
        make_rule(rule_id=2, min_subtotal=Decimal("100")),
        make_rule(rule_id=3, store_ids=[2]),
        make_rule(rule_id=4, to_date=today - timedelta(days=1)),
        make_rule(rule_id=5, from_date=today + timedelta(days=1)),
        make_rule(rule_id=6, is_active=False),
    ]
    cart = make_cart(catalog, [("A", 2)])

    evaluation_pass = evaluator.collect_totals(cart, rules)

    assert evaluation_pass.applied_rule_ids == set()
    assert gift_lines(cart) == []


def test_gift_lines_do_not_count_towards_subtotal(cart, catalog):
    _evaluator(catalog).collect_totals(cart, [make_rule(rule_id=1)])
    assert cart.subtotal == Decimal("20")


def test_empty_cart(catalog):
    cart = Cart(store_id=1)
    evaluation_pass = _evaluator(catalog).collect_totals(cart, [make_rule(rule_id=1)])
    assert cart.lines == []
    assert evaluation_pass.applied_rule_ids == set()
