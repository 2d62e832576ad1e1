import json
from decimal import Decimal
from unittest.mock import MagicMock, patch

from freeproduct.core.constants import SimpleAction, LineOptionCode, GiftErrorCode
from freeproduct.promotions.gift.evaluation_pass import EvaluationPass
from freeproduct.promotions.gift.processor import GiftRuleProcessor
from freeproduct.repository.catalog import CatalogRepository

from helpers import make_rule, make_cart, gift_lines


def test_add_gift_for_matching_rule(cart, catalog):
    rule = make_rule(rule_id=1, gift_sku="G1", qty="1")
    evaluation_pass = EvaluationPass()

    gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], rule, evaluation_pass)

    assert len(cart.lines) == 2
    assert gift is cart.lines[1]
    assert gift.is_free_gift is True
    assert gift.sku == "G1"
    assert gift.qty == 1
    assert gift.custom_price == 0
    assert gift.original_custom_price == Decimal("25")
    assert gift.store_id == 1
    assert gift.applying_rule_id == 1
    assert evaluation_pass.is_applied(1)
    assert evaluation_pass.gift_line_ids == [gift.line_id]


def test_gift_line_carries_buy_request_and_unique_token(cart, catalog):
    gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], make_rule(qty="2"), EvaluationPass())

    assert json.loads(gift.get_option(LineOptionCode.INFO_BUY_REQUEST).value) == {"qty": 2, "is_free_product": True}
    assert gift.get_option(LineOptionCode.FREEPRODUCT_UNIQID).value


def test_gift_qty_is_integer_part_of_discount_amount(cart, catalog):
    gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], make_rule(qty="3.7"), EvaluationPass())
    assert gift.qty == 3


def test_unsalable_gift_is_logged_and_skipped(cart, catalog):
    rule = make_rule(rule_id=7, gift_sku="G2")
    evaluation_pass = EvaluationPass()

    with patch("freeproduct.promotions.gift.processor.logger") as mock_logger:
        gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], rule, evaluation_pass)

    assert gift is None
    assert len(cart.lines) == 1
    assert not evaluation_pass.is_applied(7)
    message = mock_logger.error.call_args[0][0]
    assert "Rule ID: 7" in message
    assert "Gift SKU: G2" in message
    assert "Store ID: 1" in message
    assert evaluation_pass.failures[0].error_code == GiftErrorCode.GIFT_NOT_SALABLE


def test_failure_reasons(cart, catalog):
    processor = GiftRuleProcessor(catalog)
    cases = [
        (make_rule(rule_id=1, gift_sku="G1", qty="0.5"), GiftErrorCode.GIFT_QTY_INVALID),
        (make_rule(rule_id=2, gift_sku="MISSING"), GiftErrorCode.GIFT_NOT_FOUND),
        (make_rule(rule_id=3, gift_sku="G3"), GiftErrorCode.GIFT_NOT_SALABLE),
        (make_rule(rule_id=4, gift_sku="G4"), GiftErrorCode.GIFT_NOT_SALABLE),
    ]
    evaluation_pass = EvaluationPass()
    for rule, _ in cases:
        assert processor.process(cart, cart.lines[0], rule, evaluation_pass) is None

    assert [f.error_code for f in evaluation_pass.failures] == [code for _, code in cases]
    assert gift_lines(cart) == []


def test_gift_without_stock_management_is_salable(cart, catalog):
    gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], make_rule(gift_sku="G5"), EvaluationPass())
    assert gift is not None


def test_gift_resolved_in_triggering_line_store(db_session, seed_catalog):
    catalog = CatalogRepository(db_session, live_stock_check=False)
    cart = make_cart(catalog, [("A", 1)], store_id=2)

    gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], make_rule(gift_sku="G4"), EvaluationPass())

    assert gift is not None
    assert gift.store_id == 2


def test_live_stock_check_blocks_gift(db_session, seed_catalog):
    stock_validator_cls = MagicMock()
    stock_validator_cls.return_value.get_available_quantity.return_value = 0
    catalog = CatalogRepository(db_session, stock_validator_cls=stock_validator_cls, live_stock_check=True)
    cart = make_cart(catalog, [("A", 1)])

    gift = GiftRuleProcessor(catalog).process(cart, cart.lines[0], make_rule(gift_sku="G1"), EvaluationPass())

    assert gift is None
    stock_validator_cls.assert_called_once_with(store_id=1, sku="G1")


def test_non_gift_action_is_ignored(cart, catalog):
    rule = make_rule(simple_action=SimpleAction.BY_PERCENT)
    assert GiftRuleProcessor(catalog).process(cart, cart.lines[0], rule, EvaluationPass()) is None
    assert len(cart.lines) == 1


def test_gift_line_never_triggers_another_gift(cart, catalog):
    processor = GiftRuleProcessor(catalog)
    gift = processor.process(cart, cart.lines[0], make_rule(rule_id=1), EvaluationPass())

    assert processor.process(cart, gift, make_rule(rule_id=2), EvaluationPass()) is None
    assert len(gift_lines(cart)) == 1


def test_rule_applies_once_per_pass(catalog):
    cart = make_cart(catalog, [("A", 1), ("B", 1)])
    processor = GiftRuleProcessor(catalog)
    rule = make_rule(rule_id=1)
    evaluation_pass = EvaluationPass()

    for line in cart.list_lines():
        processor.process(cart, line, rule, evaluation_pass)

    assert len(gift_lines(cart)) == 1
