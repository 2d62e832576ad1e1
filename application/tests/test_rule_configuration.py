import pytest
from unittest.mock import MagicMock
from fastapi import HTTPException

from freeproduct.core.constants import SimpleAction, GiftErrorCode, INVALID_GIFT_SKU_MESSAGE
from freeproduct.core.exceptions import RuleConfigurationError
from freeproduct.cart.service import CartService
from freeproduct.core.rule_functions import save_rule_core
from freeproduct.dto.rules import RuleSaveRequest
from freeproduct.models.rules import SalesRuleModel
from freeproduct.repository.rules import RulesRepository
from freeproduct.validations.rules import RuleConfigurationValidator

from helpers import make_cart, gift_lines


@pytest.mark.parametrize("gift_sku", ["", None, "   ", "UNKNOWN"])
def test_invalid_gift_sku_rejected(catalog, gift_sku):
    validator = RuleConfigurationValidator(catalog)

    with pytest.raises(RuleConfigurationError) as exc_info:
        validator.validate({"simple_action": SimpleAction.ADD_GIFT, "gift_sku": gift_sku})

    assert exc_info.value.message == INVALID_GIFT_SKU_MESSAGE
    assert exc_info.value.error_code == GiftErrorCode.INVALID_GIFT_SKU


def test_existing_gift_sku_accepted(catalog):
    RuleConfigurationValidator(catalog).validate({"simple_action": SimpleAction.ADD_GIFT, "gift_sku": "G1"})


def test_unsalable_but_existing_sku_accepted(catalog):
    # salability is only checked when the gift is handed out
    RuleConfigurationValidator(catalog).validate({"simple_action": SimpleAction.ADD_GIFT, "gift_sku": "G2"})


def test_other_actions_skip_sku_check(catalog):
    RuleConfigurationValidator(catalog).validate({"simple_action": SimpleAction.BY_PERCENT, "gift_sku": ""})


def test_rejected_save_keeps_page_data_and_persists_nothing(db_session, seed_catalog):
    admin_session = MagicMock()
    request = RuleSaveRequest(name="R2", simple_action=SimpleAction.ADD_GIFT, gift_sku="", discount_amount="1")

    with pytest.raises(HTTPException) as exc_info:
        save_rule_core(request, db_session, admin_session, "session-1")

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail["message"] == INVALID_GIFT_SKU_MESSAGE
    session_id, page_data = admin_session.set_page_data.call_args[0]
    assert session_id == "session-1"
    assert page_data["name"] == "R2"
    assert db_session.query(SalesRuleModel).count() == 0


def test_valid_save_persists_rule_and_clears_page_data(db_session, seed_catalog):
    admin_session = MagicMock()
    request = RuleSaveRequest(name="Gift", simple_action=SimpleAction.ADD_GIFT, gift_sku="G1", discount_amount="2")

    rule = save_rule_core(request, db_session, admin_session, "session-1")

    assert rule.rule_id is not None
    assert rule.gift_qty == 2
    assert RulesRepository(db_session).get(rule.rule_id).gift_sku == "G1"
    admin_session.clear_page_data.assert_called_once_with("session-1")


def test_update_of_missing_rule_is_404(db_session, seed_catalog):
    request = RuleSaveRequest(rule_id=99, simple_action=SimpleAction.ADD_GIFT, gift_sku="G1", discount_amount="1")

    with pytest.raises(HTTPException) as exc_info:
        save_rule_core(request, db_session, MagicMock(), "session-1")

    assert exc_info.value.status_code == 404


def test_gift_sku_is_saved_as_validated_and_granted(db_session, catalog):
    request = RuleSaveRequest(name="Gift", simple_action=SimpleAction.ADD_GIFT, gift_sku=" G1 ", discount_amount="1")

    rule = save_rule_core(request, db_session, MagicMock(), "session-1")

    assert RulesRepository(db_session).get(rule.rule_id).gift_sku == "G1"
    totals = CartService(db_session, catalog=catalog).collect_totals(make_cart(catalog, [("A", 1)]))
    assert totals.failures == []
    assert [line.sku for line in gift_lines(totals.cart)] == ["G1"]


def test_blank_gift_sku_is_normalized_to_none():
    request = RuleSaveRequest(simple_action=SimpleAction.ADD_GIFT, gift_sku="   ")
    assert request.gift_sku is None
