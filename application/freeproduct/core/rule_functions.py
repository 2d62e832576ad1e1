from typing import Dict, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session

# Repositories
from freeproduct.repository.catalog import CatalogRepository
from freeproduct.repository.rules import RulesRepository
from freeproduct.repository.admin_session import AdminSessionRepository

# Validations
from freeproduct.validations.rules import RuleConfigurationValidator
from freeproduct.core.exceptions import RuleConfigurationError

# Admin form
from freeproduct.promotions.gift.form import build_action_form, ActionFormExtender

# DTOs
from freeproduct.dto.rules import ActionForm, PromotionRule, RuleSaveRequest

# Constants
from freeproduct.core.constants import GiftErrorCode

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.core.rule_functions")


def get_action_form_core() -> ActionForm:
    return ActionFormExtender().extend(build_action_form())


def save_rule_core(request: RuleSaveRequest, db: Session, admin_session: AdminSessionRepository, session_id: str) -> PromotionRule:
    """Validate and persist a rule.

    On a configuration error the posted data is kept as page data of the
    admin session so the form can be shown again with the user's input.
    """
    params = request.model_dump(mode="json")
    try:
        RuleConfigurationValidator(CatalogRepository(db)).validate(params)
    except RuleConfigurationError as e:
        admin_session.set_page_data(session_id, params)
        raise HTTPException(status_code=400, detail=e.to_detail())

    rule = RulesRepository(db).save(request)
    if rule is None:
        raise HTTPException(
            status_code=404,
            detail={"error_code": GiftErrorCode.RULE_NOT_FOUND, "message": f"Rule {request.rule_id} not found"}
        )
    admin_session.clear_page_data(session_id)
    logger.info(f"rule_saved | rule_id={rule.rule_id} action={rule.simple_action} gift_sku={rule.gift_sku}")
    return rule


def get_page_data_core(admin_session: AdminSessionRepository, session_id: str) -> Optional[Dict]:
    return admin_session.get_page_data(session_id)
