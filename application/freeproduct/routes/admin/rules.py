from typing import Dict, Optional
from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

# Core functions
from freeproduct.core.rule_functions import get_action_form_core, save_rule_core, get_page_data_core

# DTOs
from freeproduct.dto.rules import ActionForm, PromotionRule, RuleSaveRequest

from freeproduct.connections.database import get_db
from freeproduct.repository.admin_session import AdminSessionRepository

admin_rules_router = APIRouter(prefix="/promo/quote", tags=["admin-rules"])


def get_admin_session() -> AdminSessionRepository:
    return AdminSessionRepository()


@admin_rules_router.get("/form", response_model=ActionForm)
def get_action_form():
    """ Actions tab of the cart price rule form, including the gift action """
    return get_action_form_core()


@admin_rules_router.post("/save", response_model=PromotionRule)
def save_rule(
    request: RuleSaveRequest,
    x_admin_session: str = Header(..., description="Admin session id"),
    db: Session = Depends(get_db),
    admin_session: AdminSessionRepository = Depends(get_admin_session),
):
    return save_rule_core(request, db, admin_session, x_admin_session)


@admin_rules_router.get("/page-data", response_model=Optional[Dict])
def get_page_data(
    x_admin_session: str = Header(..., description="Admin session id"),
    admin_session: AdminSessionRepository = Depends(get_admin_session),
):
    """ Form data of the last rejected save, if any """
    return get_page_data_core(admin_session, x_admin_session)
