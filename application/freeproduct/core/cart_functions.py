from fastapi import HTTPException
from sqlalchemy.orm import Session

# Services
from freeproduct.cart.service import CartService

# DTOs
from freeproduct.dto.cart import CollectTotalsRequest, CollectTotalsResponse
from freeproduct.dto.reorder import ReorderRequest, ReorderResponse

# Logging
from freeproduct.logging.utils import get_app_logger
logger = get_app_logger("freeproduct.core.cart_functions")


def collect_totals_core(request: CollectTotalsRequest, db: Session) -> CollectTotalsResponse:
    """Purge old gift lines and evaluate gift rules for the posted cart."""
    try:
        return CartService(db).collect_totals(request.cart)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"collect_totals_error | quote_id={request.cart.quote_id} error={e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error_code": "INTERNAL_ERROR", "message": "Failed to collect cart totals"}
        )


def reorder_core(request: ReorderRequest, db: Session) -> ReorderResponse:
    try:
        return CartService(db).reorder(request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"reorder_error | quote_id={request.cart.quote_id} items={len(request.items)} error={e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error_code": "INTERNAL_ERROR", "message": "Failed to reorder items"}
        )
