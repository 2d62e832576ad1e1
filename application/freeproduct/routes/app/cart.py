from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

# Core functions
from freeproduct.core.cart_functions import collect_totals_core, reorder_core

# DTOs
from freeproduct.dto.cart import CollectTotalsRequest, CollectTotalsResponse
from freeproduct.dto.reorder import ReorderRequest, ReorderResponse

from freeproduct.connections.database import get_db

app_router = APIRouter(prefix="/cart", tags=["app-cart"])


@app_router.post("/totals/collect", response_model=CollectTotalsResponse)
def collect_totals(request: CollectTotalsRequest, db: Session = Depends(get_db)):
    """ Recalculate the cart: drop old gift lines and add the gifts of matching rules """
    return collect_totals_core(request, db)


@app_router.post("/reorder", response_model=ReorderResponse)
def reorder(request: ReorderRequest, db: Session = Depends(get_db)):
    """ Add the items of a previous order to the cart, keeping their gift flag """
    return reorder_core(request, db)
