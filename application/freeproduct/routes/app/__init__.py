from fastapi import APIRouter
from freeproduct.routes.app.cart import app_router as cart_router

app_router = APIRouter(tags=["app"])
app_router.include_router(cart_router)
