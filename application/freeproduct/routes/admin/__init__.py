from fastapi import APIRouter
from freeproduct.routes.admin.rules import admin_rules_router

admin_router = APIRouter(tags=["admin"])
admin_router.include_router(admin_rules_router)
