from fastapi import APIRouter

router = APIRouter()

from insurance_contract.api.endpoints import admin, claims, policies, views

router.include_router(policies.router, prefix="/policies", tags=["policies"])
router.include_router(claims.router, prefix="/claims", tags=["claims"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(views.router, prefix="/views", tags=["views"])
