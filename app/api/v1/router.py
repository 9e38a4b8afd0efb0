# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router

from app.config.settings import settings
from app.modules.products import products_router
from app.modules.customers import customers_router
from app.modules.sales import sales_router
from app.modules.cash import cash_router
from app.modules.dashboard import dashboard_router
from app.modules.admin import admin_router

# Router principal da API v1
api_router = APIRouter()

# ==================== AUTENTICAÇÃO ====================

api_router.include_router(auth_router, prefix="/auth", tags=["Autenticação"])

# ==================== MÓDULOS ====================

api_router.include_router(products_router)   # /api/v1/products
api_router.include_router(customers_router)  # /api/v1/customers
api_router.include_router(sales_router)      # /api/v1/sales
api_router.include_router(cash_router)       # /api/v1/cash
api_router.include_router(dashboard_router)  # /api/v1/dashboard
api_router.include_router(admin_router)      # /api/v1/users

# ==================== ENDPOINTS RAIZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint da API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "authentication": "/api/v1/auth",
            "products": "/api/v1/products",
            "customers": "/api/v1/customers",
            "sales": "/api/v1/sales",
            "cash": "/api/v1/cash",
            "dashboard": "/api/v1/dashboard",
            "users": "/api/v1/users"
        }
    }

@api_router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "architecture": "modular_monolith"
    }
