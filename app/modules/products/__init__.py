# app/modules/products/__init__.py
"""
Módulo de Produtos - Catálogo

- router.py: Endpoints FastAPI
- service.py: Regras de negócio (preço/estoque não negativos, exclusão protegida)
- repository.py: Acesso a dados
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as products_router
from .service import ProductService
from .repository import ProductRepository

__all__ = [
    "products_router",
    "ProductService",
    "ProductRepository"
]
