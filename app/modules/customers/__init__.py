# app/modules/customers/__init__.py
"""
Módulo de Clientes

- router.py: Endpoints FastAPI
- service.py: Regras de negócio (nome obrigatório, formato de email, exclusão protegida)
- repository.py: Acesso a dados
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as customers_router
from .service import CustomerService
from .repository import CustomerRepository

__all__ = [
    "customers_router",
    "CustomerService",
    "CustomerRepository"
]
