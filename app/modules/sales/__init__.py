# app/modules/sales/__init__.py
"""
Módulo de Vendas - Caixa do PDV

- Carrinho com validação de estoque acumulado
- Fechamento da venda: venda + itens, baixa de estoque, lançamento no caixa
- Exclusão da venda com devolução do estoque
- Reconciliação de vendas sem lançamento no caixa

Arquitetura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negócio
- repository.py: Acesso a dados
- cart.py: Estado de composição da venda (carrinho, cliente, pagamento)
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as sales_router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "sales_router",
    "SalesService",
    "SalesRepository"
]
