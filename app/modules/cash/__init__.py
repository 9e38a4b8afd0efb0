# app/modules/cash/__init__.py
"""
Módulo de Caixa - Livro de movimentações

- Vendas lançadas automaticamente no fechamento
- Despesas registradas pelo operador (gravadas com valor negativo)
- Resumo diário por forma de pagamento
"""

from .router import router as cash_router
from .service import CashService, summarize_entries

__all__ = [
    "cash_router",
    "CashService",
    "summarize_entries"
]
