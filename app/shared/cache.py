# app/shared/cache.py
import logging
import threading
from typing import Any, Callable, Dict, Hashable, Tuple, TypeVar

from fastapi import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Chaves das consultas derivadas que dependem de cada coleção
PRODUCTS = "products"
CUSTOMERS = "customers"
SALES = "sales"
CASH_MOVEMENTS = "cash-movements"
USUARIOS = "usuarios"
DASHBOARD_STATS = "dashboard-stats"
RECENT_ACTIVITY = "recent-activity"
TODAYS_CASH_SUMMARY = "todays-cash-summary"

SALE_DEPENDENT_KEYS = (
    SALES, PRODUCTS, CASH_MOVEMENTS, DASHBOARD_STATS, RECENT_ACTIVITY, TODAYS_CASH_SUMMARY
)

class QueryCache:
    """
    Cache em memória de resultados de consulta.

    As chaves são tuplas cujo primeiro elemento é o nome da consulta
    (ex.: ``("todays-cash-summary", "2026-10-19")``). Invalidar um nome
    descarta todas as variações dele. Só guarda schemas de resposta,
    nunca instâncias ORM presas a uma sessão.
    """

    def __init__(self):
        self._entries: Dict[Tuple[Hashable, ...], Any] = {}
        self._lock = threading.Lock()

    def get_or_load(self, key: Tuple[Hashable, ...], loader: Callable[[], T]) -> T:
        with self._lock:
            if key in self._entries:
                return self._entries[key]

        value = loader()

        with self._lock:
            self._entries[key] = value
        return value

    def invalidate(self, *names: str) -> None:
        with self._lock:
            stale = [key for key in self._entries if key[0] in names]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Cache invalidado: {', '.join(names)} ({len(stale)} entradas)")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

def get_query_cache(request: Request) -> QueryCache:
    """Dependency: cache compartilhado da aplicação"""
    return request.app.state.query_cache
