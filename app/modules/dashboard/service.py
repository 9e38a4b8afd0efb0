# app/modules/dashboard/service.py
from datetime import date
from typing import List
from sqlalchemy.orm import Session

from app.shared import cache as cache_keys
from app.shared.cache import QueryCache
from app.shared.errors import storage_guard
from app.modules.cash.service import day_bounds
from .repository import DashboardRepository
from .schemas import ActivityResponse, ActivityType, DashboardStatsResponse

RECENT_SALES_LIMIT = 3
RECENT_PRODUCTS_LIMIT = 2
RECENT_CUSTOMERS_LIMIT = 2
RECENT_ACTIVITY_LIMIT = 3

class DashboardService:
    def __init__(self, db: Session, cache: QueryCache):
        self.db = db
        self.cache = cache
        self.repository = DashboardRepository(db)

    async def get_stats(self) -> DashboardStatsResponse:
        """Indicadores do dia e totais do cadastro"""
        today = date.today()

        def load():
            start, end = day_bounds(today)
            with storage_guard(self.db, "carregar os indicadores"):
                return DashboardStatsResponse(
                    todays_sales=self.repository.get_sales_total_between(start, end),
                    products_count=self.repository.count_products(),
                    customers_count=self.repository.count_customers(),
                    orders_count=self.repository.count_sales_between(start, end)
                )

        return self.cache.get_or_load((cache_keys.DASHBOARD_STATS, today.isoformat()), load)

    async def get_recent_activity(self) -> List[ActivityResponse]:
        """
        Últimos acontecimentos: vendas, produtos e clientes cadastrados,
        misturados e ordenados do mais recente para o mais antigo.
        """

        def load():
            with storage_guard(self.db, "carregar a atividade recente"):
                sales = self.repository.get_recent_sales(RECENT_SALES_LIMIT)
                products = self.repository.get_recent_products(RECENT_PRODUCTS_LIMIT)
                customers = self.repository.get_recent_customers(RECENT_CUSTOMERS_LIMIT)

            activities = [
                ActivityResponse(
                    type=ActivityType.sale,
                    id=sale.id,
                    title="Venda realizada",
                    description=f"{sale.customer.name if sale.customer else 'Cliente'} - R$ {sale.total_amount:.2f}",
                    created_at=sale.created_at
                )
                for sale in sales
            ]
            activities += [
                ActivityResponse(
                    type=ActivityType.product,
                    id=product.id,
                    title="Produto cadastrado",
                    description=product.name,
                    created_at=product.created_at
                )
                for product in products
            ]
            activities += [
                ActivityResponse(
                    type=ActivityType.customer,
                    id=customer.id,
                    title="Cliente cadastrado",
                    description=customer.name,
                    created_at=customer.created_at
                )
                for customer in customers
            ]

            activities.sort(key=lambda activity: activity.created_at, reverse=True)
            return activities[:RECENT_ACTIVITY_LIMIT]

        return self.cache.get_or_load((cache_keys.RECENT_ACTIVITY,), load)
