# app/modules/dashboard/repository.py
from datetime import datetime
from decimal import Decimal
from typing import List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc, func

from app.shared.database.models import Customer, Product, Sale

class DashboardRepository:
    """
    Consultas agregadas para o painel inicial
    """

    def __init__(self, db: Session):
        self.db = db

    def get_sales_total_between(self, start: datetime, end: datetime) -> Decimal:
        """Soma das vendas concluídas no intervalo"""
        total = self.db.query(func.sum(Sale.total_amount)).filter(
            Sale.created_at >= start,
            Sale.created_at <= end,
            Sale.status == "completed"
        ).scalar()

        return Decimal(total) if total is not None else Decimal("0")

    def count_sales_between(self, start: datetime, end: datetime) -> int:
        return self.db.query(func.count(Sale.id)).filter(
            Sale.created_at >= start,
            Sale.created_at <= end
        ).scalar() or 0

    def count_products(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def count_customers(self) -> int:
        return self.db.query(func.count(Customer.id)).scalar() or 0

    def get_recent_sales(self, limit: int) -> List[Sale]:
        return self.db.query(Sale).options(
            joinedload(Sale.customer)
        ).order_by(desc(Sale.created_at)).limit(limit).all()

    def get_recent_products(self, limit: int) -> List[Product]:
        return self.db.query(Product).order_by(desc(Product.created_at)).limit(limit).all()

    def get_recent_customers(self, limit: int) -> List[Customer]:
        return self.db.query(Customer).order_by(desc(Customer.created_at)).limit(limit).all()
