# app/modules/customers/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import desc

from app.shared.database.models import Customer, Sale

class CustomerRepository:
    """
    Repositório de clientes
    """

    def __init__(self, db: Session):
        self.db = db

    def list_customers(self) -> List[Customer]:
        return self.db.query(Customer).order_by(desc(Customer.created_at)).all()

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def create_customer(self, data: Dict[str, Any]) -> Customer:
        customer = Customer(**data)

        self.db.add(customer)
        self.db.commit()
        self.db.refresh(customer)

        return customer

    def update_customer(self, customer: Customer, data: Dict[str, Any]) -> Customer:
        for key, value in data.items():
            setattr(customer, key, value)

        self.db.commit()
        self.db.refresh(customer)

        return customer

    def delete_customer(self, customer: Customer):
        self.db.delete(customer)
        self.db.commit()

    def has_sales(self, customer_id: str) -> bool:
        return self.db.query(Sale.id).filter(
            Sale.customer_id == customer_id
        ).limit(1).first() is not None
