# app/modules/customers/service.py
import logging
from typing import List, Dict, Any
from sqlalchemy.orm import Session

from app.shared import cache as cache_keys
from app.shared.cache import QueryCache
from app.shared.errors import conflict, not_found, storage_guard, validation_error
from app.shared.validators import is_blank, is_valid_email
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerUpdate, CustomerResponse

logger = logging.getLogger(__name__)

CUSTOMER_DEPENDENT_KEYS = (
    cache_keys.CUSTOMERS, cache_keys.SALES, cache_keys.DASHBOARD_STATS, cache_keys.RECENT_ACTIVITY
)

class CustomerService:

    def __init__(self, db: Session, cache: QueryCache):
        self.db = db
        self.cache = cache
        self.repository = CustomerRepository(db)

    async def list_customers(self) -> List[CustomerResponse]:
        def load():
            with storage_guard(self.db, "carregar clientes"):
                return [CustomerResponse.model_validate(c) for c in self.repository.list_customers()]

        return self.cache.get_or_load((cache_keys.CUSTOMERS,), load)

    async def create_customer(self, customer_data: CustomerCreate) -> CustomerResponse:
        data = customer_data.model_dump()

        if is_blank(data["name"]):
            raise validation_error("Nome do cliente é obrigatório")
        self._validate_email(data.get("email"))

        with storage_guard(self.db, "criar cliente"):
            customer = self.repository.create_customer(data)

        logger.info(f"Cliente criado: {customer.id} ({customer.name})")
        self.cache.invalidate(*CUSTOMER_DEPENDENT_KEYS)
        return CustomerResponse.model_validate(customer)

    async def update_customer(self, customer_id: str, update_data: CustomerUpdate) -> CustomerResponse:
        data = update_data.model_dump(exclude_unset=True)

        if "name" in data and is_blank(data["name"]):
            raise validation_error("Nome do cliente não pode estar vazio")
        self._validate_email(data.get("email"))

        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise not_found("Cliente não encontrado")

        with storage_guard(self.db, "atualizar cliente"):
            customer = self.repository.update_customer(customer, data)

        self.cache.invalidate(*CUSTOMER_DEPENDENT_KEYS)
        return CustomerResponse.model_validate(customer)

    async def delete_customer(self, customer_id: str) -> None:
        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise not_found("Cliente não encontrado")

        with storage_guard(self.db, "verificar vendas do cliente"):
            has_sales = self.repository.has_sales(customer_id)

        if has_sales:
            raise conflict("Não é possível excluir cliente que possui vendas associadas")

        with storage_guard(self.db, "excluir cliente"):
            self.repository.delete_customer(customer)

        logger.info(f"Cliente excluído: {customer_id}")
        self.cache.invalidate(*CUSTOMER_DEPENDENT_KEYS)

    def _validate_email(self, email):
        # Email em branco é aceito: o campo é opcional
        if not is_blank(email) and not is_valid_email(email):
            raise validation_error("Formato de email inválido")
