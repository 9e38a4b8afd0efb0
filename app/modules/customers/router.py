# app/modules/customers/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import require_session
from app.core.auth.session import AuthSession
from app.shared.cache import QueryCache, get_query_cache
from .service import CustomerService
from .schemas import CustomerCreate, CustomerUpdate, CustomerResponse

router = APIRouter(prefix="/customers", tags=["Clientes"])

@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = CustomerService(db, cache)
    return await service.list_customers()

@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    customer_data: CustomerCreate,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Cadastrar cliente

    **Validações:**
    - Nome obrigatório
    - Email, se informado, no formato nome@dominio.tld
    """
    service = CustomerService(db, cache)
    return await service.create_customer(customer_data)

@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    update_data: CustomerUpdate,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = CustomerService(db, cache)
    return await service.update_customer(customer_id, update_data)

@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: str,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Excluir cliente sem vendas associadas"""
    service = CustomerService(db, cache)
    await service.delete_customer(customer_id)
    return {"success": True, "message": "Cliente excluído"}
