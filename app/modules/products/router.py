# app/modules/products/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import require_session
from app.core.auth.session import AuthSession
from app.shared.cache import QueryCache, get_query_cache
from .service import ProductService
from .schemas import ProductCreate, ProductUpdate, ProductResponse

router = APIRouter(prefix="/products", tags=["Produtos"])

@router.get("", response_model=List[ProductResponse])
async def list_products(
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Catálogo completo, mais recentes primeiro"""
    service = ProductService(db, cache)
    return await service.list_products()

@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreate,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Cadastrar produto

    **Validações:**
    - Nome, preço e estoque obrigatórios
    - Preço e estoque não negativos
    """
    service = ProductService(db, cache)
    return await service.create_product(product_data)

@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    update_data: ProductUpdate,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Atualização parcial de produto"""
    service = ProductService(db, cache)
    return await service.update_product(product_id, update_data)

@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Excluir produto que nunca foi vendido"""
    service = ProductService(db, cache)
    await service.delete_product(product_id)
    return {"success": True, "message": "Produto excluído"}
