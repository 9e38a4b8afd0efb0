# app/modules/sales/router.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import require_permission, require_session
from app.core.auth.session import AuthSession
from app.shared.cache import QueryCache, get_query_cache
from .cart import DraftStore, SaleDraft
from .service import SalesService
from .schemas import (
    CartItemRequest, CartQuantityRequest, CartResponse, CartSelectionRequest,
    ReconcileLedgerResponse, SaleCreateRequest, SaleResponse
)

router = APIRouter(prefix="/sales", tags=["Vendas"])

def get_draft_store(request: Request) -> DraftStore:
    return request.app.state.draft_store

def get_current_draft(
    session: AuthSession = Depends(require_session),
    store: DraftStore = Depends(get_draft_store)
) -> SaleDraft:
    """Rascunho de venda do operador logado"""
    return store.get(session.user.id)

# ==================== CARRINHO ====================

@router.get("/cart", response_model=CartResponse)
async def get_cart(
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Carrinho atual com total calculado na hora"""
    service = SalesService(db, cache)
    return service.build_cart_response(draft)

@router.put("/cart", response_model=CartResponse)
async def select_cart_options(
    selection: CartSelectionRequest,
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Selecionar cliente e forma de pagamento"""
    service = SalesService(db, cache)
    service.select(draft, selection.customer_id, selection.payment_method)
    return service.build_cart_response(draft)

@router.delete("/cart", response_model=CartResponse)
async def clear_cart(
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = SalesService(db, cache)
    draft.reset()
    return service.build_cart_response(draft)

@router.post("/cart/items", response_model=CartResponse)
async def add_to_cart(
    item: CartItemRequest,
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Adicionar produto ao carrinho

    Sem estoque suficiente (considerando o que já está no carrinho) o
    carrinho não muda e a resposta traz o aviso em ``warning``.
    """
    service = SalesService(db, cache)
    warning = service.add_to_cart(draft, item.product_id, item.quantity)
    return service.build_cart_response(draft, warning)

@router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_cart_quantity(
    product_id: str,
    update: CartQuantityRequest,
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Alterar quantidade; zero ou menos remove o item"""
    service = SalesService(db, cache)
    warning = service.update_cart_quantity(draft, product_id, update.quantity)
    return service.build_cart_response(draft, warning)

@router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = SalesService(db, cache)
    draft.cart.remove(product_id)
    return service.build_cart_response(draft)

@router.post("/cart/checkout", response_model=SaleResponse, status_code=201)
async def checkout_cart(
    session: AuthSession = Depends(require_session),
    draft: SaleDraft = Depends(get_current_draft),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Fechar a venda do carrinho

    Inclui:
    - Nova verificação de estoque de cada item
    - Registro da venda e dos itens com o preço do momento
    - Baixa de estoque
    - Lançamento da venda no caixa
    """
    service = SalesService(db, cache)
    return await service.complete_sale(session, draft)

# ==================== VENDAS ====================

@router.get("", response_model=List[SaleResponse])
async def list_sales(
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Vendas com cliente e itens, mais recentes primeiro"""
    service = SalesService(db, cache)
    return await service.list_sales()

@router.post("", response_model=SaleResponse, status_code=201)
async def create_sale(
    sale_data: SaleCreateRequest,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Registrar venda completa sem usar o carrinho do servidor"""
    service = SalesService(db, cache)
    return await service.create_sale(session, sale_data)

@router.post("/reconcile-ledger", response_model=ReconcileLedgerResponse)
async def reconcile_ledger(
    session: AuthSession = Depends(require_permission("can_manage_sales")),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Criar lançamentos de caixa faltantes para vendas já registradas"""
    service = SalesService(db, cache)
    return await service.reconcile_ledger()

@router.delete("/{sale_id}")
async def delete_sale(
    sale_id: str,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Excluir venda e devolver os itens ao estoque"""
    service = SalesService(db, cache)
    await service.delete_sale(sale_id)
    return {"success": True, "message": "Venda excluída e estoque restaurado"}
