# app/modules/cash/router.py
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import require_session
from app.core.auth.session import AuthSession
from app.shared.cache import QueryCache, get_query_cache
from .service import CashService
from .schemas import CashMovementResponse, CashSummaryResponse, ExpenseRequest

router = APIRouter(prefix="/cash", tags=["Caixa"])

@router.get("/movements", response_model=List[CashMovementResponse])
async def list_movements(
    day: Optional[date] = Query(None, alias="date", description="Filtrar por dia (AAAA-MM-DD)"),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Movimentações de caixa

    Sem ``date``: todas, mais recentes primeiro.
    Com ``date``: só as do dia, em ordem cronológica, com a forma de
    pagamento da venda associada.
    """
    service = CashService(db, cache)
    if day:
        return await service.list_movements_by_date(day)
    return await service.list_movements()

@router.get("/summary", response_model=CashSummaryResponse)
async def get_daily_summary(
    day: Optional[date] = Query(None, alias="date", description="Dia do resumo; padrão hoje"),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Totais do dia: vendas por forma de pagamento, despesas e saldo"""
    service = CashService(db, cache)
    return await service.daily_summary(day)

@router.post("/expenses", response_model=CashMovementResponse, status_code=201)
async def create_expense(
    expense_data: ExpenseRequest,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Registrar despesa; o valor informado é positivo e gravado como saída"""
    service = CashService(db, cache)
    return await service.create_expense(session, expense_data)

@router.put("/expenses/{movement_id}", response_model=CashMovementResponse)
async def update_expense(
    movement_id: str,
    expense_data: ExpenseRequest,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = CashService(db, cache)
    return await service.update_expense(session, movement_id, expense_data)

@router.delete("/movements/{movement_id}")
async def delete_movement(
    movement_id: str,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = CashService(db, cache)
    await service.delete_movement(movement_id)
    return {"success": True, "message": "Movimentação excluída"}
