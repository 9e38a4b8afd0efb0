# app/modules/dashboard/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import require_session
from app.core.auth.session import AuthSession
from app.shared.cache import QueryCache, get_query_cache
from .service import DashboardService
from .schemas import ActivityResponse, DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["Painel"])

@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Indicadores do painel

    - Total vendido hoje (vendas concluídas)
    - Quantidade de produtos e clientes
    - Quantidade de vendas do dia
    """
    service = DashboardService(db, cache)
    return await service.get_stats()

@router.get("/recent-activity", response_model=List[ActivityResponse])
async def get_recent_activity(
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    service = DashboardService(db, cache)
    return await service.get_recent_activity()
