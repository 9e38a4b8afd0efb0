# app/modules/admin/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import require_permission
from app.core.auth.session import AuthSession
from app.shared.cache import QueryCache, get_query_cache
from .service import AdminService
from .schemas import UsuarioCreate, UsuarioUpdate, UsuarioResponse

router = APIRouter(prefix="/users", tags=["Admin - Usuários"])

require_admin = require_permission("can_manage_users")

@router.get("", response_model=List[UsuarioResponse])
async def list_usuarios(
    session: AuthSession = Depends(require_admin),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Contas de acesso, mais recentes primeiro"""
    service = AdminService(db, cache)
    return await service.list_usuarios(session)

@router.post("", response_model=UsuarioResponse, status_code=201)
async def create_usuario(
    usuario_data: UsuarioCreate,
    session: AuthSession = Depends(require_admin),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Criar conta de acesso

    **Validações:**
    - Nome, email e senha obrigatórios
    - Formato de email
    - Email único no sistema
    """
    service = AdminService(db, cache)
    return await service.create_usuario(session, usuario_data)

@router.put("/{usuario_id}", response_model=UsuarioResponse)
async def update_usuario(
    usuario_id: str,
    update_data: UsuarioUpdate,
    session: AuthSession = Depends(require_admin),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """Atualizar conta; só os campos enviados são validados"""
    service = AdminService(db, cache)
    return await service.update_usuario(session, usuario_id, update_data)

@router.delete("/{usuario_id}")
async def delete_usuario(
    usuario_id: str,
    session: AuthSession = Depends(require_admin),
    db: Session = Depends(get_db),
    cache: QueryCache = Depends(get_query_cache)
):
    """
    Excluir conta

    Bloqueado para a própria conta e para contas com vendas ou
    movimentações de caixa.
    """
    service = AdminService(db, cache)
    await service.delete_usuario(session, usuario_id)
    return {"success": True, "message": "Usuário excluído"}
