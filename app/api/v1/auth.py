# app/api/v1/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_auth_session, require_session
from app.core.auth.permissions import resolve_permissions
from app.core.auth.schemas import LoginRequest, LoginResponse, MeResponse, PermissionsResponse
from app.core.auth.session import AuthSession, TokenSessionStorage
from app.modules.sales.cart import DraftStore
from app.modules.sales.router import get_draft_store

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Login por email e senha.

    Em caso de sucesso devolve o token que o cliente deve guardar e
    reenviar no header ``Authorization: Bearer``. Falha de login não é
    erro HTTP: a resposta traz ``success=false`` e a mensagem.
    """
    session = AuthSession(TokenSessionStorage())
    result = session.login(db, credentials.email, credentials.password)

    if not result.success:
        return LoginResponse(success=False, error=result.error)

    return LoginResponse(
        success=True,
        access_token=session.storage.token,
        user=session.user
    )

@router.post("/logout")
async def logout(
    session: AuthSession = Depends(get_auth_session),
    drafts: DraftStore = Depends(get_draft_store)
):
    """Limpa a sessão e o carrinho do operador; o cliente descarta o token guardado"""
    if session.is_authenticated:
        drafts.discard(session.user.id)
    session.logout()
    return {"success": True}

@router.get("/me", response_model=MeResponse)
async def me(session: AuthSession = Depends(require_session)):
    """Usuário atual e as capacidades da sua função"""
    permissions = resolve_permissions(session.user)
    return MeResponse(
        user=session.user,
        permissions=PermissionsResponse(**permissions.as_dict())
    )
