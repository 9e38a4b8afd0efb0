# app/core/auth/dependencies.py
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .permissions import resolve_permissions
from .session import AuthSession, TokenSessionStorage

bearer_scheme = HTTPBearer(auto_error=False)

NOT_AUTHENTICATED_MESSAGE = "Usuário não autenticado"

def get_auth_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AuthSession:
    """Sessão da requisição, restaurada do token enviado pelo cliente"""
    session = AuthSession(TokenSessionStorage(credentials.credentials if credentials else None))
    session.restore()
    return session

def require_session(session: AuthSession = Depends(get_auth_session)) -> AuthSession:
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"}
        )
    return session

def require_permission(permission: str) -> Callable[[AuthSession], AuthSession]:
    """Bloqueia a rota quando a função do usuário não concede a capacidade pedida"""

    def dependency(session: AuthSession = Depends(require_session)) -> AuthSession:
        permissions = resolve_permissions(session.user)
        if not getattr(permissions, permission, False):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Acesso negado"
            )
        return session

    return dependency
