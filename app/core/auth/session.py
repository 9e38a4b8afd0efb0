# app/core/auth/session.py
"""
Sessão do usuário atual.

A identidade autenticada vive em um objeto ``AuthSession`` explícito, que é
restaurado a partir do slot persistido no início de cada requisição e
repassado aos serviços que precisam saber quem está agindo. O slot
persistido é um token assinado contendo a cópia serializada da conta;
não há expiração nem renovação.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config.settings import settings
from .repository import AuthRepository
from .schemas import Account

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Email ou senha incorretos."
LOGIN_ERROR_MESSAGE = "Ocorreu um erro durante o login."

class TokenSessionStorage:
    """Slot persistido do lado do cliente: a conta serializada dentro de um JWT"""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.token:
            return None
        return jwt.decode(self.token, settings.secret_key, algorithms=[settings.algorithm])

    def write(self, account: Account) -> None:
        claims = {
            "sub": account.id,
            "account": account.model_dump(mode="json")
        }
        self.token = jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)

    def clear(self) -> None:
        self.token = None

@dataclass
class LoginResult:
    success: bool
    error: Optional[str] = None

class AuthSession:
    """Identidade atual em memória + slot persistido"""

    def __init__(self, storage: TokenSessionStorage):
        self.storage = storage
        self.user: Optional[Account] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def restore(self) -> None:
        """Carrega a identidade persistida; valor malformado é descartado"""
        try:
            payload = self.storage.read()
        except JWTError as e:
            logger.warning(f"Sessão persistida inválida descartada: {e}")
            self.storage.clear()
            return

        if payload is None:
            return

        try:
            self.user = Account.model_validate(payload.get("account"))
        except ValidationError as e:
            logger.warning(f"Conta persistida malformada descartada: {e.error_count()} erro(s)")
            self.user = None
            self.storage.clear()

    def login(self, db: Session, email: str, password: str) -> LoginResult:
        try:
            usuario = AuthRepository(db).find_by_credentials(email, password)
        except SQLAlchemyError:
            logger.error(f"Erro consultando credenciais de {email}", exc_info=True)
            return LoginResult(success=False, error=LOGIN_ERROR_MESSAGE)

        if usuario is None:
            logger.info(f"Login recusado para {email}")
            return LoginResult(success=False, error=LOGIN_FAILED_MESSAGE)

        account = Account.model_validate(usuario)
        self.storage.write(account)
        self.user = account

        logger.info(f"✅ Login de {account.email} ({account.funcao.value})")
        return LoginResult(success=True)

    def logout(self) -> None:
        if self.user:
            logger.info(f"Logout de {self.user.email}")
        self.user = None
        self.storage.clear()
