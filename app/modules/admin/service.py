# app/modules/admin/service.py
import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth.permissions import resolve_permissions
from app.core.auth.session import AuthSession
from app.shared import cache as cache_keys
from app.shared.cache import QueryCache
from app.shared.errors import access_denied, conflict, not_found, storage_guard, validation_error
from app.shared.validators import is_blank, is_valid_email
from .repository import AdminRepository
from .schemas import UsuarioCreate, UsuarioUpdate, UsuarioResponse

logger = logging.getLogger(__name__)

EMAIL_IN_USE_MESSAGE = "Email já está em uso"

class AdminService:
    """
    Administração das contas de acesso.

    Toda operação confere de novo se quem age é administrador, mesmo com a
    rota já protegida.
    """

    def __init__(self, db: Session, cache: QueryCache):
        self.db = db
        self.cache = cache
        self.repository = AdminRepository(db)

    # ==================== CONSULTAS ====================

    async def list_usuarios(self, session: AuthSession) -> List[UsuarioResponse]:
        self._require_admin(session, "visualizar usuários")

        def load():
            with storage_guard(self.db, "carregar usuários"):
                return [UsuarioResponse.model_validate(u) for u in self.repository.list_usuarios()]

        return self.cache.get_or_load((cache_keys.USUARIOS,), load)

    # ==================== CRIAR / EDITAR ====================

    async def create_usuario(self, session: AuthSession, usuario_data: UsuarioCreate) -> UsuarioResponse:
        self._require_admin(session, "criar usuários")

        if is_blank(usuario_data.nome):
            raise validation_error("Nome é obrigatório")
        if is_blank(usuario_data.email):
            raise validation_error("Email é obrigatório")
        if is_blank(usuario_data.senha):
            raise validation_error("Senha é obrigatória")
        if not is_valid_email(usuario_data.email):
            raise validation_error("Formato de email inválido")

        with storage_guard(self.db, "verificar o email"):
            email_in_use = self.repository.email_in_use(usuario_data.email)
        if email_in_use:
            raise conflict(EMAIL_IN_USE_MESSAGE)

        with storage_guard(self.db, "criar usuário"):
            try:
                usuario = self.repository.create_usuario({
                    "nome": usuario_data.nome,
                    "email": usuario_data.email,
                    "senha": usuario_data.senha,
                    "funcao": usuario_data.funcao.value
                })
            except IntegrityError:
                # Outro cadastro com o mesmo email entrou entre a verificação e o insert
                self.db.rollback()
                raise conflict(EMAIL_IN_USE_MESSAGE)

        logger.info(f"Usuário criado por {session.user.email}: {usuario.email} ({usuario.funcao})")
        self.cache.invalidate(cache_keys.USUARIOS)
        return UsuarioResponse.model_validate(usuario)

    async def update_usuario(
        self,
        session: AuthSession,
        usuario_id: str,
        update_data: UsuarioUpdate
    ) -> UsuarioResponse:
        self._require_admin(session, "editar usuários")

        data = update_data.model_dump(exclude_unset=True)

        if "nome" in data and is_blank(data["nome"]):
            raise validation_error("Nome não pode estar vazio")

        if "senha" in data and is_blank(data["senha"]):
            # Senha em branco mantém a credencial atual
            del data["senha"]

        if "funcao" in data:
            if data["funcao"] is None:
                del data["funcao"]
            else:
                data["funcao"] = data["funcao"].value

        usuario = self.repository.get_usuario(usuario_id)
        if not usuario:
            raise not_found("Usuário não encontrado")

        if "email" in data:
            if is_blank(data["email"]):
                raise validation_error("Email não pode estar vazio")
            if not is_valid_email(data["email"]):
                raise validation_error("Formato de email inválido")

            if data["email"] != usuario.email:
                with storage_guard(self.db, "verificar o email"):
                    email_in_use = self.repository.email_in_use(data["email"], exclude_id=usuario_id)
                if email_in_use:
                    raise conflict("Email já está em uso por outro usuário")

        with storage_guard(self.db, "atualizar usuário"):
            try:
                usuario = self.repository.update_usuario(usuario, data)
            except IntegrityError:
                self.db.rollback()
                raise conflict("Email já está em uso por outro usuário")

        self.cache.invalidate(cache_keys.USUARIOS)
        return UsuarioResponse.model_validate(usuario)

    # ==================== EXCLUIR ====================

    async def delete_usuario(self, session: AuthSession, usuario_id: str) -> None:
        self._require_admin(session, "excluir usuários")

        if usuario_id == session.user.id:
            raise validation_error("Você não pode excluir sua própria conta")

        usuario = self.repository.get_usuario(usuario_id)
        if not usuario:
            raise not_found("Usuário não encontrado")

        with storage_guard(self.db, "verificar vínculos do usuário"):
            has_sales = self.repository.has_sales(usuario_id)
            has_cash_movements = not has_sales and self.repository.has_cash_movements(usuario_id)

        if has_sales:
            raise conflict("Não é possível excluir usuário que possui vendas associadas")
        if has_cash_movements:
            raise conflict("Não é possível excluir usuário que possui movimentações de caixa associadas")

        with storage_guard(self.db, "excluir usuário"):
            self.repository.delete_usuario(usuario)

        logger.info(f"Usuário excluído por {session.user.email}: {usuario_id}")
        self.cache.invalidate(cache_keys.USUARIOS)

    def _require_admin(self, session: AuthSession, action: str):
        if not resolve_permissions(session.user).is_admin:
            logger.warning(f"Tentativa sem permissão de {action}")
            raise access_denied(f"Acesso negado: apenas administradores podem {action}")
