# app/modules/admin/__init__.py
"""
Módulo de Administração - Contas de acesso

Restrito a administradores: listagem, cadastro, edição e exclusão de
usuários com as regras de unicidade de email e de vínculos.
"""

from .router import router as admin_router
from .service import AdminService

__all__ = ["admin_router", "AdminService"]
