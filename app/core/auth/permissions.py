# app/core/auth/permissions.py
from dataclasses import dataclass, asdict
from typing import Optional

from .schemas import Account, UserRole

@dataclass(frozen=True)
class Permissions:
    is_admin: bool = False
    is_moderator: bool = False
    can_manage_users: bool = False
    can_manage_products: bool = False
    can_manage_sales: bool = False

    def as_dict(self) -> dict:
        return asdict(self)

def resolve_permissions(user: Optional[Account]) -> Permissions:
    """Traduz a função do usuário nas capacidades do sistema. Sem usuário, nada é permitido."""
    if user is None:
        return Permissions()

    is_admin = user.funcao == UserRole.ADMIN
    is_moderator = user.funcao in (UserRole.ADMIN, UserRole.MODERATOR)

    return Permissions(
        is_admin=is_admin,
        is_moderator=is_moderator,
        can_manage_users=is_admin,
        can_manage_products=is_moderator,
        can_manage_sales=is_moderator
    )
