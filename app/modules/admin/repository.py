# app/modules/admin/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import desc

from app.shared.database.models import CashMovement, Sale, Usuario

class AdminRepository:
    """
    Repositório das contas de acesso
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== GESTÃO DE USUÁRIOS ====================

    def list_usuarios(self) -> List[Usuario]:
        return self.db.query(Usuario).order_by(desc(Usuario.created_at)).all()

    def get_usuario(self, usuario_id: str) -> Optional[Usuario]:
        return self.db.query(Usuario).filter(Usuario.id == usuario_id).first()

    def email_in_use(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """Email já cadastrado, opcionalmente ignorando a própria conta"""
        query = self.db.query(Usuario.id).filter(Usuario.email == email)
        if exclude_id:
            query = query.filter(Usuario.id != exclude_id)
        return query.first() is not None

    def create_usuario(self, data: Dict[str, Any]) -> Usuario:
        usuario = Usuario(**data)

        self.db.add(usuario)
        self.db.commit()
        self.db.refresh(usuario)

        return usuario

    def update_usuario(self, usuario: Usuario, data: Dict[str, Any]) -> Usuario:
        for key, value in data.items():
            setattr(usuario, key, value)

        self.db.commit()
        self.db.refresh(usuario)

        return usuario

    def delete_usuario(self, usuario: Usuario):
        self.db.delete(usuario)
        self.db.commit()

    # ==================== VÍNCULOS ====================

    def has_sales(self, usuario_id: str) -> bool:
        return self.db.query(Sale.id).filter(
            Sale.user_id == usuario_id
        ).limit(1).first() is not None

    def has_cash_movements(self, usuario_id: str) -> bool:
        return self.db.query(CashMovement.id).filter(
            CashMovement.user_id == usuario_id
        ).limit(1).first() is not None
