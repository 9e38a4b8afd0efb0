# app/core/auth/repository.py
from typing import Optional
from sqlalchemy.orm import Session

from app.shared.database.models import Usuario

class AuthRepository:
    """Consultas de credenciais"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_credentials(self, email: str, senha: str) -> Optional[Usuario]:
        return self.db.query(Usuario).filter(
            Usuario.email == email,
            Usuario.senha == senha
        ).first()
