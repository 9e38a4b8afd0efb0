# app/modules/admin/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.core.auth.schemas import UserRole
from app.shared.schemas import ResponseModel

# ==================== GESTÃO DE USUÁRIOS ====================

class UsuarioCreate(BaseModel):
    """Criar conta de acesso (admin, moderator, employee)"""
    nome: Optional[str] = Field(None, description="Nome completo")
    email: Optional[str] = Field(None, description="Email único do usuário")
    senha: Optional[str] = Field(None, description="Senha de acesso")
    funcao: UserRole = Field(UserRole.EMPLOYEE, description="Função do usuário")

class UsuarioUpdate(BaseModel):
    """Atualização parcial; senha em branco mantém a atual"""
    nome: Optional[str] = None
    email: Optional[str] = None
    senha: Optional[str] = None
    funcao: Optional[UserRole] = None

class UsuarioResponse(ResponseModel):
    """Conta sem a credencial"""
    id: str
    nome: str
    email: str
    funcao: UserRole
    created_at: datetime
    updated_at: datetime
