# app/core/auth/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum

class UserRole(str, Enum):
    """Funções de usuário do sistema"""
    ADMIN = "admin"
    MODERATOR = "moderator"
    EMPLOYEE = "employee"

class Account(BaseModel):
    """Identidade autenticada (sem a credencial)"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    nome: str
    email: str
    funcao: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class LoginRequest(BaseModel):
    email: str = Field(..., description="Email cadastrado")
    password: str = Field(..., description="Senha")

class PermissionsResponse(BaseModel):
    is_admin: bool
    is_moderator: bool
    can_manage_users: bool
    can_manage_products: bool
    can_manage_sales: bool

class LoginResponse(BaseModel):
    success: bool
    error: Optional[str] = None
    access_token: Optional[str] = None
    token_type: str = "bearer"
    user: Optional[Account] = None

class MeResponse(BaseModel):
    user: Account
    permissions: PermissionsResponse
