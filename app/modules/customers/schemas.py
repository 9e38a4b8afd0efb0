# app/modules/customers/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.shared.schemas import ResponseModel

class CustomerCreate(BaseModel):
    name: Optional[str] = Field(None, description="Nome do cliente")
    email: Optional[str] = Field(None, description="Email (opcional)")
    phone: Optional[str] = Field(None, description="Telefone")
    address: Optional[str] = Field(None, description="Endereço")

class CustomerUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class CustomerResponse(ResponseModel):
    id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    created_at: datetime
