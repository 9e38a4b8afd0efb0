# app/modules/products/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.shared.schemas import ResponseModel

# ==================== REQUEST SCHEMAS ====================

class ProductCreate(BaseModel):
    name: Optional[str] = Field(None, description="Nome do produto")
    description: Optional[str] = Field(None, description="Descrição")
    price: Optional[Decimal] = Field(None, description="Preço unitário")
    stock_quantity: Optional[int] = Field(None, description="Quantidade em estoque")
    category: Optional[str] = Field(None, description="Categoria")

class ProductUpdate(BaseModel):
    """Atualização parcial: só os campos enviados são validados e gravados"""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock_quantity: Optional[int] = None
    category: Optional[str] = None

# ==================== RESPONSE SCHEMAS ====================

class ProductResponse(ResponseModel):
    id: str
    name: str
    description: Optional[str]
    price: Decimal
    stock_quantity: int
    category: Optional[str]
    created_at: datetime
