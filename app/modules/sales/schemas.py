from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.shared.schemas import ResponseModel

# ==================== ENUMS ====================

class PaymentMethod(str, Enum):
    cash = "cash"
    credit = "credit"
    debit = "debit"

class SaleStatus(str, Enum):
    completed = "completed"
    pending = "pending"
    cancelled = "cancelled"

# ==================== REQUEST SCHEMAS ====================

class SaleItemRequest(BaseModel):
    product_id: str = Field(..., description="ID do produto")
    quantity: int = Field(..., gt=0, description="Quantidade")

class SaleCreateRequest(BaseModel):
    """Venda completa em uma única chamada, sem passar pelo carrinho do servidor"""
    customer_id: Optional[str] = Field(None, description="Cliente da venda")
    payment_method: PaymentMethod = Field(PaymentMethod.cash, description="Forma de pagamento")
    items: List[SaleItemRequest] = Field(default_factory=list, description="Itens da venda")

class CartItemRequest(BaseModel):
    product_id: str = Field(..., description="ID do produto")
    quantity: int = Field(1, gt=0, description="Quantidade a adicionar")

class CartQuantityRequest(BaseModel):
    quantity: int = Field(..., description="Nova quantidade; zero ou menos remove o item")

class CartSelectionRequest(BaseModel):
    customer_id: Optional[str] = Field(None, description="Cliente selecionado")
    payment_method: Optional[PaymentMethod] = Field(None, description="Forma de pagamento")

# ==================== RESPONSE SCHEMAS ====================

class CartLineResponse(ResponseModel):
    product_id: str
    product_name: str
    unit_price: Decimal
    stock_quantity: int
    quantity: int
    total_price: Decimal

class CartResponse(ResponseModel):
    customer_id: Optional[str]
    payment_method: PaymentMethod
    items: List[CartLineResponse]
    total: Decimal
    warning: Optional[str] = None

class SaleItemResponse(ResponseModel):
    id: str
    product_id: str
    product_name: Optional[str]
    quantity: int
    unit_price: Decimal
    total_price: Decimal

class SaleResponse(ResponseModel):
    id: str
    customer_id: str
    customer_name: Optional[str]
    user_id: str
    total_amount: Decimal
    status: SaleStatus
    payment_method: PaymentMethod
    created_at: datetime
    items: List[SaleItemResponse]

class ReconcileLedgerResponse(BaseModel):
    success: bool
    created_count: int
    sale_ids: List[str]
