# app/modules/cash/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal
from enum import Enum

from app.shared.schemas import ResponseModel

# ==================== ENUMS ====================

class MovementType(str, Enum):
    sale = "sale"
    expense = "expense"
    opening = "opening"
    closing = "closing"

# ==================== REQUEST SCHEMAS ====================

class ExpenseRequest(BaseModel):
    """O valor é informado positivo; é gravado negativo"""
    amount: Optional[Decimal] = Field(None, description="Valor da despesa")
    description: Optional[str] = Field(None, description="Descrição (até 500 caracteres)")

# ==================== RESPONSE SCHEMAS ====================

class CashMovementResponse(ResponseModel):
    id: str
    user_id: str
    type: MovementType
    amount: Decimal
    description: str
    sale_id: Optional[str]
    created_at: datetime
    payment_method: Optional[str] = None

class CashSummaryResponse(ResponseModel):
    date: date
    sales: Decimal
    expenses: Decimal
    cash: Decimal
    credit: Decimal
    debit: Decimal
    total: Decimal
    sales_count: int
