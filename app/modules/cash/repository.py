# app/modules/cash/repository.py
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc

from app.shared.database.models import CashMovement, Sale, Usuario

@dataclass(frozen=True)
class LedgerEntry:
    """Movimentação com a forma de pagamento da venda associada (se houver)"""
    movement: CashMovement
    payment_method: Optional[str]

    @property
    def type(self) -> str:
        return self.movement.type

    @property
    def amount(self) -> Decimal:
        return Decimal(self.movement.amount)

class CashRepository:
    """
    Repositório das movimentações de caixa
    """

    def __init__(self, db: Session):
        self.db = db

    def list_movements(self) -> List[CashMovement]:
        return self.db.query(CashMovement).order_by(desc(CashMovement.created_at)).all()

    def list_entries_between(self, start: datetime, end: datetime) -> List[LedgerEntry]:
        """Movimentações do intervalo (inclusivo), mais antigas primeiro"""
        rows = self.db.query(CashMovement, Sale.payment_method).outerjoin(
            Sale, CashMovement.sale_id == Sale.id
        ).filter(
            CashMovement.created_at >= start,
            CashMovement.created_at <= end
        ).order_by(asc(CashMovement.created_at)).all()

        return [LedgerEntry(movement=movement, payment_method=payment_method)
                for movement, payment_method in rows]

    def get_movement(self, movement_id: str) -> Optional[CashMovement]:
        return self.db.query(CashMovement).filter(CashMovement.id == movement_id).first()

    def create_movement(self, data: Dict[str, Any]) -> CashMovement:
        movement = CashMovement(**data)

        self.db.add(movement)
        self.db.commit()
        self.db.refresh(movement)

        return movement

    def update_movement(self, movement: CashMovement, data: Dict[str, Any]) -> CashMovement:
        for key, value in data.items():
            setattr(movement, key, value)

        self.db.commit()
        self.db.refresh(movement)

        return movement

    def delete_movement(self, movement: CashMovement):
        self.db.delete(movement)
        self.db.commit()

    def usuario_exists(self, user_id: str) -> bool:
        return self.db.query(Usuario.id).filter(Usuario.id == user_id).first() is not None
