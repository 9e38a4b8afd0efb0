# app/modules/cash/service.py
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.auth.session import AuthSession
from app.shared import cache as cache_keys
from app.shared.cache import QueryCache
from app.shared.errors import not_found, storage_guard, validation_error
from app.shared.validators import is_blank
from .repository import CashRepository, LedgerEntry
from .schemas import CashMovementResponse, CashSummaryResponse, ExpenseRequest, MovementType

logger = logging.getLogger(__name__)

CASH_DEPENDENT_KEYS = (cache_keys.CASH_MOVEMENTS, cache_keys.TODAYS_CASH_SUMMARY)

PAYMENT_BUCKETS = ("cash", "credit", "debit")

def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Início e fim do dia local, ambos inclusivos"""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)

def summarize_entries(day: date, entries: Iterable[LedgerEntry]) -> CashSummaryResponse:
    """
    Resumo do caixa do dia.

    Vendas somam em ``sales`` e no balde da forma de pagamento (sem venda
    associada conta como ``cash``); despesas somam o valor absoluto em
    ``expenses``. Aberturas e fechamentos não entram em nenhum total.
    """
    totals = {key: Decimal("0") for key in ("sales", "expenses") + PAYMENT_BUCKETS}
    sales_count = 0

    for entry in entries:
        if entry.type == MovementType.sale.value:
            sales_count += 1
            totals["sales"] += entry.amount

            payment_method = entry.payment_method or "cash"
            if payment_method in PAYMENT_BUCKETS:
                totals[payment_method] += entry.amount
        elif entry.type == MovementType.expense.value:
            totals["expenses"] += abs(entry.amount)

    return CashSummaryResponse(
        date=day,
        total=totals["sales"] - totals["expenses"],
        sales_count=sales_count,
        **totals
    )

class CashService:
    """
    Livro caixa: despesas e resumo diário
    """

    def __init__(self, db: Session, cache: QueryCache):
        self.db = db
        self.cache = cache
        self.repository = CashRepository(db)

    # ==================== CONSULTAS ====================

    async def list_movements(self) -> List[CashMovementResponse]:
        def load():
            with storage_guard(self.db, "carregar movimentações de caixa"):
                return [CashMovementResponse.model_validate(m) for m in self.repository.list_movements()]

        return self.cache.get_or_load((cache_keys.CASH_MOVEMENTS,), load)

    async def list_movements_by_date(self, day: date) -> List[CashMovementResponse]:
        def load():
            with storage_guard(self.db, "carregar movimentações do dia"):
                entries = self.repository.list_entries_between(*day_bounds(day))
            return [
                CashMovementResponse.model_validate(entry.movement).model_copy(
                    update={"payment_method": entry.payment_method}
                )
                for entry in entries
            ]

        return self.cache.get_or_load((cache_keys.CASH_MOVEMENTS, day.isoformat()), load)

    async def daily_summary(self, day: Optional[date] = None) -> CashSummaryResponse:
        day = day or date.today()

        def load():
            with storage_guard(self.db, "calcular o resumo do caixa"):
                entries = self.repository.list_entries_between(*day_bounds(day))
            return summarize_entries(day, entries)

        return self.cache.get_or_load((cache_keys.TODAYS_CASH_SUMMARY, day.isoformat()), load)

    # ==================== DESPESAS ====================

    async def create_expense(self, session: AuthSession, expense_data: ExpenseRequest) -> CashMovementResponse:
        if not session.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Você precisa estar logado para registrar despesas."
            )

        amount, description = self._validate_expense(expense_data)

        with storage_guard(self.db, "registrar a despesa"):
            user_exists = self.repository.usuario_exists(session.user.id)
        if not user_exists:
            raise validation_error("Usuário inválido: a conta não existe mais")

        with storage_guard(self.db, "registrar a despesa"):
            movement = self.repository.create_movement({
                "user_id": session.user.id,
                "type": MovementType.expense.value,
                "amount": -abs(amount),
                "description": description
            })

        logger.info(f"Despesa registrada por {session.user.email}: {amount} - {description}")
        self.cache.invalidate(*CASH_DEPENDENT_KEYS)
        return CashMovementResponse.model_validate(movement)

    async def update_expense(
        self,
        session: AuthSession,
        movement_id: str,
        expense_data: ExpenseRequest
    ) -> CashMovementResponse:
        if not session.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Você precisa estar logado para editar despesas."
            )

        amount, description = self._validate_expense(expense_data)

        movement = self.repository.get_movement(movement_id)
        if not movement:
            raise not_found("Movimentação de caixa não encontrada")

        if movement.type != MovementType.expense.value:
            raise validation_error("Apenas despesas podem ser editadas")

        with storage_guard(self.db, "atualizar a despesa"):
            movement = self.repository.update_movement(movement, {
                "amount": -abs(amount),
                "description": description
            })

        self.cache.invalidate(*CASH_DEPENDENT_KEYS)
        return CashMovementResponse.model_validate(movement)

    async def delete_movement(self, movement_id: str) -> None:
        movement = self.repository.get_movement(movement_id)
        if not movement:
            raise not_found("Movimentação de caixa não encontrada")

        with storage_guard(self.db, "excluir a movimentação"):
            self.repository.delete_movement(movement)

        logger.info(f"Movimentação de caixa excluída: {movement_id}")
        self.cache.invalidate(*CASH_DEPENDENT_KEYS)

    def _validate_expense(self, expense_data: ExpenseRequest) -> Tuple[Decimal, str]:
        if expense_data.amount is None or is_blank(expense_data.description):
            raise validation_error("Preencha todos os campos obrigatórios.")

        if expense_data.amount <= 0:
            raise validation_error("Insira um valor válido para a despesa.")

        description = expense_data.description.strip()
        max_length = settings.expense_description_max_length
        if len(description) > max_length:
            raise validation_error(f"A descrição deve ter no máximo {max_length} caracteres.")

        return expense_data.amount, description
