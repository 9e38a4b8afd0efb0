# app/modules/sales/service.py
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth.session import AuthSession
from app.shared import cache as cache_keys
from app.shared.cache import QueryCache
from app.shared.database.models import Sale
from app.shared.errors import not_found, storage_guard, validation_error
from .cart import ProductSnapshot, SaleDraft
from .repository import SalesRepository
from .schemas import (
    CartLineResponse, CartResponse, ReconcileLedgerResponse,
    SaleCreateRequest, SaleItemResponse, SaleResponse
)

logger = logging.getLogger(__name__)

class SalesService:
    """
    Fluxo de venda: carrinho, fechamento, estorno e lançamento no caixa
    """

    def __init__(self, db: Session, cache: QueryCache):
        self.db = db
        self.cache = cache
        self.repository = SalesRepository(db)

    # ==================== CONSULTA ====================

    async def list_sales(self) -> List[SaleResponse]:
        def load():
            with storage_guard(self.db, "carregar vendas"):
                return [self._to_sale_response(sale) for sale in self.repository.list_sales()]

        return self.cache.get_or_load((cache_keys.SALES,), load)

    # ==================== CARRINHO ====================

    def add_to_cart(self, draft: SaleDraft, product_id: str, quantity: int) -> Optional[str]:
        """
        Adiciona ao carrinho contra o estoque atual do produto.
        Falta de estoque não altera o carrinho; o aviso é devolvido.
        """
        product = self._get_product_snapshot(product_id)

        warning = draft.cart.add(product, quantity)
        if warning:
            logger.warning(f"Carrinho: {product.name} x{quantity} recusado - {warning}")
        return warning

    def update_cart_quantity(self, draft: SaleDraft, product_id: str, quantity: int) -> Optional[str]:
        if quantity <= 0:
            draft.cart.update_quantity(product_id, quantity)
            return None

        product = self._get_product_snapshot(product_id)

        warning = draft.cart.update_quantity(product_id, quantity, product)
        if warning:
            logger.warning(f"Carrinho: quantidade {quantity} de {product.name} recusada - {warning}")
        return warning

    def select(self, draft: SaleDraft, customer_id: Optional[str], payment_method) -> None:
        if customer_id is not None:
            draft.customer_id = customer_id or None
        if payment_method is not None:
            draft.payment_method = payment_method

    def build_cart_response(self, draft: SaleDraft, warning: Optional[str] = None) -> CartResponse:
        return CartResponse(
            customer_id=draft.customer_id,
            payment_method=draft.payment_method,
            items=[
                CartLineResponse(
                    product_id=line.product.id,
                    product_name=line.product.name,
                    unit_price=line.product.price,
                    stock_quantity=line.product.stock_quantity,
                    quantity=line.quantity,
                    total_price=line.total
                )
                for line in draft.cart.lines
            ],
            total=draft.cart.total,
            warning=warning
        )

    def _get_product_snapshot(self, product_id: str) -> ProductSnapshot:
        with storage_guard(self.db, "carregar produto"):
            product = self.repository.get_product(product_id)
        if not product:
            raise not_found("Produto não encontrado")
        return ProductSnapshot.from_product(product)

    # ==================== FECHAMENTO DA VENDA ====================

    async def create_sale(self, session: AuthSession, sale_data: SaleCreateRequest) -> SaleResponse:
        """
        Venda direta: monta um rascunho com os itens enviados e fecha
        """
        draft = SaleDraft(
            customer_id=sale_data.customer_id,
            payment_method=sale_data.payment_method
        )

        for item in sale_data.items:
            warning = self.add_to_cart(draft, item.product_id, item.quantity)
            if warning:
                raise validation_error(warning)

        return await self.complete_sale(session, draft)

    async def complete_sale(self, session: AuthSession, draft: SaleDraft) -> SaleResponse:
        """
        Fecha a venda do rascunho.

        1. Pré-condições (usuário, cliente, carrinho) e nova checagem de estoque
        2. Venda + itens no mesmo commit
        3. Baixa de estoque por item (falha é registrada, não interrompe)
        4. Lançamento no caixa se ainda não existir (falha é registrada)
        """
        if not session.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Você precisa estar logado para realizar uma venda."
            )

        if not draft.customer_id:
            raise validation_error("Selecione um cliente para a venda.")

        if draft.cart.is_empty:
            raise validation_error("Adicione produtos ao carrinho.")

        user = session.user
        lines = draft.cart.lines

        with storage_guard(self.db, "validar venda"):
            user_exists = self.repository.usuario_exists(user.id)
            customer_exists = self.repository.customer_exists(draft.customer_id)
            products = self.repository.get_products_by_ids(line.product.id for line in lines)

        if not user_exists:
            raise validation_error("Usuário inválido: a conta não existe mais")

        if not customer_exists:
            raise not_found("Cliente não encontrado")

        # O estoque pode ter mudado desde que o carrinho foi montado
        for line in lines:
            product = products.get(line.product.id)
            if not product or product.stock_quantity < line.quantity:
                raise validation_error(f"Produto {line.product.name} não tem estoque suficiente.")

        total_amount = draft.cart.total
        payment_method = draft.payment_method.value

        with storage_guard(self.db, "processar a venda"):
            sale = self.repository.create_sale_with_items(
                customer_id=draft.customer_id,
                user_id=user.id,
                total_amount=total_amount,
                payment_method=payment_method,
                lines=lines
            )
        sale_id = sale.id
        logger.info(f"Venda {sale_id} criada por {user.email}: {len(lines)} itens, total {total_amount}")

        for line in lines:
            try:
                self.repository.decrease_product_stock(line.product.id, line.quantity)
            except SQLAlchemyError:
                self.db.rollback()
                logger.error(
                    f"Venda {sale_id}: falha ao baixar estoque do produto {line.product.id}",
                    exc_info=True
                )

        self.record_sale_movement(sale_id)

        draft.reset()
        self.cache.invalidate(*cache_keys.SALE_DEPENDENT_KEYS)

        with storage_guard(self.db, "carregar venda"):
            return self._to_sale_response(self.repository.get_sale_detail(sale_id))

    def record_sale_movement(self, sale_id: str) -> bool:
        """
        Lança a venda no caixa uma única vez. Retorna True se criou o lançamento.
        """
        try:
            if self.repository.has_sale_movement(sale_id):
                logger.info(f"Venda {sale_id} já possui lançamento no caixa")
                return False

            sale = self.repository.get_sale(sale_id)
            if not sale:
                logger.warning(f"Lançamento de caixa ignorado: venda {sale_id} não encontrada")
                return False

            self.repository.create_sale_movement(
                user_id=sale.user_id,
                sale_id=sale.id,
                amount=sale.total_amount,
                description=f"Venda #{sale.id[:8]} - {sale.payment_method}"
            )
            return True

        except IntegrityError:
            # Outro processo lançou a mesma venda entre a consulta e o insert
            self.db.rollback()
            logger.warning(f"Venda {sale_id}: lançamento de caixa já registrado por outra operação")
            return False
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Venda {sale_id}: falha ao registrar lançamento no caixa", exc_info=True)
            return False

    # ==================== EXCLUSÃO ====================

    async def delete_sale(self, sale_id: str) -> None:
        """
        Exclui a venda devolvendo o estoque. Ordem: estoque, itens,
        lançamento de caixa, venda.
        """
        with storage_guard(self.db, "carregar venda"):
            sale = self.repository.get_sale(sale_id)
        if not sale:
            raise not_found("Venda não encontrada")

        with storage_guard(self.db, "carregar itens da venda"):
            items = [(item.product_id, item.quantity) for item in self.repository.get_sale_items(sale_id)]

        for product_id, quantity in items:
            try:
                self.repository.increase_product_stock(product_id, quantity)
            except SQLAlchemyError:
                self.db.rollback()
                logger.error(
                    f"Venda {sale_id}: falha ao devolver {quantity} unidades ao produto {product_id}",
                    exc_info=True
                )

        with storage_guard(self.db, "excluir itens da venda"):
            self.repository.delete_sale_items(sale_id)

        try:
            self.repository.delete_sale_movement(sale_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Venda {sale_id}: falha ao excluir lançamento de caixa", exc_info=True)

        with storage_guard(self.db, "excluir a venda"):
            self.repository.delete_sale(sale_id)

        logger.info(f"Venda {sale_id} excluída, {len(items)} itens devolvidos ao estoque")
        self.cache.invalidate(*cache_keys.SALE_DEPENDENT_KEYS)

    # ==================== RECONCILIAÇÃO ====================

    async def reconcile_ledger(self) -> ReconcileLedgerResponse:
        """
        Cria os lançamentos de caixa que ficaram faltando para vendas já registradas
        """
        with storage_guard(self.db, "buscar vendas sem lançamento"):
            sale_ids = [sale.id for sale in self.repository.get_sales_without_movement()]

        created = [sale_id for sale_id in sale_ids if self.record_sale_movement(sale_id)]

        if created:
            logger.info(f"Reconciliação do caixa: {len(created)} lançamentos criados")
            self.cache.invalidate(
                cache_keys.CASH_MOVEMENTS, cache_keys.TODAYS_CASH_SUMMARY
            )

        return ReconcileLedgerResponse(
            success=True,
            created_count=len(created),
            sale_ids=created
        )

    # ==================== CONVERSÃO ====================

    def _to_sale_response(self, sale: Sale) -> SaleResponse:
        return SaleResponse(
            id=sale.id,
            customer_id=sale.customer_id,
            customer_name=sale.customer.name if sale.customer else None,
            user_id=sale.user_id,
            total_amount=sale.total_amount,
            status=sale.status,
            payment_method=sale.payment_method,
            created_at=sale.created_at,
            items=[
                SaleItemResponse(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product.name if item.product else None,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price
                )
                for item in sale.items
            ]
        )
