# app/modules/sales/cart.py
"""
Estado de composição de uma venda: carrinho, cliente e forma de pagamento.

O carrinho nunca lança erro por falta de estoque: a operação é recusada,
o carrinho fica como estava e o aviso é devolvido para quem chamou.
"""
import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from .schemas import PaymentMethod

@dataclass(frozen=True)
class ProductSnapshot:
    """Cópia do produto no momento em que entrou no carrinho"""
    id: str
    name: str
    price: Decimal
    stock_quantity: int

    @classmethod
    def from_product(cls, product) -> "ProductSnapshot":
        return cls(
            id=product.id,
            name=product.name,
            price=Decimal(product.price),
            stock_quantity=product.stock_quantity
        )

@dataclass
class CartLine:
    product: ProductSnapshot
    quantity: int

    @property
    def total(self) -> Decimal:
        return self.product.price * self.quantity

def insufficient_stock_warning(product: ProductSnapshot) -> str:
    return f"Estoque insuficiente: apenas {product.stock_quantity} unidades disponíveis."

class Cart:

    def __init__(self):
        self._lines: List[CartLine] = []

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> Decimal:
        return sum((line.total for line in self._lines), Decimal("0"))

    def find(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.product.id == product_id), None)

    def add(self, product: ProductSnapshot, quantity: int) -> Optional[str]:
        """Soma à linha existente ou cria uma nova; devolve o aviso se faltar estoque"""
        if product.stock_quantity < quantity:
            return insufficient_stock_warning(product)

        existing = self.find(product.id)
        if existing:
            new_quantity = existing.quantity + quantity
            if product.stock_quantity < new_quantity:
                return insufficient_stock_warning(product)
            existing.quantity = new_quantity
        else:
            self._lines.append(CartLine(product=product, quantity=quantity))

        return None

    def update_quantity(
        self,
        product_id: str,
        quantity: int,
        product: Optional[ProductSnapshot] = None
    ) -> Optional[str]:
        if quantity <= 0:
            self.remove(product_id)
            return None

        if product is not None and quantity > product.stock_quantity:
            return f"Produto {product.name} não tem estoque suficiente."

        line = self.find(product_id)
        if line:
            line.quantity = quantity
        return None

    def remove(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.product.id != product_id]

    def clear(self) -> None:
        self._lines = []

@dataclass
class SaleDraft:
    cart: Cart = field(default_factory=Cart)
    customer_id: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.cash

    def reset(self) -> None:
        self.cart.clear()
        self.customer_id = None
        self.payment_method = PaymentMethod.cash

class DraftStore:
    """Rascunhos de venda em memória, um por operador"""

    def __init__(self):
        self._drafts: Dict[str, SaleDraft] = {}
        self._lock = threading.Lock()

    def get(self, account_id: str) -> SaleDraft:
        with self._lock:
            return self._drafts.setdefault(account_id, SaleDraft())

    def discard(self, account_id: str) -> None:
        with self._lock:
            self._drafts.pop(account_id, None)

    def clear(self) -> None:
        with self._lock:
            self._drafts.clear()
