# app/modules/sales/repository.py
from decimal import Decimal
from typing import List, Optional, Dict, Iterable
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import case, desc

from app.shared.database.models import (
    Sale, SaleItem, Product, Customer, CashMovement, Usuario
)
from .cart import CartLine

class SalesRepository:
    """
    Repositório de todas as operações de dados relacionadas a vendas
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== PRODUTOS ====================

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_products_by_ids(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        products = self.db.query(Product).filter(Product.id.in_(list(product_ids))).all()
        return {product.id: product for product in products}

    def decrease_product_stock(self, product_id: str, quantity: int) -> int:
        """
        Baixa de estoque em um único UPDATE condicional, com piso em zero.
        Retorna o número de linhas afetadas.
        """
        rows = self.db.query(Product).filter(Product.id == product_id).update(
            {
                Product.stock_quantity: case(
                    (Product.stock_quantity >= quantity, Product.stock_quantity - quantity),
                    else_=0
                )
            },
            synchronize_session=False
        )
        self.db.commit()
        return rows

    def increase_product_stock(self, product_id: str, quantity: int) -> int:
        rows = self.db.query(Product).filter(Product.id == product_id).update(
            {Product.stock_quantity: Product.stock_quantity + quantity},
            synchronize_session=False
        )
        self.db.commit()
        return rows

    # ==================== REFERÊNCIAS ====================

    def usuario_exists(self, user_id: str) -> bool:
        return self.db.query(Usuario.id).filter(Usuario.id == user_id).first() is not None

    def customer_exists(self, customer_id: str) -> bool:
        return self.db.query(Customer.id).filter(Customer.id == customer_id).first() is not None

    # ==================== VENDAS ====================

    def create_sale_with_items(
        self,
        customer_id: str,
        user_id: str,
        total_amount: Decimal,
        payment_method: str,
        lines: List[CartLine]
    ) -> Sale:
        """
        Cria a venda e seus itens no mesmo commit
        """
        sale = Sale(
            customer_id=customer_id,
            user_id=user_id,
            total_amount=total_amount,
            status='completed',
            payment_method=payment_method
        )
        self.db.add(sale)
        self.db.flush()  # Obter o ID antes de criar os itens

        for line in lines:
            self.db.add(SaleItem(
                sale_id=sale.id,
                product_id=line.product.id,
                quantity=line.quantity,
                unit_price=line.product.price,
                total_price=line.total
            ))

        self.db.commit()
        self.db.refresh(sale)

        return sale

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        return self.db.query(Sale).filter(Sale.id == sale_id).first()

    def get_sale_detail(self, sale_id: str) -> Optional[Sale]:
        return self.db.query(Sale).options(
            joinedload(Sale.customer),
            joinedload(Sale.items).joinedload(SaleItem.product)
        ).filter(Sale.id == sale_id).first()

    def list_sales(self) -> List[Sale]:
        return self.db.query(Sale).options(
            joinedload(Sale.customer),
            joinedload(Sale.items).joinedload(SaleItem.product)
        ).order_by(desc(Sale.created_at)).all()

    def get_sale_items(self, sale_id: str) -> List[SaleItem]:
        return self.db.query(SaleItem).filter(SaleItem.sale_id == sale_id).all()

    def delete_sale_items(self, sale_id: str) -> int:
        rows = self.db.query(SaleItem).filter(
            SaleItem.sale_id == sale_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return rows

    def delete_sale(self, sale_id: str) -> int:
        rows = self.db.query(Sale).filter(Sale.id == sale_id).delete(synchronize_session=False)
        self.db.commit()
        return rows

    def get_sales_without_movement(self) -> List[Sale]:
        return self.db.query(Sale).outerjoin(
            CashMovement, CashMovement.sale_id == Sale.id
        ).filter(
            CashMovement.id.is_(None)
        ).order_by(Sale.created_at).all()

    # ==================== CAIXA ====================

    def has_sale_movement(self, sale_id: str) -> bool:
        return self.db.query(CashMovement.id).filter(
            CashMovement.sale_id == sale_id
        ).limit(1).first() is not None

    def create_sale_movement(
        self,
        user_id: str,
        sale_id: str,
        amount: Decimal,
        description: str
    ) -> CashMovement:
        movement = CashMovement(
            user_id=user_id,
            type='sale',
            amount=amount,
            description=description,
            sale_id=sale_id
        )

        self.db.add(movement)
        self.db.commit()
        self.db.refresh(movement)

        return movement

    def delete_sale_movement(self, sale_id: str) -> int:
        rows = self.db.query(CashMovement).filter(
            CashMovement.sale_id == sale_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return rows
