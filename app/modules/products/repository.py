# app/modules/products/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import desc

from app.shared.database.models import Product, SaleItem

class ProductRepository:
    """
    Repositório do catálogo de produtos
    """

    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[Product]:
        return self.db.query(Product).order_by(desc(Product.created_at)).all()

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def create_product(self, data: Dict[str, Any]) -> Product:
        product = Product(**data)

        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)

        return product

    def update_product(self, product: Product, data: Dict[str, Any]) -> Product:
        for key, value in data.items():
            setattr(product, key, value)

        self.db.commit()
        self.db.refresh(product)

        return product

    def delete_product(self, product: Product):
        self.db.delete(product)
        self.db.commit()

    def has_sale_items(self, product_id: str) -> bool:
        """Sonda de existência: algum item de venda referencia o produto?"""
        return self.db.query(SaleItem.id).filter(
            SaleItem.product_id == product_id
        ).limit(1).first() is not None
