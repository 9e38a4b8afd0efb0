import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from app.config.database import Base

def generate_uuid() -> str:
    return str(uuid.uuid4())

class TimestampMixin:
    """Mixin para timestamps automáticos (hora local do servidor)"""
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

# ===== USUÁRIOS =====

class Usuario(Base):
    """Conta de acesso ao sistema"""
    __tablename__ = "usuarios"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    nome = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # Texto puro: o login compara a credencial exatamente como foi cadastrada
    senha = Column(String(255), nullable=False)
    funcao = Column(String(20), default='employee', nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    sales = relationship("Sale", back_populates="user")
    cash_movements = relationship("CashMovement", back_populates="user")

# ===== CATÁLOGO =====

class Product(Base, TimestampMixin):
    """Produto do catálogo"""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    category = Column(String(255))

    __table_args__ = (
        CheckConstraint('price >= 0', name='products_price_non_negative'),
        CheckConstraint('stock_quantity >= 0', name='products_stock_non_negative'),
    )

    # Relationships
    sale_items = relationship("SaleItem", back_populates="product")

class Customer(Base, TimestampMixin):
    """Cliente"""
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))
    address = Column(Text)

    # Relationships
    sales = relationship("Sale", back_populates="customer")

# ===== VENDAS =====

class Sale(Base, TimestampMixin):
    """Venda"""
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("usuarios.id"), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), default='completed', nullable=False)
    payment_method = Column(String(20), default='cash', nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="sales")
    user = relationship("Usuario", back_populates="sales")
    items = relationship("SaleItem", back_populates="sale")

class SaleItem(Base):
    """Item de venda com o preço congelado no momento da venda"""
    __tablename__ = "sale_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sale_id = Column(String(36), ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    sale = relationship("Sale", back_populates="items")
    product = relationship("Product", back_populates="sale_items")

# ===== CAIXA =====

class CashMovement(Base, TimestampMixin):
    """Movimentação de caixa: positiva para vendas/aberturas, negativa para despesas"""
    __tablename__ = "cash_movements"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("usuarios.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)
    # Índice único: no máximo um lançamento por venda
    sale_id = Column(String(36), ForeignKey("sales.id"), unique=True, nullable=True)

    # Relationships
    user = relationship("Usuario", back_populates="cash_movements")
    sale = relationship("Sale")
