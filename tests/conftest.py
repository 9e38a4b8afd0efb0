"""
Configuração do pytest e fixtures da API do PDV.

Cada teste roda em um banco SQLite em memória novo, compartilhado com as
sessões das requisições por um StaticPool.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, get_db
from app.main import app
from app.shared.database import models  # noqa: F401
from app.shared.database.models import Customer, Product, Usuario


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Sessão para preparar e conferir dados diretamente."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.query_cache.clear()
    app.state.draft_store.clear()

    yield TestClient(app)

    app.dependency_overrides.clear()
    app.state.query_cache.clear()
    app.state.draft_store.clear()


# ---------------------------------------------------------------------------
# Contas
# ---------------------------------------------------------------------------


def _create_usuario(db, nome, email, senha, funcao):
    usuario = Usuario(nome=nome, email=email, senha=senha, funcao=funcao)
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


@pytest.fixture
def admin_user(db):
    return _create_usuario(db, "Ana Admin", "admin@pdv.com", "admin123", "admin")


@pytest.fixture
def moderator_user(db):
    return _create_usuario(db, "Marcos Moderador", "moderador@pdv.com", "mod123", "moderator")


@pytest.fixture
def employee_user(db):
    return _create_usuario(db, "Eva Funcionária", "funcionario@pdv.com", "func123", "employee")


def login(client, email, password):
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True, body
    return {"Authorization": f"Bearer {body['access_token']}"}


@pytest.fixture
def admin_headers(client, admin_user):
    return login(client, "admin@pdv.com", "admin123")


@pytest.fixture
def moderator_headers(client, moderator_user):
    return login(client, "moderador@pdv.com", "mod123")


@pytest.fixture
def employee_headers(client, employee_user):
    return login(client, "funcionario@pdv.com", "func123")


# ---------------------------------------------------------------------------
# Catálogo e clientes
# ---------------------------------------------------------------------------


@pytest.fixture
def product(db):
    product = Product(name="Morango 500g", price=Decimal("12.50"), stock_quantity=10, category="Frutas")
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def other_product(db):
    product = Product(name="Geleia de Morango", price=Decimal("20.00"), stock_quantity=3)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def customer(db):
    customer = Customer(name="Carla Cliente", email="carla@example.com", phone="11999990000")
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer
