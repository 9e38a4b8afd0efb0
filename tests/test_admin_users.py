"""
Testes da administração de contas.
"""

import asyncio
from decimal import Decimal

import pytest
from fastapi import HTTPException

from app.core.auth.session import AuthSession, TokenSessionStorage
from app.modules.admin.schemas import UsuarioCreate
from app.modules.admin.service import AdminService
from app.shared.cache import QueryCache
from app.shared.database.models import CashMovement, Sale, Usuario


class TestRouteGating:

    def test_employee_cannot_list_users(self, client, employee_headers):
        response = client.get("/api/v1/users", headers=employee_headers)

        assert response.status_code == 403

    def test_moderator_cannot_create_users(self, client, moderator_headers):
        response = client.post(
            "/api/v1/users",
            json={"nome": "X", "email": "x@pdv.com", "senha": "123"},
            headers=moderator_headers,
        )

        assert response.status_code == 403

    def test_admin_lists_users_without_credentials(self, client, admin_headers, employee_user):
        response = client.get("/api/v1/users", headers=admin_headers)

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert emails == {"admin@pdv.com", "funcionario@pdv.com"}
        assert all("senha" not in u for u in response.json())

    def test_service_rechecks_admin_role(self, db, moderator_user):
        session = AuthSession(TokenSessionStorage())
        session.login(db, "moderador@pdv.com", "mod123")
        service = AdminService(db, QueryCache())

        with pytest.raises(HTTPException) as excinfo:
            asyncio.run(service.create_usuario(
                session, UsuarioCreate(nome="X", email="x@pdv.com", senha="1")
            ))

        assert excinfo.value.status_code == 403
        assert excinfo.value.detail == "Acesso negado: apenas administradores podem criar usuários"


class TestCreateUsuario:

    def test_create_user(self, client, admin_headers):
        response = client.post(
            "/api/v1/users",
            json={"nome": "Novo", "email": "novo@pdv.com", "senha": "abc", "funcao": "moderator"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["funcao"] == "moderator"

        login = client.post("/api/v1/auth/login", json={"email": "novo@pdv.com", "password": "abc"})
        assert login.json()["success"] is True

    @pytest.mark.parametrize("payload, detail", [
        ({"email": "a@pdv.com", "senha": "1"}, "Nome é obrigatório"),
        ({"nome": "A", "senha": "1"}, "Email é obrigatório"),
        ({"nome": "A", "email": "a@pdv.com", "senha": " "}, "Senha é obrigatória"),
        ({"nome": "A", "email": "sem-arroba", "senha": "1"}, "Formato de email inválido"),
    ])
    def test_invalid_payload(self, client, admin_headers, payload, detail):
        response = client.post("/api/v1/users", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == detail

    def test_duplicate_email(self, client, admin_headers, employee_user):
        response = client.post(
            "/api/v1/users",
            json={"nome": "Outro", "email": "funcionario@pdv.com", "senha": "1"},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email já está em uso"


class TestUpdateUsuario:

    def test_blank_password_keeps_credential(self, client, admin_headers, employee_user, db):
        response = client.put(
            f"/api/v1/users/{employee_user.id}",
            json={"nome": "Eva Souza", "senha": ""},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["nome"] == "Eva Souza"
        db.expire_all()
        assert db.query(Usuario).filter(Usuario.email == "funcionario@pdv.com").one().senha == "func123"

    def test_email_taken_by_other_user(self, client, admin_headers, employee_user, moderator_user):
        response = client.put(
            f"/api/v1/users/{employee_user.id}",
            json={"email": "moderador@pdv.com"},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email já está em uso por outro usuário"

    def test_keeping_own_email_is_allowed(self, client, admin_headers, employee_user):
        response = client.put(
            f"/api/v1/users/{employee_user.id}",
            json={"email": "funcionario@pdv.com", "funcao": "moderator"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["funcao"] == "moderator"

    def test_blank_name(self, client, admin_headers, employee_user):
        response = client.put(
            f"/api/v1/users/{employee_user.id}", json={"nome": "  "}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Nome não pode estar vazio"

    def test_missing_user(self, client, admin_headers):
        response = client.put("/api/v1/users/nao-existe", json={"nome": "X"}, headers=admin_headers)

        assert response.status_code == 404


class TestDeleteUsuario:

    def test_delete_user(self, client, admin_headers, employee_user, db):
        user_id = employee_user.id

        response = client.delete(f"/api/v1/users/{user_id}", headers=admin_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.query(Usuario).filter(Usuario.id == user_id).first() is None

    def test_cannot_delete_own_account(self, client, admin_headers, admin_user):
        response = client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Você não pode excluir sua própria conta"

    def test_user_with_sales_is_kept(self, client, admin_headers, employee_user, customer, db):
        db.add(Sale(customer_id=customer.id, user_id=employee_user.id, total_amount=Decimal("1.00")))
        db.commit()

        response = client.delete(f"/api/v1/users/{employee_user.id}", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Não é possível excluir usuário que possui vendas associadas"

    def test_user_with_cash_movements_is_kept(self, client, admin_headers, employee_user, db):
        db.add(CashMovement(
            user_id=employee_user.id, type="expense", amount=Decimal("-1.00"), description="Café"
        ))
        db.commit()

        response = client.delete(f"/api/v1/users/{employee_user.id}", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == (
            "Não é possível excluir usuário que possui movimentações de caixa associadas"
        )
