"""
Testes do livro caixa e do resumo diário.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from app.modules.cash.repository import LedgerEntry
from app.modules.cash.service import summarize_entries
from app.shared.database.models import CashMovement, Sale


def entry(type_, amount, payment_method=None):
    movement = CashMovement(type=type_, amount=Decimal(amount), description="x", user_id="u-1")
    return LedgerEntry(movement=movement, payment_method=payment_method)


class TestSummarizeEntries:
    """Soma pura das movimentações de um dia."""

    def test_buckets_sales_by_payment_method(self):
        summary = summarize_entries(date(2026, 10, 19), [
            entry("sale", "100.00", "credit"),
            entry("sale", "30.00", "debit"),
            entry("sale", "20.00", "cash"),
            entry("expense", "-25.50"),
        ])

        assert summary.sales == Decimal("150.00")
        assert summary.credit == Decimal("100.00")
        assert summary.debit == Decimal("30.00")
        assert summary.cash == Decimal("20.00")
        assert summary.expenses == Decimal("25.50")
        assert summary.total == Decimal("124.50")
        assert summary.sales_count == 3
        assert summary.cash + summary.credit + summary.debit == summary.sales

    def test_sale_without_payment_method_counts_as_cash(self):
        summary = summarize_entries(date(2026, 10, 19), [entry("sale", "10.00", None)])

        assert summary.cash == Decimal("10.00")

    def test_unknown_payment_method_only_counts_in_sales(self):
        summary = summarize_entries(date(2026, 10, 19), [entry("sale", "10.00", "pix")])

        assert summary.sales == Decimal("10.00")
        assert summary.cash + summary.credit + summary.debit == Decimal("0")

    def test_opening_and_closing_are_not_folded(self):
        summary = summarize_entries(date(2026, 10, 19), [
            entry("opening", "200.00"),
            entry("closing", "-200.00"),
        ])

        assert summary.total == Decimal("0")
        assert summary.sales_count == 0
        assert summary.expenses == Decimal("0")

    def test_empty_day(self):
        summary = summarize_entries(date(2026, 10, 19), [])

        assert summary.total == Decimal("0")
        assert summary.date == date(2026, 10, 19)


class TestExpenses:

    def test_expense_is_stored_negative_and_updates_summary(self, client, employee_headers):
        today = date.today().isoformat()
        before = client.get("/api/v1/cash/summary", params={"date": today}, headers=employee_headers).json()

        response = client.post(
            "/api/v1/cash/expenses",
            json={"amount": "25.50", "description": "Embalagens"},
            headers=employee_headers,
        )

        assert response.status_code == 201
        movement = response.json()
        assert movement["type"] == "expense"
        assert float(movement["amount"]) == -25.50
        assert movement["description"] == "Embalagens"

        after = client.get("/api/v1/cash/summary", params={"date": today}, headers=employee_headers).json()
        assert float(after["expenses"]) == float(before["expenses"]) + 25.50
        assert float(after["total"]) == float(before["total"]) - 25.50

    def test_description_is_trimmed(self, client, employee_headers):
        response = client.post(
            "/api/v1/cash/expenses",
            json={"amount": "5", "description": "  Gelo  "},
            headers=employee_headers,
        )

        assert response.json()["description"] == "Gelo"

    @pytest.mark.parametrize("payload, detail", [
        ({"description": "Sem valor"}, "Preencha todos os campos obrigatórios."),
        ({"amount": "10"}, "Preencha todos os campos obrigatórios."),
        ({"amount": "10", "description": "   "}, "Preencha todos os campos obrigatórios."),
        ({"amount": "0", "description": "Zero"}, "Insira um valor válido para a despesa."),
        ({"amount": "-3", "description": "Negativo"}, "Insira um valor válido para a despesa."),
    ])
    def test_invalid_expense(self, client, employee_headers, payload, detail):
        response = client.post("/api/v1/cash/expenses", json=payload, headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == detail

    def test_description_too_long(self, client, employee_headers):
        response = client.post(
            "/api/v1/cash/expenses",
            json={"amount": "1", "description": "x" * 501},
            headers=employee_headers,
        )

        assert response.status_code == 400

    def test_requires_authentication(self, client):
        response = client.post("/api/v1/cash/expenses", json={"amount": "1", "description": "x"})

        assert response.status_code == 401

    def test_update_expense(self, client, employee_headers):
        created = client.post(
            "/api/v1/cash/expenses", json={"amount": "10", "description": "Gás"}, headers=employee_headers
        ).json()

        response = client.put(
            f"/api/v1/cash/expenses/{created['id']}",
            json={"amount": "12", "description": "Gás de cozinha"},
            headers=employee_headers,
        )

        assert response.status_code == 200
        assert float(response.json()["amount"]) == -12.0
        assert response.json()["description"] == "Gás de cozinha"

    def test_sale_movement_is_not_editable(self, client, employee_headers, db, customer, employee_user):
        sale = Sale(customer_id=customer.id, user_id=employee_user.id, total_amount=Decimal("10.00"))
        db.add(sale)
        db.flush()
        movement = CashMovement(
            user_id=employee_user.id, type="sale", amount=Decimal("10.00"), description="Venda", sale_id=sale.id
        )
        db.add(movement)
        db.commit()

        response = client.put(
            f"/api/v1/cash/expenses/{movement.id}",
            json={"amount": "1", "description": "x"},
            headers=employee_headers,
        )

        assert response.status_code == 400

    def test_delete_movement(self, client, employee_headers, db):
        created = client.post(
            "/api/v1/cash/expenses", json={"amount": "10", "description": "Luz"}, headers=employee_headers
        ).json()

        response = client.delete(f"/api/v1/cash/movements/{created['id']}", headers=employee_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.query(CashMovement).filter(CashMovement.id == created["id"]).first() is None

    def test_delete_missing_movement(self, client, employee_headers):
        response = client.delete("/api/v1/cash/movements/nao-existe", headers=employee_headers)

        assert response.status_code == 404


class TestMovementListing:

    def test_filter_by_date(self, client, employee_headers, db, employee_user):
        yesterday = datetime.now() - timedelta(days=1)
        db.add(CashMovement(
            user_id=employee_user.id, type="expense", amount=Decimal("-5.00"),
            description="Ontem", created_at=yesterday,
        ))
        db.commit()
        client.post(
            "/api/v1/cash/expenses", json={"amount": "7", "description": "Hoje"}, headers=employee_headers
        )

        everything = client.get("/api/v1/cash/movements", headers=employee_headers).json()
        today_only = client.get(
            "/api/v1/cash/movements", params={"date": date.today().isoformat()}, headers=employee_headers
        ).json()

        assert {m["description"] for m in everything} == {"Ontem", "Hoje"}
        assert [m["description"] for m in today_only] == ["Hoje"]

    def test_summary_ignores_other_days(self, client, employee_headers, db, employee_user):
        db.add(CashMovement(
            user_id=employee_user.id, type="expense", amount=Decimal("-5.00"),
            description="Ontem", created_at=datetime.now() - timedelta(days=1),
        ))
        db.commit()

        summary = client.get(
            "/api/v1/cash/summary", params={"date": date.today().isoformat()}, headers=employee_headers
        ).json()

        assert float(summary["expenses"]) == 0
