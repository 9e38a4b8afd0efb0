"""
Testes dos indicadores do painel e da atividade recente.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from app.modules.dashboard import service as dashboard_service
from app.shared.database.models import Customer, Product, Sale


class TestDashboardStats:

    def test_counts_and_todays_sales(self, client, employee_headers, product, customer):
        client.post(
            "/api/v1/sales",
            json={"customer_id": customer.id, "items": [{"product_id": product.id, "quantity": 2}]},
            headers=employee_headers,
        )

        stats = client.get("/api/v1/dashboard/stats", headers=employee_headers).json()

        assert float(stats["todays_sales"]) == 25.0
        assert stats["orders_count"] == 1
        assert stats["products_count"] == 1
        assert stats["customers_count"] == 1

    def test_older_sales_are_not_counted(self, client, employee_headers, customer, employee_user, db):
        db.add(Sale(
            customer_id=customer.id, user_id=employee_user.id, total_amount=Decimal("40.00"),
            created_at=datetime.now() - timedelta(days=2),
        ))
        db.commit()

        stats = client.get("/api/v1/dashboard/stats", headers=employee_headers).json()

        assert float(stats["todays_sales"]) == 0
        assert stats["orders_count"] == 0

    def test_stats_refresh_after_new_product(self, client, employee_headers):
        assert client.get("/api/v1/dashboard/stats", headers=employee_headers).json()["products_count"] == 0

        client.post(
            "/api/v1/products",
            json={"name": "Torta", "price": "30", "stock_quantity": 2},
            headers=employee_headers,
        )

        assert client.get("/api/v1/dashboard/stats", headers=employee_headers).json()["products_count"] == 1

    def test_stats_follow_the_calendar_day(self, client, employee_headers, product, customer, monkeypatch):
        client.post(
            "/api/v1/sales",
            json={"customer_id": customer.id, "items": [{"product_id": product.id, "quantity": 2}]},
            headers=employee_headers,
        )
        today = client.get("/api/v1/dashboard/stats", headers=employee_headers).json()
        assert float(today["todays_sales"]) == 25.0

        class NextDay(date):
            @classmethod
            def today(cls):
                return date.today() + timedelta(days=1)

        monkeypatch.setattr(dashboard_service, "date", NextDay)

        tomorrow = client.get("/api/v1/dashboard/stats", headers=employee_headers).json()
        assert float(tomorrow["todays_sales"]) == 0
        assert tomorrow["orders_count"] == 0
        assert tomorrow["products_count"] == 1


class TestRecentActivity:

    def test_merges_newest_first_and_keeps_three(self, client, employee_headers, db):
        base = datetime.now() - timedelta(hours=1)
        db.add_all([
            Product(name="Antigo", price=Decimal("1"), stock_quantity=1, created_at=base),
            Product(name="Novo", price=Decimal("1"), stock_quantity=1, created_at=base + timedelta(minutes=30)),
            Customer(name="Cliente A", created_at=base + timedelta(minutes=10)),
            Customer(name="Cliente B", created_at=base + timedelta(minutes=40)),
        ])
        db.commit()

        activity = client.get("/api/v1/dashboard/recent-activity", headers=employee_headers).json()

        assert [a["description"] for a in activity] == ["Cliente B", "Novo", "Cliente A"]
        assert [a["type"] for a in activity] == ["customer", "product", "customer"]

    def test_sale_description_has_customer_and_total(self, client, employee_headers, product, customer):
        client.post(
            "/api/v1/sales",
            json={"customer_id": customer.id, "items": [{"product_id": product.id, "quantity": 1}]},
            headers=employee_headers,
        )

        activity = client.get("/api/v1/dashboard/recent-activity", headers=employee_headers).json()

        assert activity[0]["type"] == "sale"
        assert activity[0]["title"] == "Venda realizada"
        assert activity[0]["description"] == "Carla Cliente - R$ 12.50"
