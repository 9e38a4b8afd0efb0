"""
Testes do catálogo de produtos.
"""

from decimal import Decimal

from app.shared.database.models import Product, Sale, SaleItem


class TestCreateProduct:

    def test_create_product(self, client, employee_headers):
        response = client.post(
            "/api/v1/products",
            json={"name": "Morango orgânico", "price": "15.90", "stock_quantity": 8, "category": "Frutas"},
            headers=employee_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Morango orgânico"
        assert float(body["price"]) == 15.90
        assert body["stock_quantity"] == 8
        assert body["id"]

    def test_missing_required_fields(self, client, employee_headers):
        response = client.post("/api/v1/products", json={"name": "Sem preço"}, headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Nome, preço e quantidade em estoque são obrigatórios"

    def test_blank_name_is_rejected(self, client, employee_headers):
        response = client.post(
            "/api/v1/products",
            json={"name": "   ", "price": "1.00", "stock_quantity": 1},
            headers=employee_headers,
        )

        assert response.status_code == 400

    def test_negative_price_is_rejected(self, client, employee_headers):
        response = client.post(
            "/api/v1/products",
            json={"name": "Morango", "price": "-1", "stock_quantity": 1},
            headers=employee_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Preço não pode ser negativo"

    def test_negative_stock_is_rejected(self, client, employee_headers):
        response = client.post(
            "/api/v1/products",
            json={"name": "Morango", "price": "1", "stock_quantity": -3},
            headers=employee_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Quantidade em estoque não pode ser negativa"

    def test_requires_authentication(self, client):
        response = client.post("/api/v1/products", json={"name": "X", "price": "1", "stock_quantity": 1})

        assert response.status_code == 401


class TestListProducts:

    def test_list_reflects_new_product(self, client, employee_headers, product):
        first = client.get("/api/v1/products", headers=employee_headers)
        assert [p["name"] for p in first.json()] == ["Morango 500g"]

        client.post(
            "/api/v1/products",
            json={"name": "Geleia", "price": "9.00", "stock_quantity": 2},
            headers=employee_headers,
        )

        second = client.get("/api/v1/products", headers=employee_headers)
        names = [p["name"] for p in second.json()]
        assert set(names) == {"Morango 500g", "Geleia"}


class TestUpdateProduct:

    def test_partial_update_only_touches_sent_fields(self, client, employee_headers, product):
        response = client.put(
            f"/api/v1/products/{product.id}",
            json={"price": "13.00"},
            headers=employee_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert float(body["price"]) == 13.0
        assert body["name"] == "Morango 500g"
        assert body["stock_quantity"] == 10

    def test_update_with_blank_name(self, client, employee_headers, product):
        response = client.put(
            f"/api/v1/products/{product.id}", json={"name": ""}, headers=employee_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Nome do produto não pode estar vazio"

    def test_update_with_null_price(self, client, employee_headers, product):
        response = client.put(
            f"/api/v1/products/{product.id}", json={"price": None}, headers=employee_headers
        )

        assert response.status_code == 400

    def test_update_missing_product(self, client, employee_headers):
        response = client.put("/api/v1/products/nao-existe", json={"name": "X"}, headers=employee_headers)

        assert response.status_code == 404


class TestDeleteProduct:

    def test_delete_unused_product(self, client, employee_headers, product, db):
        product_id = product.id

        response = client.delete(f"/api/v1/products/{product_id}", headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        db.expire_all()
        assert db.query(Product).filter(Product.id == product_id).first() is None

    def test_delete_product_used_in_sale_is_blocked(
        self, client, employee_headers, product, customer, employee_user, db
    ):
        sale = Sale(
            customer_id=customer.id,
            user_id=employee_user.id,
            total_amount=Decimal("12.50"),
            payment_method="cash",
        )
        db.add(sale)
        db.flush()
        db.add(SaleItem(
            sale_id=sale.id,
            product_id=product.id,
            quantity=1,
            unit_price=Decimal("12.50"),
            total_price=Decimal("12.50"),
        ))
        db.commit()

        response = client.delete(f"/api/v1/products/{product.id}", headers=employee_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Não é possível excluir produto que já foi utilizado em vendas"

    def test_delete_missing_product(self, client, employee_headers):
        response = client.delete("/api/v1/products/nao-existe", headers=employee_headers)

        assert response.status_code == 404


class TestProductChangesInSales:
    """A listagem de vendas mostra o nome atual do produto."""

    def test_renamed_product_appears_in_sales_list(self, client, employee_headers, product, customer):
        client.post(
            "/api/v1/sales",
            json={"customer_id": customer.id, "items": [{"product_id": product.id, "quantity": 1}]},
            headers=employee_headers,
        )
        before = client.get("/api/v1/sales", headers=employee_headers).json()
        assert before[0]["items"][0]["product_name"] == "Morango 500g"

        client.put(f"/api/v1/products/{product.id}", json={"name": "Morango 1kg"}, headers=employee_headers)

        after = client.get("/api/v1/sales", headers=employee_headers).json()
        assert after[0]["items"][0]["product_name"] == "Morango 1kg"
