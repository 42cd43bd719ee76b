"""
HTTP tests for /ventas.

Verifies status codes, response shapes and that failed requests have no
side effects.
"""

import pytest


class TestRegisterSaleRoute:

    def test_register_sale(self, client, product_id, stock_of, sale_count):
        pid = product_id("Paracetamol")

        resp = client.post("/ventas", json={"producto_id": pid, "cantidad": 10})

        assert resp.status_code == 200
        assert resp.json["mensaje"] == "Venta registrada: 10 unidad(es) de Paracetamol"
        assert resp.json["venta"]["cantidad"] == 10
        assert resp.json["venta"]["producto_id"] == pid
        assert stock_of(pid) == 90
        assert sale_count(pid) == 1

    @pytest.mark.parametrize(
        "body",
        [
            {"producto_id": 1, "cantidad": 0},
            {"producto_id": 1, "cantidad": -5},
            {"cantidad": 3},
            {"producto_id": 1},
            {"producto_id": 1, "cantidad": "tres"},
            {},
        ],
    )
    def test_invalid_input(self, client, stock_of, sale_count, product_id, body):
        resp = client.post("/ventas", json=body)

        assert resp.status_code == 400
        assert resp.json == {"error": "Datos de venta inválidos"}
        assert sale_count() == 0
        assert stock_of(product_id("Paracetamol")) == 100

    def test_non_json_body(self, client, sale_count):
        resp = client.post("/ventas", data="producto_id=1&cantidad=2")

        assert resp.status_code == 400
        assert sale_count() == 0

    def test_json_array_body(self, client, sale_count):
        resp = client.post("/ventas", json=[1, 2])

        assert resp.status_code == 400
        assert sale_count() == 0

    def test_unknown_product(self, client, sale_count):
        resp = client.post("/ventas", json={"producto_id": 999, "cantidad": 1})

        assert resp.status_code == 404
        assert resp.json == {"error": "Producto no encontrado"}
        assert sale_count() == 0

    def test_product_id_beyond_integer_range(self, client, sale_count):
        resp = client.post("/ventas", json={"producto_id": 10**20, "cantidad": 1})

        assert resp.status_code == 404
        assert resp.json == {"error": "Producto no encontrado"}
        assert sale_count() == 0

    def test_quantity_beyond_integer_range(self, client, product_id, stock_of, sale_count):
        pid = product_id("Paracetamol")

        resp = client.post("/ventas", json={"producto_id": pid, "cantidad": 10**20})

        assert resp.status_code == 400
        assert "Stock insuficiente de Paracetamol" in resp.json["error"]
        assert stock_of(pid) == 100
        assert sale_count() == 0

    def test_insufficient_stock(self, client, product_id, stock_of, sale_count):
        pid = product_id("Ibuprofeno")

        resp = client.post("/ventas", json={"producto_id": pid, "cantidad": 5})

        assert resp.status_code == 400
        assert "Stock insuficiente de Ibuprofeno" in resp.json["error"]
        assert stock_of(pid) == 1
        assert sale_count(pid) == 0


class TestListSalesRoute:

    def test_empty(self, client):
        resp = client.get("/ventas")

        assert resp.status_code == 200
        assert resp.json == []

    def test_newest_first(self, client, product_id):
        client.post("/ventas", json={"producto_id": product_id("Paracetamol"), "cantidad": 1})
        client.post("/ventas", json={"producto_id": product_id("Amoxicilina"), "cantidad": 3})

        resp = client.get("/ventas")

        assert resp.status_code == 200
        rows = resp.json
        assert [r["nombre"] for r in rows] == ["Amoxicilina", "Paracetamol"]
        assert set(rows[0].keys()) == {"id", "nombre", "cantidad", "fecha"}
        assert rows[0]["cantidad"] == 3


class TestUpdateSaleRoute:

    def _sale(self, client, pid, quantity):
        resp = client.post("/ventas", json={"producto_id": pid, "cantidad": quantity})
        assert resp.status_code == 200
        return resp.json["venta"]["id"]

    def test_decrease(self, client, product_id, stock_of):
        pid = product_id("Paracetamol")
        sale_id = self._sale(client, pid, 10)

        resp = client.put(f"/ventas/{sale_id}", json={"cantidad": 5})

        assert resp.status_code == 200
        assert resp.json["mensaje"] == "Venta actualizada correctamente"
        assert resp.json["venta"]["cantidad"] == 5
        assert stock_of(pid) == 95

    def test_increase_without_stock(self, client, product_id, stock_of):
        pid = product_id("Ibuprofeno")
        sale_id = self._sale(client, pid, 1)

        resp = client.put(f"/ventas/{sale_id}", json={"cantidad": 2})

        assert resp.status_code == 400
        assert "Stock insuficiente para aumentar la cantidad" in resp.json["error"]
        assert stock_of(pid) == 0

    @pytest.mark.parametrize("body", [{}, {"cantidad": 0}, {"cantidad": -2}, {"cantidad": None}])
    def test_invalid_quantity(self, client, product_id, stock_of, body):
        pid = product_id("Paracetamol")
        sale_id = self._sale(client, pid, 10)

        resp = client.put(f"/ventas/{sale_id}", json=body)

        assert resp.status_code == 400
        assert resp.json == {"error": "Cantidad inválida"}
        assert stock_of(pid) == 90

    def test_unknown_sale(self, client):
        resp = client.put("/ventas/777", json={"cantidad": 1})

        assert resp.status_code == 404
        assert resp.json == {"error": "Venta no encontrada"}

    def test_sale_id_beyond_integer_range(self, client):
        resp = client.put(f"/ventas/{10**20}", json={"cantidad": 1})

        assert resp.status_code == 404
        assert resp.json == {"error": "Venta no encontrada"}

    def test_quantity_beyond_integer_range(self, client, product_id, stock_of):
        pid = product_id("Paracetamol")
        sale_id = self._sale(client, pid, 10)

        resp = client.put(f"/ventas/{sale_id}", json={"cantidad": 10**20})

        assert resp.status_code == 400
        assert stock_of(pid) == 90


class TestDeleteSaleRoute:

    def test_delete_restores_stock(self, client, product_id, stock_of, sale_count):
        pid = product_id("Paracetamol")
        sale_id = client.post(
            "/ventas", json={"producto_id": pid, "cantidad": 10}
        ).json["venta"]["id"]

        resp = client.delete(f"/ventas/{sale_id}")

        assert resp.status_code == 200
        assert resp.json == {"mensaje": "Venta eliminada correctamente y stock actualizado"}
        assert stock_of(pid) == 100
        assert sale_count(pid) == 0

    def test_unknown_sale(self, client):
        resp = client.delete("/ventas/555")

        assert resp.status_code == 404
        assert resp.json == {"error": "Venta no encontrada"}

    def test_sale_id_beyond_integer_range(self, client):
        resp = client.delete("/ventas/100000000000000000000")

        assert resp.status_code == 404
        assert resp.json == {"error": "Venta no encontrada"}

    def test_product_removed_after_sale(self, client, product_id, sale_count):
        pid = product_id("Crema Antiséptica")
        sale_id = client.post(
            "/ventas", json={"producto_id": pid, "cantidad": 2}
        ).json["venta"]["id"]
        assert client.delete(f"/productos/{pid}").status_code == 200

        resp = client.delete(f"/ventas/{sale_id}")

        assert resp.status_code == 404
        assert resp.json == {"error": "Producto no encontrado"}
        assert sale_count(pid) == 1
        assert client.get("/ventas").json == []
