"""Tests for scanning labels into sales, the dashboard and the mirror hand-off."""

import json

from fastapi.testclient import TestClient

from main import create_app


def _scan(client, item_id):
    return client.post("/scan/", json={"decodedText": json.dumps({"id": item_id, "name": "x"})})


class TestScan:
    def test_last_unit_then_out_of_stock(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nB1,Bear,1,9.99\n")

        first = _scan(client, "B1").json()
        assert first["outcome"] == "recorded"
        assert first["itemId"] == "B1"
        assert first["sale"]["itemId"] == "B1"
        assert first["sale"]["name"] == "Bear"
        assert first["sale"]["price"] == 9.99
        assert first["sale"]["saleId"] >= 1
        assert first["sale"]["timestamp"].endswith("Z")
        assert client.get("/inventory/items/B1").json()["quantity"] == 0

        second = _scan(client, "B1").json()
        assert second["outcome"] == "out_of_stock"
        assert second["sale"] is None
        assert len(client.get("/sales/").json()) == 1

    def test_scan_by_item_id(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nB1,Bear,2,9.99\n")

        body = client.post("/scan/", json={"itemId": "B1"}).json()
        assert body["outcome"] == "recorded"
        assert client.get("/inventory/items/B1").json()["quantity"] == 1

    def test_unknown_id_is_ignored(self, client):
        body = _scan(client, "nope").json()
        assert body["outcome"] == "not_found"
        assert client.get("/sales/").json() == []

    def test_unreadable_label(self, client):
        response = client.post("/scan/", json={"decodedText": "not a label"})
        assert response.status_code == 200
        assert response.json()["outcome"] == "invalid"

    def test_empty_scan_request(self, client):
        assert client.post("/scan/", json={}).status_code == 400


class TestDashboard:
    def test_stock_only(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,2,1\nB,Fox,1,1\nC,Owl,2,1\n")

        stats = client.get("/dashboard/stats").json()
        assert stats["totalSold"] == 0
        assert stats["totalInStock"] == 5
        assert stats["totalItems"] == 5
        assert stats["totalRevenue"] == 0
        assert stats["byProduct"]["Owl"] == {"sold": 0, "inStock": 2, "revenue": 0.0}

    def test_after_sales(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,2,9.99\nB,Fox,1,4.5\n")
        _scan(client, "A")
        _scan(client, "B")

        stats = client.get("/dashboard/stats").json()
        assert stats["totalSold"] == 2
        assert stats["totalInStock"] == 1
        assert stats["totalItems"] == stats["totalInStock"] + stats["totalSold"]
        assert stats["totalRevenue"] == 14.49
        assert stats["byProduct"]["Bear"] == {"sold": 1, "inStock": 1, "revenue": 9.99}

    def test_clear_sales_twice(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,2,9.99\n")
        _scan(client, "A")

        body = client.post("/dashboard/clear-sales").json()
        assert body == {"ok": True, "message": "Sales data cleared."}
        assert client.get("/sales/").json() == []
        client.post("/dashboard/clear-sales")
        assert client.get("/sales/").json() == []
        # inventory is untouched
        assert client.get("/inventory/items/A").json()["quantity"] == 1


class TestMirrorHandOff:
    def test_recorded_sale_reaches_mirror(self, settings):
        with TestClient(create_app(settings=settings)) as client:
            client.post(
                "/inventory/upload",
                files={"file": ("stock.csv", b"id,name,quantity,price\nB1,Bear,3,9.99\n", "text/csv")},
            )
            _scan(client, "B1")
            _scan(client, "nope")
        # leaving the client runs shutdown, which drains the mirror queue

        with open(settings.sales_mirror_path, encoding="utf-8") as f:
            mirrored = json.load(f)
        assert len(mirrored) == 1
        assert mirrored[0]["itemId"] == "B1"
        assert mirrored[0]["name"] == "Bear"
        assert mirrored[0]["price"] == 9.99
        assert "saleId" not in mirrored[0]

    def test_clear_sales_clears_mirror(self, settings):
        with TestClient(create_app(settings=settings)) as client:
            client.post(
                "/inventory/upload",
                files={"file": ("stock.csv", b"id,name,quantity,price\nB1,Bear,3,9.99\n", "text/csv")},
            )
            _scan(client, "B1")
            client.post("/dashboard/clear-sales")

        with open(settings.sales_mirror_path, encoding="utf-8") as f:
            assert json.load(f) == []
