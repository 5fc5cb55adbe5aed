"""Tests for the /inventory endpoints."""

import io

import pandas as pd
from fastapi.testclient import TestClient

from main import create_app


class TestUpload:
    def test_upload_single_row(self, client, upload_csv):
        response = upload_csv("name,quantity,price\nBear,3,9.99\n")
        assert response.status_code == 200
        assert response.json() == {"uploaded": 1, "message": "Successfully uploaded 1 items."}

        items = client.get("/inventory/items").json()
        assert len(items) == 1
        item = items[0]
        assert item["name"] == "Bear"
        assert item["quantity"] == 3
        assert item["price"] == 9.99
        assert item["category"] == "Uncategorized"
        assert item["cost"] is None
        assert item["id"]

    def test_upload_replaces_previous_inventory(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\nB,Fox,1,2\n")
        upload_csv("id,name,quantity,price\nC,Owl,4,5\n")

        items = client.get("/inventory/items").json()
        assert [i["id"] for i in items] == ["C"]

    def test_upload_excel(self, client):
        df = pd.DataFrame({"ProductName": ["Hare"], "Qty": ["2"], "SellingPrice": ["7.5"], "ProductId": ["H-1"]})
        buf = io.BytesIO()
        df.to_excel(buf, index=False)

        response = client.post(
            "/inventory/upload",
            files={"file": ("stock.xlsx", buf.getvalue(), "application/octet-stream")},
        )
        assert response.status_code == 200

        item = client.get("/inventory/items/H-1").json()
        assert item["name"] == "Hare"
        assert item["quantity"] == 2
        assert item["price"] == 7.5

    def test_unsupported_file_type_keeps_inventory(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\n")

        response = upload_csv("name,quantity,price\nFox,1,1\n", filename="stock.txt")
        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported file type"
        assert [i["id"] for i in client.get("/inventory/items").json()] == ["A"]

    def test_bad_rows_do_not_fail_upload(self, client, upload_csv):
        response = upload_csv("name,quantity,price\nBear,lots,free\n,,\nFox,2,3\n")
        assert response.status_code == 200
        assert response.json()["uploaded"] == 2

        by_name = {i["name"]: i for i in client.get("/inventory/items").json()}
        assert by_name["Bear"]["quantity"] == 1
        assert by_name["Bear"]["price"] == 0.0

    def test_oversized_quantity_does_not_fail_upload(self, client, upload_csv):
        response = upload_csv("id,name,quantity,price\nA,Bear,2,1\nB,Fox,99999999999999999999999,1\n")
        assert response.status_code == 200
        assert response.json()["uploaded"] == 2

        assert client.get("/inventory/items/A").json()["quantity"] == 2
        assert client.get("/inventory/items/B").json()["quantity"] == 1


class TestItems:
    def test_get_missing_item(self, client):
        response = client.get("/inventory/items/nope")
        assert response.status_code == 404

    def test_patch_merges(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\n")

        response = client.patch("/inventory/items/A", json={"quantity": 5, "cost": 1.25})
        assert response.status_code == 200
        body = response.json()
        assert body["quantity"] == 5
        assert body["cost"] == 1.25
        assert body["name"] == "Bear"

    def test_patch_rejects_negative_quantity(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\n")
        response = client.patch("/inventory/items/A", json={"quantity": -1})
        assert response.status_code == 422

    def test_patch_rejects_null_for_required_fields(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\n")

        for field in ("price", "quantity", "name"):
            response = client.patch("/inventory/items/A", json={field: None})
            assert response.status_code == 422, field

        item = client.get("/inventory/items/A").json()
        assert item["name"] == "Bear"
        assert item["quantity"] == 1
        assert item["price"] == 2.0

    def test_patch_null_cost_clears_it(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\n")
        client.patch("/inventory/items/A", json={"cost": 1.5})

        response = client.patch("/inventory/items/A", json={"cost": None})
        assert response.status_code == 200
        assert response.json()["cost"] is None

    def test_patch_missing_item(self, client):
        response = client.patch("/inventory/items/nope", json={"quantity": 1})
        assert response.status_code == 404

    def test_clear_twice(self, client, upload_csv):
        upload_csv("name,quantity,price\nBear,3,9.99\n")

        assert client.post("/inventory/clear").json() == {"ok": True}
        assert client.get("/inventory/items").json() == []
        assert client.post("/inventory/clear").json() == {"ok": True}
        assert client.get("/inventory/items").json() == []


class TestQrLabels:
    def test_qr_sheet(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\nB,Fox,1,3.5\n")

        sheet = client.get("/inventory/qr-sheet").json()
        assert list(sheet) == ["Uncategorized"]
        labels = {label["id"]: label for label in sheet["Uncategorized"]}
        assert labels["A"]["payload"] == '{"id":"A","name":"Bear"}'
        assert labels["B"]["priceLabel"] == "$3.50"

    def test_qr_png(self, client, upload_csv):
        upload_csv("id,name,quantity,price\nA,Bear,1,2\n")

        response = client.get("/inventory/items/A/qr.png")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_qr_png_missing_item(self, client):
        assert client.get("/inventory/items/nope/qr.png").status_code == 404


def test_health(settings):
    with TestClient(create_app(settings=settings)) as client:
        assert client.get("/health").json() == {"status": "ok"}
