"""
HTTP surface: status codes, the {error, details} body and the full flows.
"""
from uuid import uuid4

import pytest
from sqlalchemy.exc import DBAPIError, OperationalError

from stockflow.services import TransferService


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_token_required(client):
    response = client.get("/api/products")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

    response = client.get("/api/products", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_not_found_body(client, auth_headers):
    response = client.get(f"/api/receipts/{uuid4()}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Receipt not found"}


def test_malformed_request_is_400(client, auth_headers, main_warehouse):
    response = client.post(
        "/api/receipts",
        json={"supplier_name": "Acme", "warehouse_id": str(main_warehouse.id), "items": []},
        headers=auth_headers,
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request data"
    assert any(d.startswith("items") for d in body["details"])

    response = client.put("/api/receipts/not-a-uuid/validate", headers=auth_headers)
    assert response.status_code == 400


def test_product_crud_with_ledgered_stock(client, auth_headers, main_warehouse, category):
    response = client.post("/api/products", json={
        "name": "Office Chair",
        "sku": "chair-01",
        "category_id": str(category.id),
        "warehouse_id": str(main_warehouse.id),
        "unit_of_measure": "pcs",
        "stock": 4,
        "min_stock_level": 5,
    }, headers=auth_headers)
    assert response.status_code == 201
    product = response.json()
    assert product["sku"] == "CHAIR-01"
    assert product["stock_status"] == "low"
    assert product["warehouse"]["name"] == "Main Warehouse"

    response = client.patch(f"/api/products/{product['id']}", json={"stock": 9}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["stock"] == 9
    assert response.json()["stock_status"] == "ok"

    movements = client.get(
        "/api/stock/movements", params={"product_id": product["id"]}, headers=auth_headers
    ).json()
    assert sorted(m["quantity"] for m in movements) == [4, 5]
    assert {m["type"] for m in movements} == {"ADJUSTMENT"}

    response = client.delete(f"/api/products/{product['id']}", headers=auth_headers)
    assert response.status_code == 409
    assert "cannot be deleted" in response.json()["error"]


def test_receipt_flow(client, auth_headers, main_warehouse, make_product):
    product_id = str(make_product(main_warehouse, sku="P1", stock=10).id)

    response = client.post("/api/receipts", json={
        "supplier_name": "Acme Supplies",
        "warehouse_id": str(main_warehouse.id),
        "items": [{"product_id": product_id, "quantity": 5}],
    }, headers=auth_headers)
    assert response.status_code == 201
    receipt = response.json()
    assert receipt["status"] == "DRAFT"

    first = client.put(f"/api/receipts/{receipt['id']}/validate", headers=auth_headers)
    assert first.json()["status"] == "READY"
    second = client.put(f"/api/receipts/{receipt['id']}/validate", headers=auth_headers)
    assert second.json()["status"] == "DONE"

    again = client.put(f"/api/receipts/{receipt['id']}/validate", headers=auth_headers)
    assert again.status_code == 409
    assert "already DONE" in again.json()["error"]

    assert client.get(f"/api/products/{product_id}", headers=auth_headers).json()["stock"] == 15
    movements = client.get(
        "/api/stock/movements", params={"reference_id": receipt["id"]}, headers=auth_headers
    ).json()
    assert [(m["type"], m["quantity"]) for m in movements] == [("RECEIPT", 5)]

    listing = client.get("/api/receipts", params={"status": "DONE", "limit": 10}, headers=auth_headers).json()
    assert listing["pagination"] == {"total": 1, "page": 1, "limit": 10, "total_pages": 1}


def test_delivery_shortage_is_400_with_details(client, auth_headers, main_warehouse, make_product):
    product_id = str(make_product(main_warehouse, sku="P1", stock=15).id)
    delivery = client.post("/api/deliveries", json={
        "warehouse_id": str(main_warehouse.id),
        "customer_name": "Jane Customer",
        "items": [{"product_id": product_id, "quantity": 20}],
    }, headers=auth_headers).json()
    assert delivery["operation_type"] == "DECREMENT"

    response = client.put(f"/api/deliveries/{delivery['id']}/validate", headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {
        "error": "Insufficient stock for delivery validation",
        "details": ["Insufficient stock for P1: Available 15, Requested 20"],
    }
    assert client.get(f"/api/products/{product_id}", headers=auth_headers).json()["stock"] == 15


def test_delivery_patch_to_done(client, auth_headers, main_warehouse, make_product):
    product_id = str(make_product(main_warehouse, sku="P1", stock=15).id)
    delivery = client.post("/api/deliveries", json={
        "warehouse_id": str(main_warehouse.id),
        "items": [{"product_id": product_id, "quantity": 5}],
    }, headers=auth_headers).json()

    response = client.patch(f"/api/deliveries/{delivery['id']}", json={"status": "DONE"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "DONE"
    assert client.get(f"/api/products/{product_id}", headers=auth_headers).json()["stock"] == 10

    response = client.delete(f"/api/deliveries/{delivery['id']}", headers=auth_headers)
    assert response.status_code == 409


def test_transfer_flow(client, auth_headers, main_warehouse, west_warehouse, make_product):
    product_id = str(make_product(main_warehouse, sku="X", stock=10).id)

    response = client.post("/api/transfers", json={
        "from_warehouse_id": str(main_warehouse.id),
        "to_warehouse_id": str(west_warehouse.id),
        "items": [{"product_id": product_id, "quantity": 4}],
    }, headers=auth_headers)
    assert response.status_code == 201
    transfer = response.json()
    assert (transfer["items_count"], transfer["total_quantity"]) == (1, 4)
    assert transfer["to_warehouse"]["name"] == "West Coast Hub"

    done = client.put(f"/api/transfers/{transfer['id']}/complete", headers=auth_headers)
    assert done.status_code == 200
    assert done.json()["status"] == "COMPLETED"

    again = client.put(f"/api/transfers/{transfer['id']}/complete", headers=auth_headers)
    assert again.status_code == 409

    stock = client.get("/api/stock", params={"search": "X"}, headers=auth_headers).json()
    by_warehouse = {r["warehouse_name"]: r["stock"] for r in stock}
    assert by_warehouse == {"Main Warehouse": 6, "West Coast Hub": 4}

    movements = client.get(
        "/api/stock/movements", params={"reference_id": transfer["id"], "type": "TRANSFER"}, headers=auth_headers
    ).json()
    assert sorted(m["quantity"] for m in movements) == [-4, 4]


def test_transfer_validation_errors(client, auth_headers, main_warehouse, west_warehouse, make_product):
    product_id = str(make_product(main_warehouse, sku="X", stock=1).id)

    same = client.post("/api/transfers", json={
        "from_warehouse_id": str(main_warehouse.id),
        "to_warehouse_id": str(main_warehouse.id),
        "items": [{"product_id": product_id, "quantity": 1}],
    }, headers=auth_headers)
    assert same.status_code == 400
    assert any("must be different" in d for d in same.json()["details"])

    short = client.post("/api/transfers", json={
        "from_warehouse_id": str(main_warehouse.id),
        "to_warehouse_id": str(west_warehouse.id),
        "items": [{"product_id": product_id, "quantity": 3}],
    }, headers=auth_headers)
    assert short.status_code == 400
    assert short.json() == {
        "error": "Stock validation failed",
        "details": ["Insufficient stock for X: Available 1, Requested 3"],
    }


def test_dashboard(client, auth_headers, main_warehouse, west_warehouse, make_product):
    out = make_product(main_warehouse, sku="OUT-1", stock=0)
    make_product(main_warehouse, sku="LOW-1", stock=3, min_stock_level=5)
    ok = make_product(west_warehouse, sku="OK-1", stock=50, min_stock_level=5)
    out_id, ok_id = str(out.id), str(ok.id)

    client.post("/api/receipts", json={
        "supplier_name": "Acme Supplies",
        "warehouse_id": str(main_warehouse.id),
        "items": [{"product_id": out_id, "quantity": 1}],
    }, headers=auth_headers)
    client.post("/api/deliveries", json={
        "warehouse_id": str(west_warehouse.id),
        "items": [{"product_id": ok_id, "quantity": 1}],
    }, headers=auth_headers)

    kpis = client.get("/api/dashboard/kpis", headers=auth_headers).json()
    assert kpis == {
        "total_products": 3,
        "low_stock_items": 1,
        "out_of_stock_items": 1,
        "pending_receipts": 1,
        "pending_deliveries": 1,
        "internal_transfers": 0,
    }

    main_only = client.get(
        "/api/dashboard/kpis", params={"warehouse_id": str(main_warehouse.id)}, headers=auth_headers
    ).json()
    assert (main_only["total_products"], main_only["pending_deliveries"]) == (2, 0)

    filters = client.get("/api/dashboard/filters", headers=auth_headers).json()
    assert [w["name"] for w in filters["warehouses"]] == ["Main Warehouse", "West Coast Hub"]
    assert filters["receipt_statuses"] == ["DRAFT", "READY", "DONE", "CANCELED"]


def test_stock_status_filter(client, auth_headers, main_warehouse, make_product):
    make_product(main_warehouse, sku="OUT-1", stock=0)
    make_product(main_warehouse, sku="OK-1", stock=9)

    out = client.get("/api/stock", params={"status": "out"}, headers=auth_headers).json()
    assert [r["sku"] for r in out] == ["OUT-1"]

    bad = client.get("/api/stock", params={"status": "empty"}, headers=auth_headers)
    assert bad.status_code == 400


def test_master_data_writes_are_admin_only(client, auth_headers, admin_headers):
    payload = {"name": "East Coast Facility", "location": "Boston, MA"}

    response = client.post("/api/warehouses", json=payload, headers=auth_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}

    response = client.post("/api/warehouses", json=payload, headers=admin_headers)
    assert response.status_code == 201
    warehouse_id = response.json()["id"]

    response = client.post("/api/locations", json={
        "name": "Rack A", "short_code": "A1", "warehouse_id": warehouse_id
    }, headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["warehouse"]["name"] == "East Coast Facility"

    response = client.post("/api/categories", json={"name": "Clothing"}, headers=admin_headers)
    assert response.status_code == 201

    listing = client.get("/api/warehouses", headers=auth_headers).json()
    assert [w["name"] for w in listing] == ["East Coast Facility"]


@pytest.mark.parametrize("error, status_code, message", [
    (OperationalError("SELECT products", {}, Exception("lock timeout")), 503,
     "Transaction timed out or could not acquire locks"),
    (DBAPIError("INSERT INTO products", {}, Exception("disk full")), 500,
     "Transaction could not be committed"),
])
def test_transaction_failures_are_rendered(
    client, auth_headers, main_warehouse, west_warehouse, make_product, monkeypatch, error, status_code, message
):
    product_id = str(make_product(main_warehouse, sku="X", stock=10).id)
    transfer = client.post("/api/transfers", json={
        "from_warehouse_id": str(main_warehouse.id),
        "to_warehouse_id": str(west_warehouse.id),
        "items": [{"product_id": product_id, "quantity": 4}],
    }, headers=auth_headers).json()

    def broken(session, source, to_warehouse_id):
        raise error

    monkeypatch.setattr(TransferService, "_destination_product", staticmethod(broken))

    response = client.put(f"/api/transfers/{transfer['id']}/complete", headers=auth_headers)
    assert response.status_code == status_code
    assert response.json() == {"error": message}

    assert client.get(f"/api/products/{product_id}", headers=auth_headers).json()["stock"] == 10
    assert client.get(f"/api/transfers/{transfer['id']}", headers=auth_headers).json()["status"] == "DRAFT"
