import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.invoice_line_item import InvoiceLineItem


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def create_customer(client: TestClient, name: str = "Acme Traders") -> str:
    resp = client.post("/api/customers", json={"name": name, "email": "billing@acme.com"})
    assert resp.status_code == 201
    return resp.json()["id"]


def create_tax(client: TestClient, name: str, percentage: str) -> str:
    resp = client.post("/api/taxes", json={"name": name, "percentage": percentage})
    assert resp.status_code == 201
    return resp.json()["id"]


def create_item(client: TestClient, name: str, unit_price: str, tax_ids=None) -> str:
    resp = client.post("/api/items", json={"name": name, "unit_price": unit_price, "tax_ids": tax_ids or []})
    assert resp.status_code == 201
    return resp.json()["id"]


def invoice_payload(customer_id: str, item_id: str, number: str = "INV-001", **overrides) -> dict:
    payload = {
        "invoice_number": number,
        "customer_id": customer_id,
        "issue_date": "2026-01-15",
        "due_date": "2026-02-14",
        "line_items": [{"item_id": item_id, "quantity": 2, "unit_price": "100"}],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def widget_setup():
    client = TestClient(app)
    customer_id = create_customer(client)
    gst_id = create_tax(client, "GST", "18")
    widget_id = create_item(client, "Widget", "100", [gst_id])
    return client, customer_id, widget_id


def count_line_items(invoice_id: str) -> int:
    db = SessionLocal()
    try:
        return db.query(InvoiceLineItem).filter(InvoiceLineItem.invoice_id == invoice_id).count()
    finally:
        db.close()


def test_create_invoice_computes_totals_server_side(widget_setup):
    client, customer_id, widget_id = widget_setup
    payload = invoice_payload(customer_id, widget_id, subtotal="1", total_tax="1", total="1")
    payload["line_items"][0]["total"] = "1"

    resp = client.post("/api/invoices", json=payload)
    assert resp.status_code == 201
    data = resp.json()
    assert data["invoice_number"] == "INV-001"
    assert data["status"] == "pending"
    assert data["subtotal"] == "200.00"
    assert data["total_tax"] == "36.00"
    assert data["discount"] == "0.00"
    assert data["total"] == "236.00"
    assert data["issue_date"] == "2026-01-15"
    assert data["customer"]["name"] == "Acme Traders"
    assert len(data["line_items"]) == 1
    line = data["line_items"][0]
    assert line["item_id"] == widget_id
    assert line["item_name"] == "Widget"
    assert line["quantity"] == 2
    assert line["unit_price"] == "100.00"
    assert line["total"] == "200.00"


def test_create_invoice_accepts_camel_case_payload(widget_setup):
    client, customer_id, widget_id = widget_setup
    resp = client.post(
        "/api/invoices",
        json={
            "invoiceNumber": "INV-002",
            "customerId": customer_id,
            "issueDate": "2026-01-15",
            "dueDate": None,
            "discount": "36",
            "lineItems": [{"itemId": widget_id, "quantity": "2", "unitPrice": "100", "total": "200"}],
        },
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["discount"] == "36.00"
    assert data["total"] == "200.00"
    assert data["due_date"] is None


def test_discount_above_total_clamps_to_zero(widget_setup):
    client, customer_id, widget_id = widget_setup
    resp = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, discount="500"))
    assert resp.status_code == 201
    assert resp.json()["total"] == "0.00"


def test_negative_discount_is_stored_as_zero(widget_setup):
    client, customer_id, widget_id = widget_setup
    resp = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, discount="-20"))
    assert resp.status_code == 201
    assert resp.json()["discount"] == "0.00"
    assert resp.json()["total"] == "236.00"


def test_duplicate_invoice_number_conflicts(widget_setup):
    client, customer_id, widget_id = widget_setup
    first = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, number="INV-100"))
    assert first.status_code == 201

    second = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, number="INV-100"))
    assert second.status_code == 409
    assert second.json()["detail"] == "Invoice number already exists"
    assert len(client.get("/api/invoices").json()) == 1


def test_create_invoice_unknown_customer_returns_404(widget_setup):
    client, _, widget_id = widget_setup
    resp = client.post("/api/invoices", json=invoice_payload("missing", widget_id))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Customer not found"


def test_create_invoice_unknown_item_returns_404(widget_setup):
    client, customer_id, _ = widget_setup
    resp = client.post("/api/invoices", json=invoice_payload(customer_id, "missing"))
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Item not found"
    assert client.get("/api/invoices").json() == []


@pytest.mark.parametrize(
    "line",
    [
        {"quantity": 0, "unit_price": "100"},
        {"quantity": -3, "unit_price": "100"},
        {"quantity": 1.5, "unit_price": "100"},
        {"quantity": 1, "unit_price": "-1"},
    ],
)
def test_invalid_line_items_rejected(widget_setup, line):
    client, customer_id, widget_id = widget_setup
    payload = invoice_payload(customer_id, widget_id)
    payload["line_items"] = [{"item_id": widget_id, **line}]
    resp = client.post("/api/invoices", json=payload)
    assert resp.status_code == 422


def test_invalid_status_rejected(widget_setup):
    client, customer_id, widget_id = widget_setup
    resp = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, status="draft"))
    assert resp.status_code == 422


def test_invoice_requires_line_items(widget_setup):
    client, customer_id, widget_id = widget_setup
    resp = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, line_items=[]))
    assert resp.status_code == 422


def test_update_replaces_line_items_wholesale(widget_setup):
    client, customer_id, widget_id = widget_setup
    gadget_id = create_item(client, "Gadget", "40")
    payload = invoice_payload(customer_id, widget_id)
    payload["line_items"].append({"item_id": gadget_id, "quantity": 1, "unit_price": "40"})
    invoice = client.post("/api/invoices", json=payload).json()
    assert count_line_items(invoice["id"]) == 2
    assert invoice["total"] == "276.00"

    resp = client.put(
        f"/api/invoices/{invoice['id']}",
        json={"line_items": [{"item_id": gadget_id, "quantity": 3, "unit_price": "40"}]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert [line["item_name"] for line in data["line_items"]] == ["Gadget"]
    assert data["subtotal"] == "120.00"
    assert data["total_tax"] == "0.00"
    assert data["total"] == "120.00"
    assert count_line_items(invoice["id"]) == 1


def test_line_items_keep_insertion_order(widget_setup):
    client, customer_id, widget_id = widget_setup
    names = ["Zeta", "Alpha", "Mu"]
    item_ids = [create_item(client, name, "1") for name in names]
    payload = invoice_payload(customer_id, widget_id)
    payload["line_items"] = [{"item_id": item_id, "quantity": 1, "unit_price": "1"} for item_id in item_ids]
    invoice = client.post("/api/invoices", json=payload).json()

    fetched = client.get(f"/api/invoices/{invoice['id']}").json()
    assert [line["item_name"] for line in fetched["line_items"]] == names


def test_update_discount_only_keeps_lines(widget_setup):
    client, customer_id, widget_id = widget_setup
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    resp = client.put(f"/api/invoices/{invoice['id']}", json={"discount": "36"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["discount"] == "36.00"
    assert data["total"] == "200.00"
    assert len(data["line_items"]) == 1
    assert count_line_items(invoice["id"]) == 1


def test_update_status_and_due_date(widget_setup):
    client, customer_id, widget_id = widget_setup
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    resp = client.put(f"/api/invoices/{invoice['id']}", json={"status": "paid", "due_date": None})
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "paid"
    assert data["due_date"] is None
    assert data["total"] == "236.00"


def test_failed_update_leaves_invoice_unchanged(widget_setup):
    client, customer_id, widget_id = widget_setup
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    resp = client.put(
        f"/api/invoices/{invoice['id']}",
        json={"status": "paid", "line_items": [{"item_id": "missing", "quantity": 1, "unit_price": "5"}]},
    )
    assert resp.status_code == 404

    fetched = client.get(f"/api/invoices/{invoice['id']}").json()
    assert fetched["status"] == "pending"
    assert fetched["total"] == "236.00"
    assert [line["item_id"] for line in fetched["line_items"]] == [widget_id]


def test_update_to_existing_invoice_number_conflicts(widget_setup):
    client, customer_id, widget_id = widget_setup
    client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, number="INV-1"))
    second = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, number="INV-2")).json()

    resp = client.put(f"/api/invoices/{second['id']}", json={"invoice_number": "INV-1"})
    assert resp.status_code == 409


def test_item_price_change_does_not_touch_history(widget_setup):
    client, customer_id, widget_id = widget_setup
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    resp = client.put(f"/api/items/{widget_id}", json={"unit_price": "150"})
    assert resp.status_code == 200

    fetched = client.get(f"/api/invoices/{invoice['id']}").json()
    assert fetched["line_items"][0]["unit_price"] == "100.00"
    assert fetched["line_items"][0]["total"] == "200.00"
    assert fetched["total"] == "236.00"


def test_deleting_item_keeps_line_item_snapshot(widget_setup):
    client, customer_id, widget_id = widget_setup
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    resp = client.delete(f"/api/items/{widget_id}")
    assert resp.status_code == 204

    fetched = client.get(f"/api/invoices/{invoice['id']}").json()
    line = fetched["line_items"][0]
    assert line["item_id"] is None
    assert line["item_name"] == "Widget"
    assert line["unit_price"] == "100.00"
    assert line["total"] == "200.00"
    assert fetched["subtotal"] == "200.00"
    assert fetched["total"] == "236.00"


def test_delete_invoice_cascades_line_items(widget_setup):
    client, customer_id, widget_id = widget_setup
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    resp = client.delete(f"/api/invoices/{invoice['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/invoices/{invoice['id']}").status_code == 404
    assert count_line_items(invoice["id"]) == 0


def test_list_invoices_filters_by_status(widget_setup):
    client, customer_id, widget_id = widget_setup
    client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, number="A"))
    client.post("/api/invoices", json=invoice_payload(customer_id, widget_id, number="B", status="paid"))

    all_invoices = client.get("/api/invoices").json()
    assert {inv["invoice_number"] for inv in all_invoices} == {"A", "B"}
    paid = client.get("/api/invoices", params={"status": "paid"}).json()
    assert [inv["invoice_number"] for inv in paid] == ["B"]
    assert client.get("/api/invoices", params={"status": "draft"}).status_code == 422


def test_get_missing_invoice_returns_404():
    client = TestClient(app)
    assert client.get("/api/invoices/does-not-exist").status_code == 404
    assert client.put("/api/invoices/does-not-exist", json={"status": "paid"}).status_code == 404
    assert client.delete("/api/invoices/does-not-exist").status_code == 404


def test_commit_failure_after_line_replace_keeps_old_lines(widget_setup, monkeypatch):
    client, customer_id, widget_id = widget_setup
    bolt_id = create_item(client, "Bolt", "2")
    invoice = client.post("/api/invoices", json=invoice_payload(customer_id, widget_id)).json()

    def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "commit", failing_commit)
    resp = client.put(
        f"/api/invoices/{invoice['id']}",
        json={"discount": "5", "line_items": [{"item_id": bolt_id, "quantity": 3, "unit_price": "2"}]},
    )
    monkeypatch.undo()

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Storage failure"}
    fetched = client.get(f"/api/invoices/{invoice['id']}").json()
    assert [(line["item_id"], line["quantity"]) for line in fetched["line_items"]] == [(widget_id, 2)]
    assert fetched["subtotal"] == "200.00"
    assert fetched["total_tax"] == "36.00"
    assert fetched["discount"] == "0.00"
    assert fetched["total"] == "236.00"
    assert count_line_items(invoice["id"]) == 1
