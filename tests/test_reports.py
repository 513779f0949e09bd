import pytest

from app.modules.reports.service import month_label
from tests.helpers import (
    API, MARIA, CARLOS, AIRPODS, IPHONE, MACBOOK,
    sale_payload, item, create_sale, create_customer
)

REPORTS = f"{API}/reports"


@pytest.fixture
def sales_client(client):
    """
    Maria: X (2 ventas) e Y (1 venta); Carlos: X (1 venta)
    """
    x = create_customer(client, name="Xavier", email="x@example.com")
    y = create_customer(client, name="Yara", email="y@example.com")

    create_sale(client, sale_payload(items=[item(AIRPODS, 1, 1899)], customer_id=x["id"], seller_id=MARIA))
    create_sale(client, sale_payload(items=[item(IPHONE, 1, 8999)], customer_id=x["id"], seller_id=MARIA))
    create_sale(client, sale_payload(items=[item(AIRPODS, 1, 1899)], customer_id=y["id"], seller_id=MARIA))
    create_sale(client, sale_payload(items=[item(MACBOOK, 1, 14999)], customer_id=x["id"], seller_id=CARLOS))
    return client


def test_month_label():
    assert month_label(2024, 1) == "Janeiro 2024"
    assert month_label(2023, 3) == "Março 2023"
    assert month_label(2025, 12) == "Dezembro 2025"


def test_reports_without_sales_are_empty(client):
    assert client.get(f"{REPORTS}/sellers").json() == []
    assert client.get(f"{REPORTS}/customers").json() == []
    assert client.get(f"{REPORTS}/sales-by-month").json() == []
    assert client.get(f"{REPORTS}/relationships").json() == {"seller_customer": [], "top_relationships": []}

    products = client.get(f"{REPORTS}/products").json()
    assert len(products) == 5
    assert all(p["quantity_sold"] == 0 and p["total_value"] == 0 for p in products)


def test_reports_on_empty_tables(empty_client):
    for name in ("sellers", "products", "customers", "sales-by-month"):
        response = empty_client.get(f"{REPORTS}/{name}")
        assert response.status_code == 200
        assert response.json() == []


def test_sellers_report(sales_client):
    rows = sales_client.get(f"{REPORTS}/sellers").json()

    assert [r["seller_id"] for r in rows] == [CARLOS, MARIA]
    carlos, maria = rows
    assert carlos["total_sales"] == 1
    assert carlos["total_value"] == 14999
    assert carlos["commission"] == pytest.approx(1499.9)
    assert maria["seller_name"] == "Maria Oliveira"
    assert maria["total_sales"] == 3
    assert maria["total_value"] == 12797
    assert maria["average_ticket"] == pytest.approx(12797 / 3)
    assert maria["commission"] == pytest.approx(1279.7)


def test_commission_rate_is_configurable(make_client):
    client = make_client(seller_commission_rate=0.05)
    create_sale(client, sale_payload(items=[item(MACBOOK, 1, 14999)], customer={"name": "X"}))

    rows = client.get(f"{REPORTS}/sellers").json()
    assert rows[0]["commission"] == pytest.approx(749.95)


def test_products_report(sales_client):
    rows = sales_client.get(f"{REPORTS}/products").json()

    assert [r["id"] for r in rows[:3]] == [AIRPODS, MACBOOK, IPHONE]
    airpods = rows[0]
    assert airpods["name"] == "AirPods Pro"
    assert airpods["category"] == "acessorios"
    assert airpods["quantity_sold"] == 2
    assert airpods["total_value"] == 3798
    assert airpods["current_stock"] == 28
    assert {r["quantity_sold"] for r in rows[3:]} == {0}


def test_customers_report(sales_client):
    rows = sales_client.get(f"{REPORTS}/customers").json()

    assert [r["name"] for r in rows] == ["Xavier", "Yara"]
    assert rows[0]["total_purchases"] == 3
    assert rows[0]["total_value"] == 1899 + 8999 + 14999
    assert rows[0]["last_purchase"] is not None
    assert rows[1]["total_purchases"] == 1


def test_customers_report_respects_limit(make_client):
    client = make_client(customer_report_limit=1)
    create_customer(client, name="A")
    create_customer(client, name="B")

    assert len(client.get(f"{REPORTS}/customers").json()) == 1


def test_relationships_report(sales_client):
    body = sales_client.get(f"{REPORTS}/relationships").json()

    per_seller = body["seller_customer"]
    assert [r["seller_name"] for r in per_seller] == ["Maria Oliveira", "Carlos Pereira"]
    assert per_seller[0]["total_customers"] == 2
    assert per_seller[0]["recurring_customers"] == 1
    assert per_seller[0]["average_ticket"] == pytest.approx(4265.67)
    assert per_seller[1]["total_customers"] == 1
    assert per_seller[1]["recurring_customers"] == 0

    top = body["top_relationships"]
    assert [(r["seller_name"], r["customer_name"]) for r in top] == [
        ("Carlos Pereira", "Xavier"),
        ("Maria Oliveira", "Xavier"),
        ("Maria Oliveira", "Yara"),
    ]
    assert top[1]["total_interactions"] == 2
    assert top[1]["total_value"] == 1899 + 8999


def test_sales_by_month_report(sales_client):
    rows = sales_client.get(f"{REPORTS}/sales-by-month").json()

    assert [r["seller_name"] for r in rows] == ["Carlos Pereira", "Maria Oliveira"]
    assert rows[1]["total_sales"] == 3
    assert rows[1]["total_value"] == 12797
    for row in rows:
        assert 1 <= row["month"] <= 12
        assert row["month_label"] == month_label(row["year"], row["month"])
