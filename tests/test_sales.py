from tests.helpers import (
    API, MARIA, CARLOS, AIRPODS, GALAXY, IPHONE, XIAOMI, PIX, DINHEIRO,
    sale_payload, item, get_stock, create_sale, create_customer
)

ALL_FLAGS = {"supports_flamengo": True, "watches_one_piece": True, "from_sousa": True}


# ==================== REGISTRO DE VENTAS ====================

def test_create_sale_applies_flag_discount_and_decrements_stock(client):
    customer = {"name": "João", "email": "joao@example.com", **ALL_FLAGS}
    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 2, 500)],
        customer=customer
    ))

    details = client.get(f"{API}/sales/{sale_id}/details").json()
    assert details["discount"] == 750
    assert details["total"] == 250
    assert details["customer_name"] == "João"
    assert details["customer_email"] == "joao@example.com"
    assert details["seller_name"] == "Maria Oliveira"
    assert details["payment_method"] == "PIX"
    assert len(details["items"]) == 1
    assert details["items"][0]["subtotal"] == 1000
    assert details["items"][0]["product_name"] == "AirPods Pro"

    assert get_stock(client, AIRPODS) == 28


def test_create_sale_without_flags_has_no_discount(client):
    sale_id = create_sale(client, sale_payload(
        items=[item(IPHONE, 1, 8999), item(GALAXY, 2, 5499)],
        customer={"name": "Pedro"}
    ))

    details = client.get(f"{API}/sales/{sale_id}/details").json()
    assert details["discount"] == 0
    assert details["total"] == 8999 + 2 * 5499
    assert len(details["items"]) == 2
    assert get_stock(client, IPHONE) == 14
    assert get_stock(client, GALAXY) == 21


def test_submitted_consistent_total_and_discount_are_stored(client):
    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 1, 1899, subtotal=1899)],
        customer={"name": "Lucas", **ALL_FLAGS},
        discount=100,
        total=1799
    ))

    details = client.get(f"{API}/sales/{sale_id}/details").json()
    assert details["discount"] == 100
    assert details["total"] == 1799


def test_sale_reuses_customer_with_same_email(client):
    existing = create_customer(client, name="Carla", email="carla@example.com")

    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 1, 1899)],
        customer={"name": "Carla S.", "email": "carla@example.com"}
    ))

    customers = client.get(f"{API}/customers").json()
    assert len(customers) == 1
    assert customers[0]["id"] == existing["id"]
    assert customers[0]["total_purchases"] == 1

    sales = client.get(f"{API}/customers/{existing['id']}/sales").json()
    assert [s["id"] for s in sales] == [sale_id]


def test_sale_with_new_email_or_without_email_creates_customers(client):
    create_customer(client, name="Carla", email="carla@example.com")

    create_sale(client, sale_payload(items=[item(AIRPODS, 1, 1899)],
                                     customer={"name": "Bruno", "email": "bruno@example.com"}))
    create_sale(client, sale_payload(items=[item(AIRPODS, 1, 1899)],
                                     customer={"name": "Sem Email"}))
    create_sale(client, sale_payload(items=[item(AIRPODS, 1, 1899)],
                                     customer={"name": "Sem Email", "email": ""}))

    names = sorted(c["name"] for c in client.get(f"{API}/customers").json())
    assert names == ["Bruno", "Carla", "Sem Email", "Sem Email"]


def test_explicit_customer_id_is_used_and_its_flags_drive_discount(client):
    customer = create_customer(client, name="Fã", email="fa@example.com",
                               supports_flamengo=True, watches_one_piece=False, from_sousa=False)

    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 2, 500)],
        customer_id=customer["id"],
        customer={"name": "ignorado", "email": "outro@example.com"}
    ))

    details = client.get(f"{API}/sales/{sale_id}/details").json()
    assert details["customer_name"] == "Fã"
    assert details["discount"] == 250
    assert details["total"] == 750
    assert len(client.get(f"{API}/customers").json()) == 1


# ==================== ROLLBACK ====================

def test_unknown_product_rolls_back_whole_sale(client):
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 2, 1899), item(999, 1, 10)],
        customer={"name": "Novo", "email": "novo@example.com"}
    ))

    assert response.status_code == 500
    assert response.json()["detail"] == "Error registrando venta"
    assert client.get(f"{API}/sales").json() == []
    assert client.get(f"{API}/customers").json() == []
    assert get_stock(client, AIRPODS) == 30


def test_unknown_seller_rolls_back(client):
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 1, 1899)],
        customer={"name": "Novo"},
        seller_id=999
    ))

    assert response.status_code == 500
    assert client.get(f"{API}/sales").json() == []
    assert client.get(f"{API}/customers").json() == []
    assert get_stock(client, AIRPODS) == 30


def test_unknown_payment_method_fails(client):
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 1, 1899)],
        customer={"name": "Novo"},
        payment_method_id=999
    ))

    assert response.status_code == 500
    assert client.get(f"{API}/sales").json() == []


def test_malformed_sales_are_generic_failures(client):
    # sin items
    response = client.post(f"{API}/sales", json=sale_payload(items=[], customer={"name": "X"}))
    assert response.status_code == 500

    # sin cliente
    response = client.post(f"{API}/sales", json=sale_payload(items=[item(AIRPODS, 1, 1899)]))
    assert response.status_code == 500

    # subtotal distinto de cantidad x precio
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 2, 100, subtotal=150)],
        customer={"name": "X"}
    ))
    assert response.status_code == 500

    # cantidad cero
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 0, 100)],
        customer={"name": "X"}
    ))
    assert response.status_code == 500
    assert "detail" in response.json()

    assert client.get(f"{API}/sales").json() == []
    assert get_stock(client, AIRPODS) == 30


def test_total_must_match_subtotal_minus_discount(client):
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 1, 1899)],
        customer={"name": "X"},
        discount=0,
        total=5
    ))
    assert response.status_code == 500

    # total sin descuento: se compara con el descuento calculado (sin preferencias = 0)
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 1, 1899)],
        customer={"name": "X"},
        total=1000
    ))
    assert response.status_code == 500
    assert response.json()["detail"] == "Error registrando venta"

    assert client.get(f"{API}/sales").json() == []
    assert client.get(f"{API}/customers").json() == []
    assert get_stock(client, AIRPODS) == 30

    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 1, 1899)],
        customer={"name": "X", "supports_flamengo": True},
        total=1424.25
    ))
    details = client.get(f"{API}/sales/{sale_id}/details").json()
    assert details["discount"] == 474.75
    assert details["total"] == 1424.25


def test_discount_above_subtotal_is_rejected(client):
    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 1, 100)],
        customer={"name": "X"},
        discount=500
    ))

    assert response.status_code == 500
    assert client.get(f"{API}/sales").json() == []

    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 1, 100)],
        customer={"name": "X"},
        discount=100
    ))
    assert client.get(f"{API}/sales/{sale_id}/details").json()["total"] == 0


# ==================== INVENTARIO ====================

def test_stock_can_go_negative_by_default(client):
    create_sale(client, sale_payload(items=[item(XIAOMI, 2, 1799)], customer={"name": "X"}))
    assert get_stock(client, XIAOMI) == -2


def test_reject_policy_refuses_sale_beyond_stock(make_client):
    client = make_client(stock_floor_policy="reject")

    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 1, 1899), item(XIAOMI, 1, 1799)],
        customer={"name": "X", "email": "x@example.com"}
    ))

    assert response.status_code == 400
    assert client.get(f"{API}/sales").json() == []
    assert client.get(f"{API}/customers").json() == []
    assert get_stock(client, AIRPODS) == 30
    assert get_stock(client, XIAOMI) == 0

    create_sale(client, sale_payload(items=[item(AIRPODS, 30, 1899)], customer={"name": "Y"}))
    assert get_stock(client, AIRPODS) == 0


def test_clamp_policy_never_goes_below_zero(make_client):
    client = make_client(stock_floor_policy="clamp")

    create_sale(client, sale_payload(items=[item(XIAOMI, 3, 1799)], customer={"name": "X"}))
    create_sale(client, sale_payload(items=[item(AIRPODS, 5, 1899)], customer={"name": "Y"}))

    assert get_stock(client, XIAOMI) == 0
    assert get_stock(client, AIRPODS) == 25


def test_trigger_mode_decrements_stock_exactly_once(make_client):
    client = make_client(stock_decrement_mode="trigger")

    create_sale(client, sale_payload(
        items=[item(AIRPODS, 2, 1899), item(IPHONE, 1, 8999)],
        customer={"name": "X"}
    ))

    assert get_stock(client, AIRPODS) == 28
    assert get_stock(client, IPHONE) == 14


def test_trigger_mode_rolls_back_stock_on_failure(make_client):
    client = make_client(stock_decrement_mode="trigger")

    response = client.post(f"{API}/sales", json=sale_payload(
        items=[item(AIRPODS, 2, 1899), item(999, 1, 10)],
        customer={"name": "X"}
    ))

    assert response.status_code == 500
    assert get_stock(client, AIRPODS) == 30


# ==================== CONSULTAS ====================

def test_list_sales_newest_first_with_names(client):
    first = create_sale(client, sale_payload(items=[item(AIRPODS, 1, 1899)], customer={"name": "Ana C."}))
    second = create_sale(client, sale_payload(
        items=[item(IPHONE, 1, 8999)], customer={"name": "Beto"},
        seller_id=CARLOS, payment_method_id=DINHEIRO
    ))

    sales = client.get(f"{API}/sales").json()
    assert [s["id"] for s in sales] == [second, first]
    assert sales[0]["customer_name"] == "Beto"
    assert sales[0]["seller_name"] == "Carlos Pereira"
    assert sales[0]["payment_method"] == "Dinheiro"
    assert sales[1]["seller_id"] == MARIA
    assert sales[1]["payment_method_id"] == PIX


def test_sale_details_not_found(client):
    response = client.get(f"{API}/sales/999/details")
    assert response.status_code == 404
    assert response.json()["detail"] == "Venta no encontrada"


def test_sale_products(client):
    sale_id = create_sale(client, sale_payload(
        items=[item(AIRPODS, 2, 1899), item(IPHONE, 1, 8999)],
        customer={"name": "X"}
    ))

    products = client.get(f"{API}/sales/{sale_id}/products").json()
    assert products == [
        {"id": AIRPODS, "name": "AirPods Pro", "quantity": 2, "unit_price": 1899.0, "subtotal": 3798.0},
        {"id": IPHONE, "name": "iPhone 15 Pro", "quantity": 1, "unit_price": 8999.0, "subtotal": 8999.0},
    ]
    assert client.get(f"{API}/sales/999/products").json() == []


# ==================== COTIZACIÓN ====================

def test_quote_with_inline_flags(client):
    response = client.post(f"{API}/sales/quote", json={
        "items": [item(AIRPODS, 2, 500)],
        "customer": {"name": "X", **ALL_FLAGS}
    })

    assert response.status_code == 200
    assert response.json() == {"subtotal": 1000.0, "discount_rate": 0.75, "discount": 750.0, "total": 250.0}


def test_quote_with_stored_customer(client):
    customer = create_customer(client, name="Y", from_sousa=True, watches_one_piece=True)

    response = client.post(f"{API}/sales/quote", json={
        "items": [item(IPHONE, 1, 8999)],
        "customer_id": customer["id"]
    })

    body = response.json()
    assert body["discount_rate"] == 0.5
    assert body["discount"] == 4499.5
    assert body["total"] == 4499.5
    assert get_stock(client, IPHONE) == 15


def test_quote_unknown_customer(client):
    response = client.post(f"{API}/sales/quote", json={
        "items": [item(IPHONE, 1, 8999)],
        "customer_id": 999
    })
    assert response.status_code == 404
