from fastapi.testclient import TestClient

API = "/api/v1"

# IDs de los datos iniciales (orden de inserción)
MARIA, CARLOS, ANA = 1, 2, 3
IPHONE, GALAXY, AIRPODS, MACBOOK, XIAOMI = 1, 2, 3, 4, 5
DINHEIRO, CREDITO, DEBITO, PIX = 1, 2, 3, 4


def sale_payload(items, customer=None, customer_id=None, seller_id=MARIA,
                 payment_method_id=PIX, **extra):
    payload = {
        "seller_id": seller_id,
        "payment_method_id": payment_method_id,
        "items": items,
        **extra
    }
    if customer is not None:
        payload["customer"] = customer
    if customer_id is not None:
        payload["customer_id"] = customer_id
    return payload


def item(product_id, quantity, unit_price, **extra):
    return {"product_id": product_id, "quantity": quantity, "unit_price": unit_price, **extra}


def get_stock(client: TestClient, product_id: int) -> int:
    response = client.get(f"{API}/products/{product_id}")
    assert response.status_code == 200
    return response.json()["stock"]


def create_sale(client: TestClient, payload) -> int:
    response = client.post(f"{API}/sales", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


def create_customer(client: TestClient, **fields) -> dict:
    response = client.post(f"{API}/customers", json=fields)
    assert response.status_code == 201, response.text
    return response.json()
