"""
Tests for the menu and orders (/api/order).

The pizza factory is never contacted: requests.post is patched in the
fulfillment module.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from pizza_service.models import DinerOrder

from test_helpers import TEST_FACTORY_API_KEY, TEST_FACTORY_URL, auth_header, random_name


def _factory_response(ok=True, status_code=200, payload=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    return response


def _order_body(items=None):
    if items is None:
        items = [{"menuId": 1, "description": "Veggie", "price": 0.05}]
    return {"franchiseId": 1, "storeId": 1, "items": items}


# ---- Menu ----

def test_get_menu(client):
    resp = client.get("/api/order/menu")
    assert resp.status_code == 200
    menu = resp.json()
    assert [item["title"] for item in menu] == ["Veggie", "Pepperoni"]
    assert menu[0] == {
        "id": 1,
        "title": "Veggie",
        "description": "A garden of delight",
        "image": "pizza1.png",
        "price": 0.0038,
    }


def test_add_menu_item(client, admin_token):
    title = random_name("Student")
    resp = client.put(
        "/api/order/menu",
        json={"title": title, "description": "No topping, no sauce, just carbs", "image": "pizza9.png", "price": 0.0001},
        headers=auth_header(admin_token),
    )
    assert resp.status_code == 200
    menu = resp.json()
    assert len(menu) == 3
    assert menu[-1]["title"] == title
    assert menu[-1]["price"] == 0.0001

    assert len(client.get("/api/order/menu").json()) == 3


def test_add_menu_item_non_admin(client, diner):
    resp = client.put(
        "/api/order/menu",
        json={"title": "Nope", "price": 1},
        headers=auth_header(diner["token"]),
    )
    assert resp.status_code == 403
    assert resp.json() == {"message": "unable to add menu item"}


def test_add_menu_item_requires_auth(client):
    resp = client.put("/api/order/menu", json={"title": "Nope", "price": 1})
    assert resp.status_code == 401


def test_add_menu_item_missing_price(client, admin_token):
    resp = client.put("/api/order/menu", json={"title": "Free"}, headers=auth_header(admin_token))
    assert resp.status_code == 400
    assert resp.json() == {"message": "title and price are required"}


def test_add_menu_item_negative_price(client, admin_token):
    resp = client.put(
        "/api/order/menu",
        json={"title": "Refund", "price": -1},
        headers=auth_header(admin_token),
    )
    assert resp.status_code == 400


# ---- Create order ----

@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order(mock_post, client, diner):
    mock_post.return_value = _factory_response(payload={"jwt": "1111.2222.3333", "reportUrl": "https://report/1"})

    resp = client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["jwt"] == "1111.2222.3333"
    assert body["followLinkToEndChaos"] == "https://report/1"

    order = body["order"]
    assert order["dinerId"] == diner["id"]
    assert order["franchiseId"] == 1
    assert order["storeId"] == 1
    assert order["items"][0]["menuId"] == 1
    assert order["items"][0]["description"] == "Veggie"
    assert order["items"][0]["price"] == 0.05
    assert "date" in order


@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order_calls_factory(mock_post, client, diner):
    mock_post.return_value = _factory_response(payload={"jwt": "a.b.c"})

    client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))

    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == f"{TEST_FACTORY_URL}/api/order"
    assert kwargs["headers"]["Authorization"] == f"Bearer {TEST_FACTORY_API_KEY}"
    sent = kwargs["json"]
    assert sent["diner"] == {"id": diner["id"], "name": diner["name"], "email": diner["email"]}
    assert sent["order"]["dinerId"] == diner["id"]
    assert sent["order"]["items"][0]["menuId"] == 1


@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order_factory_rejects(mock_post, client, diner, database):
    mock_post.return_value = _factory_response(
        ok=False,
        status_code=500,
        payload={"message": "chaos", "reportUrl": "https://report/chaos"},
    )

    resp = client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))
    assert resp.status_code == 500
    assert resp.json() == {
        "message": "Failed to fulfill order at factory",
        "followLinkToEndChaos": "https://report/chaos",
    }

    # The stored order is kept
    db = database.session()
    try:
        assert db.query(DinerOrder).filter(DinerOrder.diner_id == diner["id"]).count() == 1
    finally:
        db.close()


@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order_factory_unreachable(mock_post, client, diner):
    mock_post.side_effect = requests.ConnectionError("connection refused")

    resp = client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to fulfill order at factory"}
    assert mock_post.call_count == 1

    orders = client.get("/api/order", headers=auth_header(diner["token"])).json()["orders"]
    assert len(orders) == 1


@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order_unknown_menu_item(mock_post, client, diner):
    body = _order_body(items=[{"menuId": 999, "description": "Ghost", "price": 1}])

    resp = client.post("/api/order", json=body, headers=auth_header(diner["token"]))
    assert resp.status_code == 404
    assert resp.json() == {"message": "unknown menu item 999"}
    mock_post.assert_not_called()


@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order_with_no_items(mock_post, client, diner):
    mock_post.return_value = _factory_response(payload={"jwt": "a.b.c"})

    resp = client.post("/api/order", json=_order_body(items=[]), headers=auth_header(diner["token"]))
    assert resp.status_code == 200
    assert resp.json()["order"]["items"] == []


@patch("pizza_service.services.fulfillment.requests.post")
def test_create_order_requires_auth(mock_post, client):
    resp = client.post("/api/order", json=_order_body())
    assert resp.status_code == 401
    mock_post.assert_not_called()


def test_create_order_invalid_body(client, diner):
    resp = client.post("/api/order", json={"storeId": 1, "items": []}, headers=auth_header(diner["token"]))
    assert resp.status_code == 400
    assert "franchiseId" in resp.json()["message"]


# ---- List orders ----

@patch("pizza_service.services.fulfillment.requests.post")
def test_list_orders(mock_post, client, diner):
    mock_post.return_value = _factory_response(payload={"jwt": "a.b.c"})
    client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))

    resp = client.get("/api/order", headers=auth_header(diner["token"]))
    assert resp.status_code == 200
    body = resp.json()
    assert body["dinerId"] == diner["id"]
    assert body["page"] == "1"
    assert len(body["orders"]) == 1
    assert body["orders"][0]["items"][0]["description"] == "Veggie"


def test_list_orders_empty(client, diner):
    body = client.get("/api/order", headers=auth_header(diner["token"])).json()
    assert body["orders"] == []


@patch("pizza_service.services.fulfillment.requests.post")
def test_list_orders_only_own(mock_post, client, diner, make_user, login):
    mock_post.return_value = _factory_response(payload={"jwt": "a.b.c"})
    client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))

    other_token, _ = login(make_user())
    body = client.get("/api/order", headers=auth_header(other_token)).json()
    assert body["orders"] == []


@patch("pizza_service.services.fulfillment.requests.post")
def test_list_orders_pages(mock_post, client, diner):
    mock_post.return_value = _factory_response(payload={"jwt": "a.b.c"})
    for _ in range(12):
        client.post("/api/order", json=_order_body(), headers=auth_header(diner["token"]))

    first = client.get("/api/order", headers=auth_header(diner["token"])).json()
    second = client.get("/api/order", params={"page": 2}, headers=auth_header(diner["token"])).json()
    assert len(first["orders"]) == 10
    assert len(second["orders"]) == 2
    assert second["page"] == "2"
    assert first["orders"][-1]["id"] < second["orders"][0]["id"]


def test_list_orders_requires_auth(client):
    assert client.get("/api/order").status_code == 401


@pytest.mark.parametrize("page", ["0", "abc"])
def test_list_orders_invalid_page(client, diner, page):
    resp = client.get("/api/order", params={"page": page}, headers=auth_header(diner["token"]))
    assert resp.status_code == 400


def test_list_orders_page_echoed_as_given(client, diner):
    body = client.get("/api/order", params={"page": "3"}, headers=auth_header(diner["token"])).json()
    assert body["page"] == "3"
    assert body["orders"] == []


def test_list_orders_invalid_page_message(client, diner):
    resp = client.get("/api/order", params={"page": "abc"}, headers=auth_header(diner["token"]))
    assert resp.json() == {"message": "invalid page"}


def test_list_orders_invalid_page_requires_auth_first(client):
    assert client.get("/api/order", params={"page": "abc"}).status_code == 401
