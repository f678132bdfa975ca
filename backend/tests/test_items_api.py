# backend/tests/test_items_api.py

import pytest

from conftest import API, create_category, create_item, create_subcategory


@pytest.fixture
def menu(client):
    drinks = create_category(client, name="Drinks", tax=5)
    food = create_category(client, name="Food", taxApplicability=False, tax=None)
    soda = create_subcategory(client, drinks["id"], name="Soda")
    pizza = create_subcategory(client, food["id"], name="Pizza")
    return {"drinks": drinks, "food": food, "soda": soda, "pizza": pizza}


def test_create_item_computes_total_amount(client, menu):
    response = client.post(f"{API}/items/", json={
        "name": "Cola",
        "taxApplicability": True,
        "tax": 5,
        "baseAmount": 80,
        "discount": 10,
        "subCategoryId": menu["soda"]["id"],
    })

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Item created successfully"
    data = body["data"]
    assert data["totalAmount"] == 70
    assert data["subCategoryId"] == menu["soda"]["id"]
    assert data["subCategory"] == {"id": menu["soda"]["id"], "name": "Soda"}
    assert data["categoryId"] is None
    assert data["category"] is None


def test_client_total_amount_is_ignored(client, menu):
    data = create_item(client, categoryId=menu["drinks"]["id"], baseAmount=50, discount=5, totalAmount=1)
    assert data["totalAmount"] == 45


def test_discount_defaults_to_zero(client, menu):
    data = create_item(client, categoryId=menu["drinks"]["id"], baseAmount=30, discount=None)
    assert data["discount"] == 0
    assert data["totalAmount"] == 30


def test_item_with_both_parents_is_rejected(client, menu):
    response = client.post(f"{API}/items/", json={
        "name": "Cola",
        "taxApplicability": False,
        "baseAmount": 10,
        "categoryId": menu["drinks"]["id"],
        "subCategoryId": menu["soda"]["id"],
    })
    assert response.status_code == 400
    assert response.json()["message"] == "Item cannot belong to both category and subcategory"


def test_item_without_parent_is_rejected(client, menu):
    response = client.post(f"{API}/items/", json={"name": "Cola", "taxApplicability": False, "baseAmount": 10})
    assert response.status_code == 400
    assert response.json()["message"] == "Item must belong to either a category or subcategory"


def test_item_with_missing_subcategory_returns_404(client, menu):
    response = client.post(f"{API}/items/", json={
        "name": "Cola", "taxApplicability": False, "baseAmount": 10, "subCategoryId": 999,
    })
    assert response.status_code == 404
    assert response.json()["message"] == "Subcategory not found"


def test_discount_above_base_is_rejected(client, menu):
    response = client.post(f"{API}/items/", json={
        "name": "Cola", "taxApplicability": False, "baseAmount": 10, "discount": 11,
        "categoryId": menu["drinks"]["id"],
    })
    assert response.status_code == 400
    assert response.json()["message"] == "Discount cannot exceed base amount"


def test_infinite_amounts_are_rejected(client, menu):
    response = client.post(f"{API}/items/", json={
        "name": "Cola", "taxApplicability": False, "baseAmount": "inf", "discount": "inf",
        "categoryId": menu["drinks"]["id"],
    })

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} == {"baseAmount", "discount"}
    assert client.get(f"{API}/items/").json()["count"] == 0


def test_nan_amount_is_rejected_on_update(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"])

    response = client.put(f"{API}/items/{cola['id']}", data={"baseAmount": "nan"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "baseAmount"


def test_item_tax_is_required_when_applicable(client, menu):
    response = client.post(f"{API}/items/", json={
        "name": "Cola", "taxApplicability": True, "baseAmount": 10, "categoryId": menu["drinks"]["id"],
    })
    assert response.status_code == 400


def test_item_requires_tax_applicability_and_base_amount(client, menu):
    response = client.post(f"{API}/items/", json={"name": "Cola", "categoryId": menu["drinks"]["id"]})
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert fields == {"taxApplicability", "baseAmount"}


def test_items_by_category_include_subcategory_items(client, menu):
    water = create_item(client, name="Water", categoryId=menu["drinks"]["id"])
    cola = create_item(client, name="Cola", subCategoryId=menu["soda"]["id"])
    create_item(client, name="Margherita", subCategoryId=menu["pizza"]["id"])
    create_item(client, name="Bread", categoryId=menu["food"]["id"])

    response = client.get(f"{API}/items/category/{menu['drinks']['id']}")

    body = response.json()
    assert body["count"] == 2
    assert {item["id"] for item in body["data"]} == {water["id"], cola["id"]}


def test_items_by_missing_category_returns_404(client):
    response = client.get(f"{API}/items/category/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Category not found"


def test_items_by_subcategory(client, menu):
    cola = create_item(client, name="Cola", subCategoryId=menu["soda"]["id"])
    create_item(client, name="Water", categoryId=menu["drinks"]["id"])

    body = client.get(f"{API}/items/subcategory/{menu['soda']['id']}").json()

    assert body["count"] == 1
    assert body["data"][0]["id"] == cola["id"]


def test_list_items_newest_first(client, menu):
    create_item(client, name="Water", categoryId=menu["drinks"]["id"])
    create_item(client, name="Cola", subCategoryId=menu["soda"]["id"])

    body = client.get(f"{API}/items/").json()

    assert [item["name"] for item in body["data"]] == ["Cola", "Water"]


def test_item_name_lookup_is_exact(client, menu):
    create_item(client, name="Cola", subCategoryId=menu["soda"]["id"])

    assert client.get(f"{API}/items/name/cola").json()["data"]["name"] == "Cola"
    response = client.get(f"{API}/items/name/Col")
    assert response.status_code == 404
    assert response.json()["message"] == "Item not found"


def test_search_items_by_fragment(client, menu):
    create_item(client, name="Cola", subCategoryId=menu["soda"]["id"])
    create_item(client, name="Cola Zero", subCategoryId=menu["soda"]["id"])
    create_item(client, name="Water", categoryId=menu["drinks"]["id"])

    body = client.get(f"{API}/items/search", params={"name": "COLA"}).json()
    assert body["count"] == 2

    body = client.get(f"{API}/search/items", params={"name": "ate"}).json()
    assert [item["name"] for item in body["data"]] == ["Water"]


def test_search_treats_wildcards_literally(client, menu):
    create_item(client, name="Cola", subCategoryId=menu["soda"]["id"])
    assert client.get(f"{API}/items/search", params={"name": "%"}).json()["count"] == 0


def test_search_requires_a_name(client):
    response = client.get(f"{API}/items/search", params={"name": "  "})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
    assert client.get(f"{API}/search/items").status_code == 400


# ========================================
# ACTUALIZACIONES
# ========================================

def test_update_amounts_recomputes_total(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"], baseAmount=80, discount=10)

    response = client.put(f"{API}/items/{cola['id']}", json={"baseAmount": 100})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["baseAmount"] == 100
    assert data["totalAmount"] == 90


def test_update_discount_above_base_is_rejected(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"], baseAmount=80, discount=10)

    response = client.put(f"{API}/items/{cola['id']}", json={"discount": 200})

    assert response.status_code == 400
    assert client.get(f"{API}/items/{cola['id']}").json()["data"]["discount"] == 10


def test_update_with_missing_subcategory_leaves_item_unchanged(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"])

    response = client.put(f"{API}/items/{cola['id']}", json={"subCategoryId": 999, "name": "Renamed"})

    assert response.status_code == 404
    assert response.json()["message"] == "Subcategory not found"
    data = client.get(f"{API}/items/{cola['id']}").json()["data"]
    assert data["name"] == "Cola"
    assert data["categoryId"] == menu["drinks"]["id"]
    assert data["subCategoryId"] is None


def test_moving_item_to_subcategory_clears_category(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"])

    data = client.put(f"{API}/items/{cola['id']}", json={"subCategoryId": menu["soda"]["id"]}).json()["data"]

    assert data["subCategoryId"] == menu["soda"]["id"]
    assert data["categoryId"] is None
    assert data["category"] is None


def test_moving_item_to_category_clears_subcategory(client, menu):
    cola = create_item(client, subCategoryId=menu["soda"]["id"])

    data = client.put(f"{API}/items/{cola['id']}", json={"categoryId": menu["food"]["id"]}).json()["data"]

    assert data["categoryId"] == menu["food"]["id"]
    assert data["subCategoryId"] is None


def test_clearing_the_only_parent_is_rejected(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"])

    response = client.put(f"{API}/items/{cola['id']}", json={"categoryId": None})

    assert response.status_code == 400
    assert response.json()["message"] == "Item must belong to either a category or subcategory"


def test_item_tax_toggle(client, menu):
    cola = create_item(client, categoryId=menu["drinks"]["id"])

    data = client.put(f"{API}/items/{cola['id']}", json={"taxApplicability": True, "tax": 12}).json()["data"]
    assert data["taxApplicability"] is True
    assert data["tax"] == 12

    data = client.put(f"{API}/items/{cola['id']}", json={"taxApplicability": False}).json()["data"]
    assert data["taxApplicability"] is False
    assert data["tax"] is None


def test_update_missing_item_returns_404(client):
    response = client.put(f"{API}/items/999", json={"name": "Ghost"})
    assert response.status_code == 404
    assert response.json()["message"] == "Item not found"


def test_create_item_from_form_with_image(client, menu, image_store):
    response = client.post(
        f"{API}/items/",
        data={
            "name": "Lemonade",
            "taxApplicability": "false",
            "tax": "",
            "baseAmount": "20",
            "discount": "",
            "categoryId": "",
            "subCategoryId": str(menu["soda"]["id"]),
        },
        files={"image": ("lemonade.png", b"\x89PNG fake", "image/png")},
    )

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["totalAmount"] == 20
    assert data["image"].endswith("/menu_items/lemonade.jpg")
    assert image_store.uploads[0][0] == "menu_items"
