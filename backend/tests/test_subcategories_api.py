# backend/tests/test_subcategories_api.py

from conftest import API, create_category, create_subcategory


def test_subcategory_inherits_tax_from_category(client):
    drinks = create_category(client, name="Drinks", tax=5)

    response = client.post(f"{API}/subcategories/", json={"name": "Soda", "categoryId": drinks["id"]})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Subcategory created successfully"
    data = body["data"]
    assert data["taxApplicability"] is True
    assert data["tax"] == 5
    assert data["categoryId"] == drinks["id"]
    assert data["category"] == {"id": drinks["id"], "name": "Drinks"}


def test_subcategory_own_tax_overrides_parent(client):
    drinks = create_category(client)
    data = create_subcategory(client, drinks["id"], tax=12)
    assert data["taxApplicability"] is True
    assert data["tax"] == 12


def test_subcategory_can_opt_out_of_parent_tax(client):
    drinks = create_category(client)
    data = create_subcategory(client, drinks["id"], taxApplicability=False)
    assert data["taxApplicability"] is False
    assert data["tax"] is None


def test_inheritance_is_a_copy_at_creation_time(client):
    drinks = create_category(client)
    soda = create_subcategory(client, drinks["id"])

    client.put(f"{API}/categories/{drinks['id']}", json={"tax": 8})

    response = client.get(f"{API}/subcategories/{soda['id']}")
    assert response.json()["data"]["tax"] == 5


def test_subcategory_requires_existing_parent(client):
    response = client.post(f"{API}/subcategories/", json={"name": "Soda", "categoryId": 999})
    assert response.status_code == 404
    assert response.json()["message"] == "Parent category not found"


def test_subcategory_requires_category_id(client):
    response = client.post(f"{API}/subcategories/", json={"name": "Soda"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "categoryId"


def test_list_subcategories_by_category(client):
    drinks = create_category(client, name="Drinks")
    food = create_category(client, name="Food")
    create_subcategory(client, drinks["id"], name="Soda")
    create_subcategory(client, drinks["id"], name="Juice")
    create_subcategory(client, food["id"], name="Pizza")

    response = client.get(f"{API}/subcategories/category/{drinks['id']}")

    body = response.json()
    assert body["count"] == 2
    assert [s["name"] for s in body["data"]] == ["Juice", "Soda"]
    assert client.get(f"{API}/subcategories/").json()["count"] == 3


def test_list_subcategories_of_missing_category_returns_404(client):
    response = client.get(f"{API}/subcategories/category/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Category not found"


def test_subcategory_name_lookup(client):
    drinks = create_category(client)
    create_subcategory(client, drinks["id"])

    assert client.get(f"{API}/subcategories/search/SODA").json()["data"]["name"] == "Soda"
    assert client.get(f"{API}/subcategories/search/So").status_code == 404


def test_get_missing_subcategory_returns_404(client):
    response = client.get(f"{API}/subcategories/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Subcategory not found"


def test_move_subcategory_to_another_category(client):
    drinks = create_category(client, name="Drinks")
    food = create_category(client, name="Food")
    soda = create_subcategory(client, drinks["id"])

    response = client.put(f"{API}/subcategories/{soda['id']}", json={"categoryId": food["id"]})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["categoryId"] == food["id"]
    assert data["category"]["name"] == "Food"


def test_move_subcategory_to_missing_category_is_rejected(client):
    drinks = create_category(client)
    soda = create_subcategory(client, drinks["id"])

    response = client.put(f"{API}/subcategories/{soda['id']}", json={"categoryId": 999})

    assert response.status_code == 404
    assert response.json()["message"] == "New parent category not found"
    assert client.get(f"{API}/subcategories/{soda['id']}").json()["data"]["categoryId"] == drinks["id"]


def test_enabling_tax_falls_back_to_parent_tax(client):
    drinks = create_category(client, tax=5)
    soda = create_subcategory(client, drinks["id"], taxApplicability=False)

    response = client.put(f"{API}/subcategories/{soda['id']}", json={"taxApplicability": True})

    data = response.json()["data"]
    assert data["taxApplicability"] is True
    assert data["tax"] == 5


def test_enabling_tax_under_untaxed_parent_needs_value(client):
    drinks = create_category(client, taxApplicability=False, tax=None)
    soda = create_subcategory(client, drinks["id"])

    response = client.put(f"{API}/subcategories/{soda['id']}", json={"taxApplicability": True})

    assert response.status_code == 400
    assert response.json()["message"] == "Tax value is required when enabling tax applicability"


def test_disabling_subcategory_tax_clears_value(client):
    drinks = create_category(client)
    soda = create_subcategory(client, drinks["id"])

    data = client.put(f"{API}/subcategories/{soda['id']}", json={"taxApplicability": False}).json()["data"]

    assert data["taxApplicability"] is False
    assert data["tax"] is None


def test_subcategory_image_goes_to_its_folder(client, image_store):
    drinks = create_category(client)

    response = client.post(
        f"{API}/subcategories/",
        data={"name": "Soda", "categoryId": str(drinks["id"]), "taxApplicability": ""},
        files={"image": ("soda.jpg", b"\xff\xd8 fake", "image/jpeg")},
    )

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["image"].endswith("/menu_subcategories/soda.jpg")
    assert data["tax"] == 5
    assert image_store.uploads[0][0] == "menu_subcategories"
