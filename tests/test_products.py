# tests/test_products.py


def test_create_product_with_bill_of_materials(client, make_material, make_product):
    sheet = make_material(name="Kraft sheet", unit="sheets", price=0.8)
    tape = make_material(name="Packing tape", unit="m", price=0.05)

    product = make_product(
        materials=[
            {"materialId": sheet["id"], "quantity": 2},
            {"materialId": tape["id"], "quantity": 1.5, "unitPrice": 0.04},
        ]
    )

    bom = product["materials"]
    assert [line["materialName"] for line in bom] == ["Kraft sheet", "Packing tape"]
    assert bom[0]["unit"] == "sheets"
    assert bom[0]["unitPrice"] == 0.8
    assert bom[1]["quantity"] == 1.5
    assert bom[1]["unitPrice"] == 0.04


def test_unknown_material_rejected(client, make_material):
    sheet = make_material()

    res = client.post(
        "/api/products",
        json={
            "name": "Box",
            "description": "Box",
            "price": 2,
            "materials": [
                {"materialId": sheet["id"], "quantity": 1},
                {"materialId": "missing", "quantity": 1},
            ],
        },
    )

    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Material not found"
    assert "materials[1].materialId" in body["error"]
    assert client.get("/api/products").json()["pagination"]["total"] == 0


def test_product_materials_endpoint(client, make_material, make_product):
    sheet = make_material()
    product = make_product(materials=[{"materialId": sheet["id"], "quantity": 4}])

    res = client.get(f"/api/products/{product['id']}/materials")

    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 1
    assert body["data"][0]["materialId"] == sheet["id"]


def test_update_replaces_bom_only_when_sent(client, make_material, make_product):
    sheet = make_material(name="Sheet")
    foam = make_material(name="Foam", unit="pcs")
    product = make_product(materials=[{"materialId": sheet["id"], "quantity": 1}])

    res = client.put(f"/api/products/{product['id']}", json={"price": 5.5})
    data = res.json()["data"]
    assert data["price"] == 5.5
    assert len(data["materials"]) == 1

    res = client.put(
        f"/api/products/{product['id']}",
        json={"materials": [{"materialId": foam["id"], "quantity": 3}]},
    )
    data = res.json()["data"]
    assert [line["materialName"] for line in data["materials"]] == ["Foam"]


def test_delete_product(client, make_product):
    product = make_product()

    res = client.delete(f"/api/products/{product['id']}")
    assert res.json()["message"] == "Product deleted successfully"
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_bom_quantity_not_truncated(client, make_material, make_product):
    sheet = make_material()
    product = make_product(materials=[{"materialId": sheet["id"], "quantity": 0.125}])

    res = client.get(f"/api/products/{product['id']}/materials")
    assert res.json()["data"][0]["quantity"] == 0.125
