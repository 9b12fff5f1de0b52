def test_create_supplier_normalizes_email(supplier):
    assert supplier["email"] == "info@aurora.it"
    assert supplier["isDeleted"] is False
    assert supplier["venues"] == []


def test_invalid_phone(client):
    response = client.post("/suppliers", json={"companyName": "Studio Blu", "phone": "12"})
    assert response.status_code == 422


def test_soft_delete_and_restore(client, supplier, venue):
    assert client.delete(f"/suppliers/{supplier['id']}").status_code == 200

    assert client.get("/suppliers").json() == []
    assert client.get("/venues").json() == []
    trashed = client.get("/suppliers", params={"include_deleted": True}).json()
    assert [s["id"] for s in trashed] == [supplier["id"]]
    assert trashed[0]["isDeleted"] is True

    restored = client.post(f"/suppliers/{supplier['id']}/restore")
    assert restored.status_code == 200
    assert restored.json()["isDeleted"] is False
    assert [v["id"] for v in client.get("/venues").json()] == [venue["id"]]


def test_search(client, supplier):
    client.post("/suppliers", json={"companyName": "Ludoteca Arcobaleno", "city": "Torino"})

    names = [s["companyName"] for s in client.get("/suppliers", params={"search": "tori"}).json()]

    assert names == ["Ludoteca Arcobaleno"]


def test_update_supplier(client, supplier):
    response = client.patch(f"/suppliers/{supplier['id']}", json={"city": "Monza"})
    assert response.status_code == 200
    assert response.json()["city"] == "Monza"
    assert response.json()["companyName"] == supplier["companyName"]


def test_missing_supplier(client):
    assert client.get("/suppliers/999").status_code == 404


def test_venue_belongs_to_supplier(client, supplier, venue):
    assert venue["supplierId"] == supplier["id"]
    assert venue["supplierName"] == supplier["companyName"]
    assert venue["color"] == "#FFAA00"

    venues = client.get(f"/suppliers/{supplier['id']}/venues").json()
    assert [v["name"] for v in venues] == ["Sole Studio"]


def test_cannot_add_venue_to_deleted_supplier(client, supplier):
    client.delete(f"/suppliers/{supplier['id']}")

    response = client.post(f"/suppliers/{supplier['id']}/venues", json={"name": "Sala Verde"})

    assert response.status_code == 409


def test_update_venue(client, supplier, venue):
    response = client.patch(
        f"/suppliers/{supplier['id']}/venues/{venue['id']}", json={"capacity": 20}
    )
    assert response.status_code == 200
    assert response.json()["capacity"] == 20
    assert response.json()["name"] == "Sole Studio"


def test_venue_of_other_supplier_is_not_found(client, venue):
    other = client.post("/suppliers", json={"companyName": "Altro"}).json()

    response = client.patch(f"/suppliers/{other['id']}/venues/{venue['id']}", json={"capacity": 5})

    assert response.status_code == 404


def test_delete_venue(client, supplier, venue):
    response = client.delete(f"/suppliers/{supplier['id']}/venues/{venue['id']}")
    assert response.status_code == 200
    assert client.get(f"/suppliers/{supplier['id']}/venues").json() == []


def test_delete_venue_with_labs(client, supplier, venue, lab):
    response = client.delete(f"/suppliers/{supplier['id']}/venues/{venue['id']}")
    assert response.status_code == 409
