def test_create_normalizes_code(lab_type):
    assert lab_type["code"] == "RB"
    assert lab_type["meetingCount"] == 6
    assert lab_type["labCount"] == 0


def test_list_ordered_by_name(client, lab_type):
    client.post("/lab-types", json={"name": "Arte", "code": "AR", "meetingCount": 4})

    names = [t["name"] for t in client.get("/lab-types").json()]

    assert names == ["Arte", "Robotica"]


def test_duplicate_code(client, lab_type):
    response = client.post("/lab-types", json={"name": "Robot 2", "code": "RB", "meetingCount": 2})
    assert response.status_code == 409


def test_invalid_code(client):
    response = client.post("/lab-types", json={"name": "Musica", "code": "MUS", "meetingCount": 8})
    assert response.status_code == 422


def test_negative_meeting_count(client):
    response = client.post("/lab-types", json={"name": "Musica", "code": "MU", "meetingCount": -1})
    assert response.status_code == 422


def test_missing_lab_type(client):
    assert client.get("/lab-types/999").status_code == 404


def test_update_does_not_touch_existing_labs(client, lab_type, lab):
    response = client.patch(f"/lab-types/{lab_type['id']}", json={"meetingCount": 10})

    assert response.status_code == 200
    assert response.json()["meetingCount"] == 10
    assert response.json()["labCount"] == 1
    assert client.get(f"/labs/{lab['id']}").json()["meetingCount"] == 6


def test_update_to_taken_code(client, lab_type):
    other = client.post("/lab-types", json={"name": "Arte", "code": "AR"}).json()

    response = client.patch(f"/lab-types/{other['id']}", json={"code": "rb"})

    assert response.status_code == 409


def test_delete_unused_type(client, lab_type):
    assert client.delete(f"/lab-types/{lab_type['id']}").status_code == 200
    assert client.get(f"/lab-types/{lab_type['id']}").status_code == 404


def test_delete_type_in_use(client, lab_type, lab):
    response = client.delete(f"/lab-types/{lab_type['id']}")
    assert response.status_code == 409
