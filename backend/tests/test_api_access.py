from conftest import ADMIN_ADDRESS, OUTSIDER_ADDRESS

from campaign_calendar.models import Department


def test_caller_classification(client, network):
    response = client.get("/api/v1/access/me", headers={"X-Viewer-Id": "viewer-1"})

    assert response.status_code == 200
    assert response.json() == {
        "address": ADMIN_ADDRESS,
        "tier": "elevated",
        "department_id": None,
        "viewer_id": "viewer-1",
    }

    network.address = OUTSIDER_ADDRESS
    assert client.get("/api/v1/access/me").json()["tier"] == "unclassified"


def test_unclassified_caller_cannot_read_or_change_table(client, network):
    network.address = OUTSIDER_ADDRESS

    assert client.get("/api/v1/access/").status_code == 403
    response = client.post("/api/v1/access/elevated", json={"address": OUTSIDER_ADDRESS})
    assert response.status_code == 403


def test_add_and_remove_elevated_address(client, network):
    response = client.post("/api/v1/access/elevated", json={"address": "10.1.1.1"})

    assert response.status_code == 201
    assert response.json()["elevated_addresses"] == [ADMIN_ADDRESS, "10.1.1.1"]

    duplicate = client.post("/api/v1/access/elevated", json={"address": "10.1.1.1"})
    assert duplicate.status_code == 409

    network.address = "10.1.1.1"
    assert client.get("/api/v1/access/").status_code == 200

    response = client.delete("/api/v1/access/elevated/10.1.1.1")
    assert response.json()["elevated_addresses"] == [ADMIN_ADDRESS]
    assert client.get("/api/v1/access/").status_code == 403


def test_blank_elevated_address_is_rejected(client):
    response = client.post("/api/v1/access/elevated", json={"address": "  "})

    assert response.status_code == 400


def test_department_mapping_conflict_rejects_whole_batch(client, session):
    marketing = Department(name="Marketing")
    session.add(marketing)
    session.commit()
    session.refresh(marketing)

    first = client.post(
        "/api/v1/access/departments",
        json={"addresses": "10.0.0.1", "department_id": str(marketing.id)},
    )
    assert first.status_code == 201

    conflict = client.post(
        "/api/v1/access/departments",
        json={"addresses": "10.0.0.1, 10.0.0.2", "department_id": str(marketing.id)},
    )
    assert conflict.status_code == 409
    assert conflict.json()["detail"]["addresses"] == ["10.0.0.1"]

    table = client.get("/api/v1/access/").json()
    assert table["department_addresses"] == {"10.0.0.1": str(marketing.id)}


def test_mapping_to_unknown_department_is_rejected(client):
    response = client.post(
        "/api/v1/access/departments",
        json={"addresses": "10.0.0.1", "department_id": "00000000-0000-0000-0000-000000000001"},
    )

    assert response.status_code == 404


def test_mapped_address_is_department_scoped(client, session, network):
    marketing = Department(name="Marketing")
    session.add(marketing)
    session.commit()
    session.refresh(marketing)
    client.post(
        "/api/v1/access/departments",
        json={"addresses": "10.0.0.7 10.0.0.8", "department_id": str(marketing.id)},
    )

    network.address = "10.0.0.8"
    body = client.get("/api/v1/access/me").json()

    assert body["tier"] == "department"
    assert body["department_id"] == str(marketing.id)

    network.address = ADMIN_ADDRESS
    client.delete("/api/v1/access/departments/10.0.0.8")
    network.address = "10.0.0.8"
    assert client.get("/api/v1/access/me").json()["tier"] == "unclassified"
