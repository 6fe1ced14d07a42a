import datetime as dt

import pytest
from conftest import OUTSIDER_ADDRESS

from campaign_calendar.models import Department, Event, User


@pytest.fixture
def departments(session):
    marketing = Department(name="Marketing")
    sales = Department(name="Sales")
    session.add_all([marketing, sales])
    session.commit()
    session.refresh(marketing)
    session.refresh(sales)
    return marketing, sales


def test_create_event_and_list(client, departments):
    marketing, _ = departments

    response = client.post(
        "/api/v1/events/",
        json={
            "title": "Spring Sale",
            "date": "2024-03-01",
            "urgency": "High",
            "department_id": str(marketing.id),
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["urgency_label"] == "Yüksek"
    listed = client.get("/api/v1/events/").json()
    assert [item["title"] for item in listed] == ["Spring Sale"]


def test_blank_title_and_unknown_urgency_are_rejected(client):
    blank = client.post("/api/v1/events/", json={"title": " ", "date": "2024-03-01"})
    unknown = client.post(
        "/api/v1/events/", json={"title": "X", "date": "2024-03-01", "urgency": "Someday"}
    )

    assert blank.status_code == 422
    assert unknown.status_code == 422


def test_department_viewer_sees_only_own_events(client, session, network, seed_access, departments):
    marketing, sales = departments
    session.add_all(
        [
            Event(title="Marketing push", date=dt.date(2024, 1, 1), department_id=marketing.id),
            Event(title="Sales push", date=dt.date(2024, 1, 2), department_id=sales.id),
            Event(title="Unassigned", date=dt.date(2024, 1, 3)),
        ]
    )
    session.commit()
    seed_access(elevated=[], departments={"10.0.0.5": str(marketing.id)})

    network.address = "10.0.0.5"
    response = client.get("/api/v1/events/")

    assert response.status_code == 200
    assert [item["title"] for item in response.json()] == ["Marketing push"]
    assert client.post("/api/v1/events/", json={"title": "X", "date": "2024-01-01"}).status_code == 403

    network.address = OUTSIDER_ADDRESS
    assert client.get("/api/v1/events/").status_code == 403


def test_deleting_department_detaches_its_events(client, session, departments):
    marketing, _ = departments
    event = Event(title="Launch", date=dt.date(2024, 6, 1), department_id=marketing.id)
    session.add(event)
    session.commit()
    event_id = event.id

    response = client.delete(f"/api/v1/departments/{marketing.id}")

    assert response.status_code == 204
    session.expire_all()
    assert session.get(Event, event_id).department_id is None
    assert session.get(Department, marketing.id) is None


def test_deleting_user_unassigns_events(client, session):
    user = User(name="Ali Veli", email="ali@mail.com", avatar_glyph="🚀")
    session.add(user)
    session.commit()
    event = Event(title="Launch", date=dt.date(2024, 6, 1), assignee_id=user.id)
    session.add(event)
    session.commit()
    event_id, user_id = event.id, user.id

    assert client.delete(f"/api/v1/users/{user_id}").status_code == 204

    session.expire_all()
    assert session.get(Event, event_id).assignee_id is None


def test_delete_single_and_all_events(client, session):
    first = Event(title="One", date=dt.date(2024, 1, 1))
    second = Event(title="Two", date=dt.date(2024, 1, 2))
    session.add_all([first, second])
    session.commit()

    assert client.delete(f"/api/v1/events/{first.id}").status_code == 204
    assert [item["title"] for item in client.get("/api/v1/events/").json()] == ["Two"]

    assert client.delete("/api/v1/events/").status_code == 204
    assert client.get("/api/v1/events/").json() == []


def test_user_requires_an_avatar(client):
    missing = client.post("/api/v1/users/", json={"name": "Ayşe", "email": "ayse@mail.com"})
    with_url = client.post(
        "/api/v1/users/",
        json={"name": "Ayşe", "email": "Ayse@Mail.com", "avatar_url": "/uploads/user-avatars/a.png"},
    )

    assert missing.status_code == 422
    assert with_url.status_code == 201
    assert with_url.json()["email"] == "ayse@mail.com"
    assert with_url.json()["avatar_glyph"] is None


def test_avatar_upload_returns_url(client):
    response = client.post(
        "/api/v1/users/avatar",
        files={"file": ("me.png", b"\x89PNG fake", "image/png")},
    )
    rejected = client.post(
        "/api/v1/users/avatar",
        files={"file": ("me.exe", b"MZ", "application/octet-stream")},
    )

    assert response.status_code == 201
    assert response.json()["avatar_url"].startswith("/uploads/user-avatars/")
    assert rejected.status_code == 400


def test_avatar_glyph_palette_is_offered_to_administrators(client, network):
    response = client.get("/api/v1/users/avatar-glyphs")

    assert response.status_code == 200
    assert "🚀" in response.json()["glyphs"]
    assert response.json()["default"] == "👤"

    network.address = OUTSIDER_ADDRESS
    assert client.get("/api/v1/users/avatar-glyphs").status_code == 403


def test_department_create_requires_name(client):
    assert client.post("/api/v1/departments/", json={"name": "  "}).status_code == 422
    created = client.post("/api/v1/departments/", json={"name": " İK "})
    assert created.status_code == 201
    assert created.json()["name"] == "İK"
    assert [d["name"] for d in client.get("/api/v1/departments/").json()] == ["İK"]
