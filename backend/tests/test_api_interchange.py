import datetime as dt

from conftest import OUTSIDER_ADDRESS
from sqlmodel import select

from campaign_calendar.models import Department, Event, User

HEADER = "Title,Date,Urgency,Description,Department,Assignee"


def seed_catalog(session):
    marketing = Department(name="Marketing")
    ali = User(name="Ali Veli", email="ali@mail.com", avatar_glyph="🚀")
    session.add_all([marketing, ali])
    session.commit()
    session.refresh(marketing)
    session.refresh(ali)
    return marketing, ali


def test_export_returns_csv_attachment(client, session):
    marketing, ali = seed_catalog(session)
    session.add(
        Event(
            title='Sale, "Big" Event',
            date=dt.date(2024, 3, 1),
            urgency="Critical",
            department_id=marketing.id,
            assignee_id=ali.id,
        )
    )
    session.commit()

    response = client.get("/api/v1/interchange/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="kampanya_takvimi_export_')
    assert disposition.endswith('.csv"')
    lines = response.text.split("\n")
    assert lines[0] == HEADER
    assert lines[1] == '"Sale, ""Big"" Event","2024-03-01","Critical","","Marketing","Ali Veli"'


def test_import_creates_events_and_reports_skipped_lines(client, session):
    marketing, ali = seed_catalog(session)
    text = "\n".join(
        [
            HEADER,
            '"Spring Sale","2024-03-01","High","Posters","Marketing","Ali Veli"',
            "Broken,2024-03-02",
            "Later,someday,Low",
            "Mystery,2024-03-03,Unknown,,Finance,",
        ]
    )

    response = client.post("/api/v1/interchange/import", json={"text": text})

    assert response.status_code == 201
    body = response.json()
    assert body["created"] == 2
    assert body["skipped"] == 2
    codes = [(item["line"], item["code"]) for item in body["diagnostics"]]
    assert (3, "too_few_fields") in codes
    assert (4, "unparseable_date") in codes
    assert (5, "unknown_urgency") in codes
    assert (5, "unresolved_department") in codes

    events = {event.title: event for event in session.exec(select(Event)).all()}
    assert events["Spring Sale"].department_id == marketing.id
    assert events["Spring Sale"].assignee_id == ali.id
    assert events["Mystery"].urgency == "Medium"
    assert events["Mystery"].department_id is None


def test_export_then_import_round_trip(client, session):
    marketing, ali = seed_catalog(session)
    session.add(
        Event(
            title="Winter",
            date=dt.date(2024, 12, 1),
            urgency="Low",
            description="Line one\nLine two",
            department_id=marketing.id,
            assignee_id=ali.id,
        )
    )
    session.commit()
    exported = client.get("/api/v1/interchange/export").text

    assert client.delete("/api/v1/events/").status_code == 204
    response = client.post("/api/v1/interchange/import", json={"text": exported})

    assert response.status_code == 201
    assert response.json()["diagnostics"] == []
    event = session.exec(select(Event)).one()
    assert (event.title, event.date, event.urgency) == ("Winter", dt.date(2024, 12, 1), "Low")
    assert event.description == "Line one\nLine two"
    assert (event.department_id, event.assignee_id) == (marketing.id, ali.id)


def test_empty_and_header_only_input_is_rejected(client, session):
    empty = client.post("/api/v1/interchange/import", json={"text": "  "})
    header_only = client.post("/api/v1/interchange/import", json={"text": HEADER})
    nothing_valid = client.post(
        "/api/v1/interchange/import", json={"text": f"{HEADER}\nBroken,2024-01-01"}
    )

    assert empty.status_code == 400
    assert header_only.status_code == 400
    assert nothing_valid.status_code == 400
    assert session.exec(select(Event)).all() == []


def test_interchange_requires_administrator(client, network):
    network.address = OUTSIDER_ADDRESS

    assert client.get("/api/v1/interchange/export").status_code == 403
    response = client.post("/api/v1/interchange/import", json={"text": f"{HEADER}\nX,2024-01-01,Low"})
    assert response.status_code == 403
