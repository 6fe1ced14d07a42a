from conftest import ADMIN_ADDRESS
from sqlalchemy.exc import OperationalError

from campaign_calendar.db import get_session
from campaign_calendar.main import app

MARKETING_ID = "4b7d3f4e-8a57-4d5b-9f2e-1c0a6d9e2b11"


def test_health(client):
    assert client.get("/api/v1/health/").json() == {"status": "ok"}


def test_ready_reports_access_table(client, seed_access):
    seed_access(elevated=[ADMIN_ADDRESS], departments={"10.0.0.5": MARKETING_ID})

    response = client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "administrators": 1, "department_addresses": 1}


class BrokenSession:
    def get(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("no such table: access_config"))


def test_unreadable_access_table_is_not_ready(client):
    app.dependency_overrides[get_session] = lambda: BrokenSession()

    response = client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
