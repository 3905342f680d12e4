"""Shared test fixtures for the Travel Agency API."""

import pytest
from fastapi.testclient import TestClient

from travel_agency_api.app.core.config import Settings
from travel_agency_api.app.core.db import ConnectionFactory
from travel_agency_api.app.main import create_app


COUNTRIES = [
    (1, "Austria"),
    (2, "Switzerland"),
    (3, "Italy"),
    (4, "Greece"),
]

# (IdTrip, Name, Description, DateFrom, DateTo, MaxPeople)
TRIPS = [
    (1, "Alpine Escape", "A week of hiking in the Alps", "2025-07-10T00:00:00", "2025-07-17T00:00:00", 10),
    (2, "Roman Holiday", None, "2025-05-01T00:00:00", "2025-05-06T00:00:00", 5),
    (3, "Island Hopping", "Ferries between the islands", "2025-09-01T00:00:00", "2025-09-14T00:00:00", 2),
    (4, "Mystery Tour", "Destination revealed on departure", "2025-06-01T00:00:00", "2025-06-03T00:00:00", 5),
    (5, "Solo Retreat", "One seat only", "2025-08-01T00:00:00", "2025-08-05T00:00:00", 1),
]

# (IdCountry, IdTrip); trip 4 has no countries on purpose.
COUNTRY_TRIPS = [
    (2, 1),
    (1, 1),
    (3, 2),
    (4, 3),
    (3, 3),
    (4, 5),
]


def seed(connections: ConnectionFactory) -> None:
    with connections.connection() as conn:
        conn.executemany("INSERT INTO Country (IdCountry, Name) VALUES (?, ?)", COUNTRIES)
        conn.executemany(
            "INSERT INTO Trip (IdTrip, Name, Description, DateFrom, DateTo, MaxPeople) VALUES (?, ?, ?, ?, ?, ?)",
            TRIPS,
        )
        conn.executemany("INSERT INTO Country_Trip (IdCountry, IdTrip) VALUES (?, ?)", COUNTRY_TRIPS)
        conn.commit()


@pytest.fixture
def app_settings(tmp_path):
    return Settings(database_url=str(tmp_path / "travel_agency.db"), log_level="WARNING")


@pytest.fixture
def connections(app_settings):
    factory = ConnectionFactory(app_settings.database_url, timeout=app_settings.database_timeout)
    factory.create_schema()
    seed(factory)
    return factory


@pytest.fixture
def app(app_settings, connections):
    return create_app(app_settings)


@pytest.fixture
def api(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_client(api):
    """Create a client through the API and return its identifier."""

    def _make(first_name="Ann", last_name="Lee", email="ann@example.com", **extra):
        payload = {"firstName": first_name, "lastName": last_name, "email": email, **extra}
        response = api.post("/api/clients", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["idClient"]

    return _make


@pytest.fixture
def registration_count(connections):
    """Return the number of registrations for a trip, read straight from the database."""

    def _count(trip_id):
        with connections.connection() as conn:
            return conn.execute(
                "SELECT COUNT(*) AS total FROM Client_Trip WHERE IdTrip = ?", (trip_id,)
            ).fetchone()["total"]

    return _count
