"""Tests for enrolling clients into trips and cancelling registrations."""

from datetime import date

from travel_agency_api.app.services.client_service import registration_stamp


def test_register_client_for_trip(api, make_client, connections):
    client_id = make_client()
    response = api.put(f"/api/clients/{client_id}/trips/1")
    assert response.status_code == 200
    assert response.json() == {"message": f"Client {client_id} successfully registered for trip 1"}

    with connections.connection() as conn:
        row = conn.execute(
            "SELECT RegisteredAt, PaymentDate FROM Client_Trip WHERE IdClient = ? AND IdTrip = ?",
            (client_id, 1),
        ).fetchone()
    assert row["RegisteredAt"] == registration_stamp()
    assert row["PaymentDate"] is None


def test_registration_stamp_format():
    assert registration_stamp(date(2025, 3, 1)) == 20250301
    assert registration_stamp(date(2024, 12, 31)) == 20241231


def test_register_unknown_client(api):
    response = api.put("/api/clients/42/trips/1")
    assert response.status_code == 404
    assert response.json()["detail"] == "Client with ID 42 not found"


def test_register_unknown_trip(api, make_client):
    client_id = make_client()
    response = api.put(f"/api/clients/{client_id}/trips/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Trip with ID 999 not found"


def test_unknown_client_is_reported_before_unknown_trip(api):
    response = api.put("/api/clients/42/trips/999")
    assert response.status_code == 404
    assert "Client" in response.json()["detail"]


def test_duplicate_registration_is_a_conflict(api, make_client, registration_count):
    client_id = make_client()
    assert api.put(f"/api/clients/{client_id}/trips/1").status_code == 200
    response = api.put(f"/api/clients/{client_id}/trips/1")
    assert response.status_code == 409
    assert response.json()["detail"] == "Client is already registered for this trip"
    assert registration_count(1) == 1


def test_full_trip_rejects_new_client(api, make_client, registration_count):
    # Trip 3 takes two people.
    first = make_client(email="a@example.com")
    second = make_client(email="b@example.com")
    third = make_client(email="c@example.com")
    assert api.put(f"/api/clients/{first}/trips/3").status_code == 200
    assert api.put(f"/api/clients/{second}/trips/3").status_code == 200

    response = api.put(f"/api/clients/{third}/trips/3")
    assert response.status_code == 400
    assert response.json()["detail"] == "This trip has reached its maximum number of participants"
    assert registration_count(3) == 2


def test_duplicate_is_reported_before_capacity(api, make_client):
    client_id = make_client()
    assert api.put(f"/api/clients/{client_id}/trips/5").status_code == 200
    # Trip 5 is now full, but the client is already on it.
    assert api.put(f"/api/clients/{client_id}/trips/5").status_code == 409


def test_booking_walkthrough(api):
    response = api.post(
        "/api/clients",
        json={"firstName": "Ann", "lastName": "Lee", "email": "ann@example.com"},
    )
    assert response.status_code == 201
    ann = response.json()["idClient"]
    assert ann == 1

    assert api.put(f"/api/clients/{ann}/trips/5").status_code == 200
    assert api.put(f"/api/clients/{ann}/trips/5").status_code == 409

    bob = api.post(
        "/api/clients",
        json={"firstName": "Bob", "lastName": "Ray", "email": "bob@example.com"},
    ).json()["idClient"]
    assert api.put(f"/api/clients/{bob}/trips/5").status_code == 400


def test_cancel_registration(api, make_client, connections):
    ann = make_client(email="ann@example.com")
    bob = make_client(email="bob@example.com")
    api.put(f"/api/clients/{ann}/trips/1")
    api.put(f"/api/clients/{ann}/trips/2")
    api.put(f"/api/clients/{bob}/trips/1")

    response = api.delete(f"/api/clients/{ann}/trips/1")
    assert response.status_code == 200
    assert response.json() == {"message": f"Registration for client {ann} on trip 1 has been canceled"}

    with connections.connection() as conn:
        rows = conn.execute(
            "SELECT IdClient, IdTrip FROM Client_Trip ORDER BY IdClient, IdTrip"
        ).fetchall()
    assert [tuple(row) for row in rows] == [(ann, 2), (bob, 1)]


def test_cancel_frees_a_seat(api, make_client):
    ann = make_client(email="ann@example.com")
    bob = make_client(email="bob@example.com")
    assert api.put(f"/api/clients/{ann}/trips/5").status_code == 200
    assert api.put(f"/api/clients/{bob}/trips/5").status_code == 400
    assert api.delete(f"/api/clients/{ann}/trips/5").status_code == 200
    assert api.put(f"/api/clients/{bob}/trips/5").status_code == 200


def test_cancel_missing_registration(api, make_client):
    client_id = make_client()
    response = api.delete(f"/api/clients/{client_id}/trips/1")
    assert response.status_code == 404
    assert response.json()["detail"] == f"Registration not found for client {client_id} and trip 1"


def test_cancel_twice(api, make_client):
    client_id = make_client()
    api.put(f"/api/clients/{client_id}/trips/1")
    assert api.delete(f"/api/clients/{client_id}/trips/1").status_code == 200
    assert api.delete(f"/api/clients/{client_id}/trips/1").status_code == 404


def test_non_integer_ids_are_bad_requests(api):
    assert api.put("/api/clients/abc/trips/1").status_code == 400
    assert api.get("/api/clients/abc/trips").status_code == 400


def test_ids_beyond_sqlite_integer_range_are_bad_requests(api, make_client):
    client_id = make_client()
    huge = "99999999999999999999"
    assert api.get(f"/api/clients/{huge}/trips").status_code == 400
    assert api.put(f"/api/clients/{huge}/trips/1").status_code == 400
    assert api.put(f"/api/clients/{client_id}/trips/{huge}").status_code == 400
    assert api.delete(f"/api/clients/{client_id}/trips/{huge}").status_code == 400


def test_zero_and_negative_ids_are_not_found(api):
    assert api.get("/api/clients/0/trips").status_code == 404
    assert api.get("/api/clients/-1/trips").status_code == 404
    assert api.delete("/api/clients/-1/trips/1").status_code == 404
