"""
Business logic for clients and trip registrations.

The ``ClientService`` creates clients, lists the trips a client is
registered for, and enrolls or cancels a client's registration for a
trip.  Enrollment runs its checks as separate queries in a fixed order
(client, trip, existing registration, capacity) and stops at the first
failure.

Whether those checks and the final insert share one write transaction
depends on ``atomic_registration``.  With it enabled, ``BEGIN
IMMEDIATE`` takes the SQLite write lock before the first check, so
concurrent enrollments for the same trip are serialized and the trip's
``MaxPeople`` bound holds.  With it disabled, two requests can both see
a free seat and both insert.
"""

import logging
import sqlite3
from datetime import date
from typing import List, Optional

from travel_agency_api.app.core.db import ConnectionFactory
from travel_agency_api.app.core.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from travel_agency_api.app.schemas.client import ClientCreate, ClientTripRead


logger = logging.getLogger(__name__)


def registration_stamp(today: Optional[date] = None) -> int:
    """Return ``today`` as a ``YYYYMMDD`` integer, as stored in ``Client_Trip``."""
    today = today or date.today()
    return int(today.strftime("%Y%m%d"))


class ClientService:
    """Service for managing clients and their trip registrations."""

    def __init__(self, connections: ConnectionFactory, atomic_registration: bool = True) -> None:
        self.connections = connections
        self.atomic_registration = atomic_registration

    # ------------------------------------------------------------------
    # Lookups shared by the operations below.  Each one is a single query.
    # ------------------------------------------------------------------

    @staticmethod
    def _client_exists(cursor: sqlite3.Cursor, client_id: int) -> bool:
        row = cursor.execute(
            "SELECT 1 FROM Client WHERE IdClient = ?",
            (client_id,),
        ).fetchone()
        return row is not None

    @staticmethod
    def _trip_capacity(cursor: sqlite3.Cursor, trip_id: int) -> Optional[int]:
        row = cursor.execute(
            "SELECT MaxPeople FROM Trip WHERE IdTrip = ?",
            (trip_id,),
        ).fetchone()
        return row["MaxPeople"] if row else None

    @staticmethod
    def _is_registered(cursor: sqlite3.Cursor, client_id: int, trip_id: int) -> bool:
        row = cursor.execute(
            "SELECT 1 FROM Client_Trip WHERE IdClient = ? AND IdTrip = ?",
            (client_id, trip_id),
        ).fetchone()
        return row is not None

    @staticmethod
    def _count_registrations(cursor: sqlite3.Cursor, trip_id: int) -> int:
        row = cursor.execute(
            "SELECT COUNT(*) AS total FROM Client_Trip WHERE IdTrip = ?",
            (trip_id,),
        ).fetchone()
        return row["total"]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_client_trips(self, client_id: int) -> List[ClientTripRead]:
        """Return the trips a client is registered for, ordered by start date.

        Raises ``NotFoundError`` if the client does not exist.  An empty
        list means the client exists but has no registrations.
        """
        with self.connections.connection() as conn:
            cursor = conn.cursor()
            if not self._client_exists(cursor, client_id):
                raise NotFoundError(f"Client with ID {client_id} not found")
            rows = cursor.execute(
                """
                SELECT t.IdTrip, t.Name, t.Description, t.DateFrom, t.DateTo, t.MaxPeople,
                       ct.RegisteredAt, ct.PaymentDate
                FROM Client_Trip ct
                JOIN Trip t ON ct.IdTrip = t.IdTrip
                WHERE ct.IdClient = ?
                ORDER BY t.DateFrom
                """,
                (client_id,),
            ).fetchall()
        return [
            ClientTripRead(
                id_trip=row["IdTrip"],
                name=row["Name"],
                description=row["Description"],
                date_from=row["DateFrom"],
                date_to=row["DateTo"],
                max_people=row["MaxPeople"],
                registered_at=row["RegisteredAt"],
                payment_date=row["PaymentDate"],
            )
            for row in rows
        ]

    async def create_client(self, data: ClientCreate) -> int:
        """Insert a client and return its new identifier.

        First name, last name and email are required and must not be
        blank; they are checked in that order.  A duplicate email is
        reported as ``ConflictError`` without any datastore detail.
        """
        for label, value in (
            ("FirstName", data.first_name),
            ("LastName", data.last_name),
            ("Email", data.email),
        ):
            if value is None or not value.strip():
                raise ValidationError(f"{label} is required")

        with self.connections.connection() as conn:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO Client (FirstName, LastName, Email, Telephone, Pesel)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (data.first_name, data.last_name, data.email, data.telephone, data.pesel),
                )
                client_id = cursor.lastrowid
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                if exc.sqlite_errorname == "SQLITE_CONSTRAINT_UNIQUE":
                    logger.info("Rejected client with duplicate email %s", data.email)
                    raise ConflictError("A client with this email already exists") from exc
                raise
        logger.info("Created client %s (%s)", client_id, data.email)
        return client_id

    async def register_client_for_trip(self, client_id: int, trip_id: int) -> str:
        """Enroll a client into a trip and return a confirmation message.

        Raises
        ------
        NotFoundError
            If the client or the trip does not exist.
        ConflictError
            If the client is already registered for the trip.
        ValidationError
            If the trip already has ``MaxPeople`` registrations.
        """
        with self.connections.connection() as conn:
            cursor = conn.cursor()
            if self.atomic_registration:
                cursor.execute("BEGIN IMMEDIATE")
            try:
                if not self._client_exists(cursor, client_id):
                    raise NotFoundError(f"Client with ID {client_id} not found")

                max_people = self._trip_capacity(cursor, trip_id)
                if max_people is None:
                    raise NotFoundError(f"Trip with ID {trip_id} not found")

                if self._is_registered(cursor, client_id, trip_id):
                    raise ConflictError("Client is already registered for this trip")

                if self._count_registrations(cursor, trip_id) >= max_people:
                    logger.info("Trip %s is full, rejected client %s", trip_id, client_id)
                    raise ValidationError("This trip has reached its maximum number of participants")

                cursor.execute(
                    "INSERT INTO Client_Trip (IdClient, IdTrip, RegisteredAt) VALUES (?, ?, ?)",
                    (client_id, trip_id, registration_stamp()),
                )
                conn.commit()
            except Exception:
                conn.rollback()
                raise
        logger.info("Registered client %s for trip %s", client_id, trip_id)
        return f"Client {client_id} successfully registered for trip {trip_id}"

    async def cancel_registration(self, client_id: int, trip_id: int) -> str:
        """Remove a client's registration for a trip.

        Raises ``NotFoundError`` if there is no such registration, and
        ``InternalError`` if the delete removes nothing even though the
        registration was found a moment earlier.
        """
        with self.connections.connection() as conn:
            cursor = conn.cursor()
            if not self._is_registered(cursor, client_id, trip_id):
                raise NotFoundError(
                    f"Registration not found for client {client_id} and trip {trip_id}"
                )
            cursor.execute(
                "DELETE FROM Client_Trip WHERE IdClient = ? AND IdTrip = ?",
                (client_id, trip_id),
            )
            if cursor.rowcount <= 0:
                conn.rollback()
                logger.warning(
                    "Registration of client %s on trip %s vanished before delete", client_id, trip_id
                )
                raise InternalError("Failed to cancel registration")
            conn.commit()
        logger.info("Cancelled registration of client %s on trip %s", client_id, trip_id)
        return f"Registration for client {client_id} on trip {trip_id} has been canceled"
