"""
SQLite database integration.

This module provides the ``ConnectionFactory`` handed to every service
and the FastAPI dependency that exposes it to route handlers.  Each
operation opens its own short-lived connection through
``ConnectionFactory.connection`` and closes it on exit; no connection
is shared between requests.

The schema (``Client``, ``Trip``, ``Country`` and the ``Client_Trip``
and ``Country_Trip`` join tables) is owned by the database, not by this
service.  ``create_schema`` exists to bootstrap a development database
or a test fixture and only ever runs ``CREATE TABLE IF NOT EXISTS``.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .errors import InternalError


logger = logging.getLogger(__name__)


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS Country (
    IdCountry INTEGER PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS Trip (
    IdTrip INTEGER PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL,
    Description TEXT,
    DateFrom TIMESTAMP NOT NULL,
    DateTo TIMESTAMP NOT NULL,
    MaxPeople INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS Client (
    IdClient INTEGER PRIMARY KEY AUTOINCREMENT,
    FirstName TEXT NOT NULL,
    LastName TEXT NOT NULL,
    Email TEXT NOT NULL UNIQUE,
    Telephone TEXT,
    Pesel TEXT
);

CREATE TABLE IF NOT EXISTS Country_Trip (
    IdCountry INTEGER NOT NULL,
    IdTrip INTEGER NOT NULL,
    PRIMARY KEY (IdCountry, IdTrip),
    FOREIGN KEY(IdCountry) REFERENCES Country(IdCountry),
    FOREIGN KEY(IdTrip) REFERENCES Trip(IdTrip)
);

CREATE TABLE IF NOT EXISTS Client_Trip (
    IdClient INTEGER NOT NULL,
    IdTrip INTEGER NOT NULL,
    RegisteredAt INTEGER NOT NULL,
    PaymentDate INTEGER,
    PRIMARY KEY (IdClient, IdTrip),
    FOREIGN KEY(IdClient) REFERENCES Client(IdClient),
    FOREIGN KEY(IdTrip) REFERENCES Trip(IdTrip)
);
"""


def resolve_database_path(database_url: str) -> str:
    """Compute the path handed to ``sqlite3.connect``.

    ``:memory:``, ``file:`` URIs and absolute paths are returned as is.
    Relative paths are resolved against the project root.
    """
    if database_url == ":memory:" or database_url.startswith("file:"):
        return database_url
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # travel_agency_api/
    return str((base_dir / database_url).resolve())


class ConnectionFactory:
    """Hands out a fresh SQLite connection per operation."""

    def __init__(self, database_url: str, timeout: float = 5.0) -> None:
        self.database_path = resolve_database_path(database_url)
        self.timeout = timeout

    def connect(self) -> sqlite3.Connection:
        """Open a new connection.

        Rows are returned as ``sqlite3.Row`` so columns can be read by
        name.  Foreign key enforcement is switched on for the lifetime
        of the connection, since SQLite leaves it off by default.
        """
        conn = sqlite3.connect(
            self.database_path,
            timeout=self.timeout,
            uri=self.database_path.startswith("file:"),
        )
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection and close it on exit.

        Any ``sqlite3.Error`` that escapes the block is re-raised as
        ``InternalError``.  Callers that need to interpret a specific
        datastore error must catch it inside the block.
        """
        try:
            conn = self.connect()
        except sqlite3.Error as exc:
            logger.exception("Could not open database %s", self.database_path)
            raise InternalError(str(exc)) from exc
        try:
            yield conn
        except sqlite3.Error as exc:
            logger.exception("Database error")
            raise InternalError(str(exc)) from exc
        finally:
            conn.close()

    def create_schema(self) -> None:
        """Create any missing tables."""
        with self.connection() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        logger.info("Schema ensured in %s", self.database_path)

    def ping(self) -> None:
        """Run a trivial query, raising ``InternalError`` if the database is unusable."""
        with self.connection() as conn:
            conn.execute("SELECT 1").fetchone()


def get_connection_factory(request: Request) -> ConnectionFactory:
    """FastAPI dependency returning the factory attached to the running app."""
    return request.app.state.connections
