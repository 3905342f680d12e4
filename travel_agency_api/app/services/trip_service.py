"""
Read-only queries over trips.

Trips are joined to their countries through ``Country_Trip`` and the
country names are collapsed into a single comma-separated string.  The
join is an inner join: a trip with no country associations does not
appear in the listing.
"""

from typing import List

from travel_agency_api.app.core.db import ConnectionFactory
from travel_agency_api.app.schemas.trip import TripRead


# SQLite has no ordered group_concat before 3.44.  Feeding it from an
# ordered subquery keeps country names sorted in current SQLite releases,
# though SQLite documents the concatenation order as arbitrary.
LIST_TRIPS_SQL = """
    SELECT IdTrip, Name, Description, DateFrom, DateTo, MaxPeople,
           group_concat(CountryName, ', ') AS Countries
    FROM (
        SELECT t.IdTrip, t.Name, t.Description, t.DateFrom, t.DateTo, t.MaxPeople,
               c.Name AS CountryName
        FROM Trip t
        JOIN Country_Trip ct ON t.IdTrip = ct.IdTrip
        JOIN Country c ON ct.IdCountry = c.IdCountry
        ORDER BY t.IdTrip, c.Name
    )
    GROUP BY IdTrip, Name, Description, DateFrom, DateTo, MaxPeople
    ORDER BY DateFrom
"""


class TripService:
    """Service for querying trips."""

    def __init__(self, connections: ConnectionFactory) -> None:
        self.connections = connections

    async def list_trips(self) -> List[TripRead]:
        """Return every trip with its countries, earliest start date first."""
        with self.connections.connection() as conn:
            rows = conn.execute(LIST_TRIPS_SQL).fetchall()
        return [
            TripRead(
                id_trip=row["IdTrip"],
                name=row["Name"],
                description=row["Description"],
                date_from=row["DateFrom"],
                date_to=row["DateTo"],
                max_people=row["MaxPeople"],
                countries=row["Countries"],
            )
            for row in rows
        ]
