import logging
import math
from datetime import datetime, date

import pytz
from dateutil import parser

from models.db import db_cursor
from models.user import User
from utils.co2_calculator import get_carbon_impact
from utils.errors import InvalidInput, NotFound
from utils.geocoding import calculate_distance

logger = logging.getLogger(__name__)

TRIP_COLUMNS = ("trip_id, user_id, start_address, end_address, distance_km, mode_id, "
                "carbon_impact_kg, trip_date, created_at")


def parse_trip_date(value):
    """Calendar date of a trip; today when nothing was sent."""
    if value in (None, ''):
        return datetime.now(pytz.utc).date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parser.parse(str(value)).date()
    except (ValueError, OverflowError) as e:
        raise InvalidInput(f"failed to convert trip date: {value}") from e


def _to_float(value, field):
    if value in (None, ''):
        return 0.0
    if isinstance(value, bool):
        raise InvalidInput(f"invalid {field}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"invalid {field}") from e
    if not math.isfinite(number):
        raise InvalidInput(f"invalid {field}")
    return number


def _to_int(value, field):
    if value in (None, ''):
        return 0
    if isinstance(value, bool):
        raise InvalidInput(f"invalid {field}")
    # 4.9 is not a mode id
    if isinstance(value, float) and not value.is_integer():
        raise InvalidInput(f"invalid {field}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"invalid {field}") from e


class Trip:
    def __init__(self, trip_id, user_id, mode_id, distance_km, carbon_impact_kg, trip_date,
                 start_address=None, end_address=None, created_at=None):
        self.trip_id = trip_id
        self.user_id = user_id
        self.start_address = start_address
        self.end_address = end_address
        self.distance_km = distance_km
        self.mode_id = mode_id
        self.carbon_impact_kg = carbon_impact_kg
        self.trip_date = trip_date
        self.created_at = created_at or datetime.now(pytz.utc)

    def to_dict(self):
        return {
            'trip_id': self.trip_id,
            'user_id': self.user_id,
            'start_address': self.start_address,
            'end_address': self.end_address,
            'distance_km': self.distance_km,
            'mode_id': self.mode_id,
            'carbon_impact_kg': self.carbon_impact_kg,
            'trip_date': self.trip_date.isoformat() if self.trip_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    @staticmethod
    def _from_row(row):
        row = dict(row)
        for key in ('distance_km', 'carbon_impact_kg'):
            if row.get(key) is not None:
                row[key] = float(row[key])
        return Trip(**row)

    @staticmethod
    def resolve(user_id, mode_id, distance_km=0, start_address=None, end_address=None, trip_date=None):
        """
        Builds an unsaved Trip with distance and carbon impact filled in.

        A non-zero distance is used as given. A zero or missing distance needs both
        addresses, which are geocoded and the great-circle distance between them used.
        """
        distance_km = _to_float(distance_km, 'distance_km')
        mode_id = _to_int(mode_id, 'mode_id')
        start_address = (start_address or '').strip()
        end_address = (end_address or '').strip()

        if distance_km < 0:
            raise InvalidInput("distance_km must not be negative")
        if distance_km == 0 and (not start_address or not end_address):
            raise InvalidInput("no distance or address provided")
        if mode_id <= 0:
            raise InvalidInput("mode_id is required")

        trip_date = parse_trip_date(trip_date)

        if distance_km == 0:
            distance_km = calculate_distance(start_address, end_address)
        else:
            start_address = None
            end_address = None

        carbon_impact_kg = get_carbon_impact(mode_id, distance_km)

        return Trip(
            trip_id=None,
            user_id=user_id,
            mode_id=mode_id,
            distance_km=distance_km,
            carbon_impact_kg=carbon_impact_kg,
            trip_date=trip_date,
            start_address=start_address,
            end_address=end_address
        )

    @staticmethod
    def register(user_id, mode_id, distance_km=0, start_address=None, end_address=None, trip_date=None):
        trip = Trip.resolve(user_id, mode_id, distance_km, start_address, end_address, trip_date)
        trip.trip_id = Trip.create(trip)
        logger.info(f"Registered trip {trip.trip_id} for user {user_id}: "
                    f"{trip.distance_km:.2f} km, {trip.carbon_impact_kg:.3f} kg CO2e")
        return trip

    @staticmethod
    def create(trip):
        with db_cursor(commit=True) as cursor:
            cursor.execute("""
                INSERT INTO trips (user_id, start_address, end_address, distance_km, mode_id, carbon_impact_kg, trip_date, created_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            """, (trip.user_id, trip.start_address, trip.end_address, trip.distance_km, trip.mode_id,
                  trip.carbon_impact_kg, trip.trip_date, trip.created_at))
            trip_id = cursor.lastrowid
        return trip_id

    @staticmethod
    def find_by_id(trip_id):
        with db_cursor() as cursor:
            cursor.execute(f"SELECT {TRIP_COLUMNS} FROM trips WHERE trip_id = %s", (trip_id,))
            data = cursor.fetchone()
        if not data:
            raise NotFound("trip not found")
        return Trip._from_row(data)

    @staticmethod
    def find_for_user(trip_id, user_id):
        """A user's own trip; someone else's trip looks the same as a missing one."""
        trip = Trip.find_by_id(trip_id)
        if trip.user_id != user_id:
            raise NotFound("trip not found")
        return trip

    @staticmethod
    def find_by_user(user_id):
        User.get(user_id)
        with db_cursor() as cursor:
            cursor.execute(f"SELECT {TRIP_COLUMNS} FROM trips WHERE user_id = %s", (user_id,))
            rows = cursor.fetchall()
        return [Trip._from_row(row) for row in rows]

    @staticmethod
    def update(trip):
        with db_cursor(commit=True) as cursor:
            cursor.execute("""
                UPDATE trips SET user_id = %s, start_address = %s, end_address = %s, distance_km = %s,
                    mode_id = %s, carbon_impact_kg = %s, trip_date = %s, created_at = %s
                WHERE trip_id = %s
            """, (trip.user_id, trip.start_address, trip.end_address, trip.distance_km, trip.mode_id,
                  trip.carbon_impact_kg, trip.trip_date, trip.created_at, trip.trip_id))

    @staticmethod
    def replace(trip_id, user_id, mode_id, distance_km=0, start_address=None, end_address=None, trip_date=None):
        """Full replacement of a user's trip; distance and impact are resolved again."""
        existing = Trip.find_for_user(trip_id, user_id)
        trip = Trip.resolve(user_id, mode_id, distance_km, start_address, end_address, trip_date)
        trip.trip_id = existing.trip_id
        trip.created_at = existing.created_at
        Trip.update(trip)
        logger.info(f"Updated trip {trip_id} for user {user_id}")
        return trip

    @staticmethod
    def delete(trip_id):
        with db_cursor(commit=True) as cursor:
            cursor.execute("DELETE FROM trips WHERE trip_id = %s", (trip_id,))
            deleted = cursor.rowcount
        if not deleted:
            raise NotFound("trip not found")
