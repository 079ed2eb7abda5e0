"""
Aggregations over a snapshot of one user's trips.

Nothing here touches the database except through the mode lookup passed to
aggregate_by_mode, so every function can be called with a plain list of trips.
"""
import logging
from datetime import datetime

import pytz
from dateutil.relativedelta import relativedelta

from utils.errors import DataIntegrity, NotFound, InvalidInput

logger = logging.getLogger(__name__)

DAY = 'day'
MONTH = 'month'

DAYS_IN_SERIES = 366
MONTHS_IN_SERIES = 12


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def window_start(now=None):
    """Trips must be strictly after this date to count; moves with the clock."""
    now = now or datetime.now(pytz.utc)
    return _as_date(now - relativedelta(years=1))


def _cumulate(raw):
    points = []
    running = 0.0
    for index, value in raw:
        running += value
        points.append({'x': index, 'y': running})
    return points


def impact_series(trips, granularity=DAY, now=None):
    """
    Running total of carbon impact over the last year.

    Daily series: 366 points, x = day of year 1..366.
    Monthly series: 13 points, a zero origin at x = 0 then x = month 1..12.
    Buckets without trips are still emitted, so a user without trips gets
    a full series of zeros.
    """
    if granularity == DAY:
        buckets = {day: 0.0 for day in range(1, DAYS_IN_SERIES + 1)}
    elif granularity == MONTH:
        buckets = {month: 0.0 for month in range(0, MONTHS_IN_SERIES + 1)}
    else:
        raise InvalidInput(f"unknown granularity: {granularity}")

    cutoff = window_start(now)
    for trip in trips:
        trip_date = _as_date(trip.trip_date)
        if trip_date <= cutoff:
            continue
        if granularity == DAY:
            key = trip_date.timetuple().tm_yday
        else:
            key = trip_date.month
        buckets[key] += trip.carbon_impact_kg

    return _cumulate(sorted(buckets.items()))


def daily_impact_series(trips, now=None):
    return impact_series(trips, DAY, now)


def monthly_impact_series(trips, now=None):
    return impact_series(trips, MONTH, now)


def aggregate_by_mode(trips, get_mode):
    """
    Group trips by transport mode.

    get_mode(mode_id) is called at most once per mode. A trip pointing at a mode
    the store no longer has raises DataIntegrity.
    """
    modes = {}
    totals = {}
    for trip in trips:
        if trip.mode_id not in modes:
            try:
                modes[trip.mode_id] = get_mode(trip.mode_id)
            except NotFound as e:
                logger.error(f"Trip {trip.trip_id} references missing mode {trip.mode_id}")
                raise DataIntegrity(
                    f"trip {trip.trip_id} references unknown transportation mode {trip.mode_id}"
                ) from e
            mode = modes[trip.mode_id]
            totals[trip.mode_id] = {
                'mode_id': trip.mode_id,
                'mode_name': mode.mode_name,
                'description': mode.description,
                'total_trips': 0,
                'total_impact': 0.0,
                'total_distance': 0.0
            }

        entry = totals[trip.mode_id]
        entry['total_trips'] += 1
        entry['total_impact'] += trip.carbon_impact_kg
        entry['total_distance'] += trip.distance_km

    return list(totals.values())


def total_impact(trips):
    return sum((trip.carbon_impact_kg for trip in trips), 0.0)
