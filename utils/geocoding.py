import logging

import requests

import config
from utils.distance import haversine_km
from utils.errors import MALFORMED_RESPONSE, NotFound, UpstreamFailure

logger = logging.getLogger(__name__)


def get_coordinates(address):
    """Convert an address (e.g. 'Lyon, France') to (lat, lng) using the Google Geocoding API"""
    params = {
        'address': address,
        'key': config.GOOGLE_MAPS_API_KEY
    }
    try:
        response = requests.get(config.GEOCODING_API_URL, params=params, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Geocoding error for '{address}': {str(e)}")
        raise UpstreamFailure(f"failed to call geocoding API: {str(e)}") from e

    try:
        status = data.get('status')
        results = data.get('results') or []
    except AttributeError as e:
        logger.error(f"Malformed geocoding response for '{address}'")
        raise UpstreamFailure("malformed geocoding response") from e

    if status not in (None, 'OK', 'ZERO_RESULTS'):
        logger.error(f"Geocoding API returned status {status} for '{address}'")
        raise UpstreamFailure(f"geocoding API returned status {status}")

    if not results:
        raise NotFound(f"no results found for address: {address}")

    try:
        location = results[0]['geometry']['location']
        return float(location['lat']), float(location['lng'])
    except MALFORMED_RESPONSE as e:
        logger.error(f"Malformed geocoding result for '{address}': {str(e)}")
        raise UpstreamFailure("malformed geocoding response") from e


def calculate_distance(start_address, end_address):
    try:
        start_lat, start_lng = get_coordinates(start_address)
    except NotFound as e:
        raise NotFound(f"failed to get start coordinates: {e.message}") from e
    try:
        end_lat, end_lng = get_coordinates(end_address)
    except NotFound as e:
        raise NotFound(f"failed to get end coordinates: {e.message}") from e

    distance = haversine_km(start_lat, start_lng, end_lat, end_lng)
    logger.info(f"Resolved distance {distance:.2f} km between '{start_address}' and '{end_address}'")
    return distance
