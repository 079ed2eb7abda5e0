import logging

import requests

import config
from utils.errors import MALFORMED_RESPONSE, NotFound, UpstreamFailure

logger = logging.getLogger(__name__)


def get_carbon_impact(mode_id, distance_km):
    """
    Returns the kg CO2e for travelling distance_km with the given Impact CO2 transport id.

    A mode that legitimately emits nothing (walking, cycling) comes back as 0.0;
    an empty result set means the provider does not know the mode and raises NotFound.
    """
    params = {
        'km': f"{distance_km:.2f}",
        'displayAll': 0,
        'transports': mode_id,
        'ignoreRadiativeForcing': 0,
        'occupencyRate': 1,
        'includeConstruction': 0,
        'language': 'fr'
    }
    headers = {}
    if config.IMPACT_CO2_API_KEY:
        headers['Authorization'] = f"Bearer {config.IMPACT_CO2_API_KEY}"

    try:
        response = requests.get(
            config.IMPACT_CO2_API_URL,
            params=params,
            headers=headers,
            timeout=config.REQUEST_TIMEOUT
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Impact CO2 API error for mode {mode_id}: {str(e)}")
        raise UpstreamFailure(f"failed to call Impact CO2 API: {str(e)}") from e

    try:
        results = data.get('data') or []
    except AttributeError as e:
        logger.error(f"Malformed Impact CO2 response for mode {mode_id}")
        raise UpstreamFailure(f"malformed CO2 data returned for transport ID: {mode_id}") from e

    if not results:
        raise NotFound(f"no CO2 data returned for transport ID: {mode_id}")

    try:
        value = results[0]['value']
        if value is None:
            raise ValueError("missing value")
        return float(value)
    except MALFORMED_RESPONSE as e:
        logger.error(f"Malformed Impact CO2 result for mode {mode_id}: {str(e)}")
        raise UpstreamFailure(f"malformed CO2 data returned for transport ID: {mode_id}") from e
