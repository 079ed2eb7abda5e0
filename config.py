import os
from dotenv import load_dotenv

load_dotenv()

DB_CONFIG = {
    'host': os.environ.get('DB_HOST'),
    'port': int(os.environ.get('DB_PORT', 3306)),
    'user': os.environ.get('DB_USER'),
    'password': os.environ.get('DB_PASS'),
    'database': os.environ.get('DB_NAME')
}

GOOGLE_MAPS_API_KEY = os.environ.get('GOOGLE_MAPS_API_KEY', '')
GEOCODING_API_URL = os.environ.get('GEOCODING_API_URL', 'https://maps.googleapis.com/maps/api/geocode/json')

IMPACT_CO2_API_URL = os.environ.get('IMPACT_CO2_API_URL', 'https://impactco2.fr/api/v1/transport')
IMPACT_CO2_API_KEY = os.environ.get('IMPACT_CO2_API_KEY')

# seconds, applied to every outbound HTTP call
REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', 10))

JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', 'default_jwt_secret')
JWT_ALGORITHM = 'HS256'
JWT_EXPIRATION_HOURS = int(os.environ.get('JWT_EXPIRATION_HOURS', 24))

FLASK_SECRET_KEY = os.environ.get('FLASK_SECRET_KEY', 'default_secret_key')

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
PORT = int(os.environ.get('PORT', 5000))
