# Run with: python -m scripts.init_transportation_modes
import logging

from models.db import db_cursor
from utils.errors import UpstreamFailure

logger = logging.getLogger(__name__)

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS users (
        user_id INT AUTO_INCREMENT PRIMARY KEY,
        email VARCHAR(255) NOT NULL UNIQUE,
        username VARCHAR(100) NOT NULL UNIQUE,
        password_hash VARCHAR(255) NOT NULL,
        google_id VARCHAR(255),
        github_id VARCHAR(255),
        created_at DATETIME NOT NULL,
        updated_at DATETIME NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transportation_modes (
        mode_id INT PRIMARY KEY,
        mode_name VARCHAR(100) NOT NULL,
        description VARCHAR(255)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS trips (
        trip_id INT AUTO_INCREMENT PRIMARY KEY,
        user_id INT NOT NULL,
        start_address VARCHAR(255),
        end_address VARCHAR(255),
        distance_km DECIMAL(10, 3) NOT NULL,
        mode_id INT NOT NULL,
        carbon_impact_kg DECIMAL(12, 4) NOT NULL,
        trip_date DATE NOT NULL,
        created_at DATETIME NOT NULL,
        INDEX idx_trips_user (user_id),
        FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE CASCADE
    )
    """
]

# mode_id matches the transport id used by the Impact CO2 API
DEFAULT_MODES = [
    {'mode_id': 1, 'mode_name': 'Plane', 'description': 'Short-haul flight'},
    {'mode_id': 2, 'mode_name': 'High-speed train', 'description': 'TGV'},
    {'mode_id': 3, 'mode_name': 'Intercity train', 'description': None},
    {'mode_id': 4, 'mode_name': 'Car', 'description': 'Petrol or diesel car'},
    {'mode_id': 5, 'mode_name': 'Electric car', 'description': None},
    {'mode_id': 6, 'mode_name': 'Coach', 'description': 'Long-distance bus'},
    {'mode_id': 7, 'mode_name': 'Bike or walking', 'description': 'No emissions'},
    {'mode_id': 8, 'mode_name': 'Electric bike', 'description': None},
    {'mode_id': 9, 'mode_name': 'Bus', 'description': 'Combustion engine city bus'},
    {'mode_id': 10, 'mode_name': 'Tramway', 'description': None},
    {'mode_id': 11, 'mode_name': 'Metro', 'description': None},
    {'mode_id': 12, 'mode_name': 'Scooter', 'description': 'Light combustion scooter or motorbike'},
    {'mode_id': 13, 'mode_name': 'Motorbike', 'description': None},
    {'mode_id': 14, 'mode_name': 'Suburban train', 'description': 'RER or Transilien'},
    {'mode_id': 15, 'mode_name': 'Regional train', 'description': 'TER'},
    {'mode_id': 16, 'mode_name': 'Electric bus', 'description': None},
    {'mode_id': 17, 'mode_name': 'Electric scooter', 'description': 'Kick scooter'}
]


def init_transportation_modes():
    with db_cursor(dictionary=False, commit=True) as cursor:
        for statement in SCHEMA:
            cursor.execute(statement)

        # Check if modes already exist
        cursor.execute("SELECT COUNT(*) FROM transportation_modes")
        count = cursor.fetchone()[0]

        if count == 0:
            for mode in DEFAULT_MODES:
                cursor.execute("""
                    INSERT INTO transportation_modes (mode_id, mode_name, description)
                    VALUES (%s, %s, %s)
                """, (mode['mode_id'], mode['mode_name'], mode['description']))
            logger.info(f"Successfully initialized {len(DEFAULT_MODES)} transportation modes")
        else:
            logger.info("Transportation modes already exist, skipping initialization")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    try:
        init_transportation_modes()
    except UpstreamFailure as e:
        logger.error(f"Error initializing transportation modes: {e.message}")
        raise SystemExit(1)
