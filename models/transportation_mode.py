from models.db import db_cursor
from utils.errors import NotFound


class TransportationMode:
    def __init__(self, mode_id, mode_name, description=None):
        self.mode_id = mode_id
        self.mode_name = mode_name
        self.description = description

    def to_dict(self):
        return {
            'mode_id': self.mode_id,
            'mode_name': self.mode_name,
            'description': self.description
        }

    @staticmethod
    def find_by_id(mode_id):
        with db_cursor() as cursor:
            cursor.execute(
                "SELECT mode_id, mode_name, description FROM transportation_modes WHERE mode_id = %s",
                (mode_id,)
            )
            data = cursor.fetchone()
        if not data:
            raise NotFound(f"mode {mode_id} not found")
        return TransportationMode(**data)

    @staticmethod
    def find_all():
        with db_cursor() as cursor:
            cursor.execute("SELECT mode_id, mode_name, description FROM transportation_modes ORDER BY mode_id")
            rows = cursor.fetchall()
        return [TransportationMode(**row) for row in rows]
