import logging
from contextlib import contextmanager

import mysql.connector

from config import DB_CONFIG
from utils.errors import UpstreamFailure

logger = logging.getLogger(__name__)


def get_connection():
    return mysql.connector.connect(
        host=DB_CONFIG['host'],
        port=DB_CONFIG['port'],
        user=DB_CONFIG['user'],
        password=DB_CONFIG['password'],
        database=DB_CONFIG['database']
    )


@contextmanager
def db_cursor(dictionary=True, commit=False):
    """Yield a cursor on a fresh connection; driver errors become UpstreamFailure."""
    conn = None
    cursor = None
    try:
        conn = get_connection()
        cursor = conn.cursor(dictionary=dictionary)
        yield cursor
        if commit:
            conn.commit()
    except mysql.connector.Error as e:
        logger.error(f"Database error: {str(e)}")
        if commit and conn is not None and conn.is_connected():
            conn.rollback()
        raise UpstreamFailure(f"database error: {str(e)}") from e
    finally:
        if cursor is not None:
            cursor.close()
        if conn is not None:
            conn.close()
