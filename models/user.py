import logging
from datetime import datetime

import pytz
from werkzeug.security import generate_password_hash, check_password_hash

from models.db import db_cursor
from utils.errors import AuthenticationFailed, InvalidInput, NotFound

logger = logging.getLogger(__name__)

USER_COLUMNS = "user_id, email, username, password_hash, google_id, github_id, created_at, updated_at"


class User:
    def __init__(self, user_id, email, username, password_hash, google_id=None, github_id=None,
                 created_at=None, updated_at=None):
        self.user_id = user_id
        self.email = email
        self.username = username
        self.password_hash = password_hash
        self.google_id = google_id
        self.github_id = github_id
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'email': self.email,
            'username': self.username,
            'google_id': self.google_id,
            'github_id': self.github_id,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }

    @staticmethod
    def create(email, username, password_hash, google_id=None, github_id=None):
        now = datetime.now(pytz.utc)
        with db_cursor(commit=True) as cursor:
            cursor.execute("""
                INSERT INTO users (email, username, password_hash, google_id, github_id, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
            """, (email, username, password_hash, google_id, github_id, now, now))
            user_id = cursor.lastrowid
        return user_id

    @staticmethod
    def _find_one(column, value):
        with db_cursor() as cursor:
            cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE {column} = %s", (value,))
            data = cursor.fetchone()
        if data:
            return User(**data)
        return None

    @staticmethod
    def find_by_id(user_id):
        return User._find_one('user_id', user_id)

    @staticmethod
    def find_by_email(email):
        return User._find_one('email', email)

    @staticmethod
    def find_by_username(username):
        return User._find_one('username', username)

    @staticmethod
    def get(user_id):
        user = User.find_by_id(user_id)
        if not user:
            raise NotFound("user not found")
        return user

    @staticmethod
    def register(email, username, password):
        if not email:
            raise InvalidInput("email is empty")
        if not username:
            raise InvalidInput("username is empty")
        if not password:
            raise InvalidInput("password is empty")

        if User.find_by_email(email):
            raise InvalidInput("email already exists")
        if User.find_by_username(username):
            raise InvalidInput("username already exists")

        user_id = User.create(email, username, generate_password_hash(password))
        logger.info(f"Registered user {user_id}")
        return user_id

    @staticmethod
    def check_credentials(email, password):
        if not email:
            raise InvalidInput("email is empty")

        user = User.find_by_email(email)
        if not user:
            raise AuthenticationFailed("user not found")
        if not password or not check_password_hash(user.password_hash, password):
            raise AuthenticationFailed("incorrect password")
        return user.user_id

    @staticmethod
    def update(user_id, email, username, password=None):
        """Replaces email and username; the password only changes when a new one is given."""
        if not email or not username:
            raise InvalidInput("email and username are required")

        user = User.get(user_id)
        other = User.find_by_email(email)
        if other and other.user_id != user_id:
            raise InvalidInput("email already exists")
        other = User.find_by_username(username)
        if other and other.user_id != user_id:
            raise InvalidInput("username already exists")

        password_hash = generate_password_hash(password) if password else user.password_hash
        with db_cursor(commit=True) as cursor:
            cursor.execute("""
                UPDATE users SET email = %s, username = %s, password_hash = %s, updated_at = %s
                WHERE user_id = %s
            """, (email, username, password_hash, datetime.now(pytz.utc), user_id))

    @staticmethod
    def delete(user_id):
        with db_cursor(commit=True) as cursor:
            cursor.execute("DELETE FROM users WHERE user_id = %s", (user_id,))
            deleted = cursor.rowcount
        if not deleted:
            raise NotFound("user not found")
