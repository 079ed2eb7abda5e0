from datetime import datetime, timedelta
from functools import wraps

import jwt
import pytz
from flask import request, g

import config
from utils.errors import AuthenticationFailed

TOKEN_COOKIE = 'jwt'


def issue_token(user_id):
    now = datetime.now(pytz.utc)
    payload = {
        'user_id': user_id,
        'iat': now,
        'exp': now + timedelta(hours=config.JWT_EXPIRATION_HOURS)
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_token(token):
    """Returns the user id carried by a token, or raises AuthenticationFailed."""
    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationFailed("token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationFailed("unauthorized") from e

    user_id = payload.get('user_id')
    if not isinstance(user_id, int) or user_id <= 0:
        raise AuthenticationFailed("unauthorized")
    return user_id


def token_from_request():
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        auth_header = request.headers.get('Authorization', '')
        if auth_header.startswith('Bearer '):
            token = auth_header[len('Bearer '):].strip()
    return token


# Helper: auth decorator
def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = token_from_request()
        if not token:
            raise AuthenticationFailed("unauthorized")
        g.user_id = decode_token(token)
        return f(*args, **kwargs)
    return wrapper
