from flask import request

from utils.errors import InvalidInput


def json_body():
    """The request's JSON object; anything else is InvalidInput."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("invalid request body")
    return data
