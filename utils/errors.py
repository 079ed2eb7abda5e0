class TrackerError(Exception):
    """Base error for the tracker. Carries the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class InvalidInput(TrackerError):
    """Missing or malformed request fields."""
    status_code = 400


class AuthenticationFailed(TrackerError):
    """Bad credentials or a missing/invalid/expired token."""
    status_code = 401


class NotFound(TrackerError):
    """Unknown user, trip or mode, or an empty result from an external lookup."""
    status_code = 404


class DataIntegrity(TrackerError):
    """Stored data references something that no longer exists."""
    status_code = 500


class UpstreamFailure(TrackerError):
    """Database or external API failure. The original exception is chained."""
    status_code = 502


# Raised while picking fields out of a decoded JSON body that has the wrong shape
MALFORMED_RESPONSE = (KeyError, IndexError, TypeError, AttributeError, ValueError)
