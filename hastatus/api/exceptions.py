"""Exception hierarchy for HTTP request handling.

Handlers translate these into plain-text error responses with the status
code each class carries.
"""


class ApiError(Exception):
    """Base exception for request handling errors.

    Subclasses set ``status`` to the HTTP status code the error maps to.
    """

    status = 500


class RequestValidationError(ApiError):
    """Request validation failed.

    Raised when:
    - A required query parameter is missing or empty
    - The sensor list is empty or has more entries than the mode allows
    - width/height is not an integer or is outside the accepted range
    - An entity id is not in <domain>.<object_id> form

    Should result in HTTP 400 Bad Request response.
    """

    status = 400

