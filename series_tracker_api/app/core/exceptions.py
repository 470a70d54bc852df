"""
Domain errors raised by the service layer.

Both errors derive from ``ValueError`` so callers that only care about
"the request could not be applied" can catch a single type.  Endpoints
translate them into HTTP responses: ``NotFoundError`` becomes 404 and
``ConflictError`` becomes 400.
"""


class NotFoundError(ValueError):
    """A user, series or episode referenced by the request does not exist."""


class ConflictError(ValueError):
    """The request would create a second user with an existing username."""
