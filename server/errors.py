from werkzeug.exceptions import (
    BadRequest,
    Forbidden,
    ServiceUnavailable,
    UnprocessableEntity,
)


class Unauthenticated(Forbidden):
    """No session cookie, or one that resolves to nobody."""

    description = "Forbidden"


class ForgeryTokenInvalid(UnprocessableEntity):
    description = "Missing or invalid authenticity token."


class ValidationError(BadRequest):
    description = "A note needs a title and a body."


class StorageUnavailable(ServiceUnavailable):
    description = "storage unavailable"
