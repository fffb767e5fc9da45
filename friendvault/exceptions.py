"""Domain errors raised by the service layer.

Each error carries the HTTP status code and the short ``status`` string used in
response envelopes, so the transport layer never has to inspect messages.
"""


class FriendVaultError(Exception):
    status_code = 500
    status = "server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(FriendVaultError):
    """Malformed, missing or empty input."""

    status_code = 400
    status = "invalid_request"


class UnauthorizedError(FriendVaultError):
    """The caller has no rights over the resource."""

    status_code = 401
    status = "unauthorized"


class NotFoundError(FriendVaultError):
    """The resource is absent, or the caller is not a party to it."""

    status_code = 404
    status = "not_found"


class ConflictError(FriendVaultError):
    status_code = 409
    status = "conflict"
