"""Exception hierarchy for item storage and the HTTP layer.

Each error carries the HTTP status code and the short message that ends up in
the ``{"error": ...}`` response body.
"""


class JsonStashError(Exception):
    """Base exception for all expected service errors.

    Attributes:
        message: Human-readable message, safe to return to clients
        status_code: HTTP status code for API responses
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ItemNotFoundError(JsonStashError):
    """Raised when an item is absent from the store consulted by an operation."""

    status_code = 404

    def __init__(self, item_id: str) -> None:
        super().__init__("Not Found")
        self.item_id = item_id


class BadRequestError(JsonStashError):
    """Raised when a request body cannot be used (malformed JSON, wrong shape)."""

    status_code = 400

    def __init__(self, message: str = "Bad Request - Invalid JSON") -> None:
        super().__init__(message)


class UnauthorizedError(JsonStashError):
    """Raised when the Authorization header is missing or wrong."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class StorageError(JsonStashError):
    """Raised when an item file exists but cannot be decoded.

    Never exposed verbatim: the API answers with a generic 500.
    """

    def __init__(self, item_id: str, reason: str) -> None:
        super().__init__(f"Item file for {item_id} is unreadable: {reason}")
        self.item_id = item_id
