"""Unit tests for the error hierarchy: status codes come from the class."""
import pytest

from jsonstash.errors import (
    BadRequestError,
    ItemNotFoundError,
    JsonStashError,
    StorageError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    "error, status_code, message",
    [
        (ItemNotFoundError("abc"), 404, "Not Found"),
        (BadRequestError(), 400, "Bad Request - Invalid JSON"),
        (UnauthorizedError(), 401, "Unauthorized"),
        (JsonStashError("boom"), 500, "boom"),
    ],
)
def test_status_and_message(error, status_code, message):
    assert error.status_code == status_code
    assert error.message == message
    assert str(error) == message


def test_storage_error_is_500_and_keeps_item_id():
    error = StorageError("abc", "bad token")
    assert error.status_code == 500
    assert error.item_id == "abc"
    assert "bad token" in error.message


def test_status_code_is_not_a_constructor_argument():
    with pytest.raises(TypeError):
        JsonStashError("boom", 418)
